"""Investment portfolio totals and per-position performance."""

from decimal import Decimal
from typing import Iterable, Optional

from finance_tracker.models.ledger import Investment
from finance_tracker.models.summaries import PortfolioSummary, PositionPerformance, TypeShare


def position_performance(investment: Investment) -> PositionPerformance:
    profit = investment.current_value - investment.amount_invested
    percent: Optional[Decimal] = None
    if investment.amount_invested > 0:
        percent = profit / investment.amount_invested * 100
    return PositionPerformance(
        investment_id=investment.id,
        name=investment.name,
        type=investment.type,
        amount_invested=investment.amount_invested,
        current_value=investment.current_value,
        profit=profit,
        profit_percent=percent,
    )


def compute_portfolio_summary(investments: Iterable[Investment]) -> PortfolioSummary:
    """
    Totals across all positions.

    type_distribution sums current value per type, in order of first
    occurrence, so chart legends stay stable.
    """
    investments = list(investments)
    by_type: dict[str, Decimal] = {}
    for inv in investments:
        by_type[inv.type] = by_type.get(inv.type, Decimal("0")) + inv.current_value

    invested = sum((i.amount_invested for i in investments), Decimal("0"))
    current = sum((i.current_value for i in investments), Decimal("0"))

    return PortfolioSummary(
        total_invested=invested,
        total_current_value=current,
        total_profit=current - invested,
        type_distribution=tuple(TypeShare(type=k, current_value=v) for k, v in by_type.items()),
        positions=tuple(position_performance(i) for i in investments),
    )
