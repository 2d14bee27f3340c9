"""Tests for the month aggregator."""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.engine.aggregation import (
    compute_month_summary,
    filter_month,
    is_overdue,
)
from finance_tracker.models import TransactionKind


@pytest.fixture
def transactions(make_transaction):
    return [
        make_transaction(
            id="salary", amount="5000", kind=TransactionKind.INCOME,
            on=date(2024, 3, 5), category="Salary", is_paid=True,
        ),
        make_transaction(
            id="rent", amount="1200", on=date(2024, 3, 10), category="Housing", is_paid=True,
        ),
        make_transaction(id="market", amount="300", on=date(2024, 3, 2), category="Food"),
        make_transaction(id="lunch", amount="150", on=date(2024, 3, 20), category="Food"),
        make_transaction(id="feb", amount="999", on=date(2024, 2, 25), category="Food"),
    ]


class TestOverdue:
    """Tests for is_overdue."""

    def test_unpaid_past_expense_is_overdue(self, make_transaction):
        assert is_overdue(make_transaction(on=date(2024, 3, 9)), date(2024, 3, 10))

    def test_today_is_not_overdue(self, make_transaction):
        assert not is_overdue(make_transaction(on=date(2024, 3, 10)), date(2024, 3, 10))

    def test_paid_or_income_is_never_overdue(self, make_transaction):
        today = date(2024, 3, 10)
        assert not is_overdue(make_transaction(on=date(2024, 1, 1), is_paid=True), today)
        assert not is_overdue(
            make_transaction(on=date(2024, 1, 1), kind=TransactionKind.INCOME), today
        )


class TestMonthSummary:
    """Tests for compute_month_summary."""

    def test_totals(self, transactions):
        month = filter_month(transactions, date(2024, 3, 1))

        summary = compute_month_summary(month, transactions, date(2024, 3, 1), date(2024, 3, 15))

        assert summary.income_total == Decimal("5000")
        assert summary.expense_total == Decimal("1650")
        assert summary.balance == Decimal("3350")
        assert summary.transaction_count == 4
        assert summary.period_start == date(2024, 3, 1)
        assert summary.period_end == date(2024, 3, 31)

    def test_repeated_summary_is_identical(self, transactions):
        everything = tuple(transactions)
        snapshot = list(everything)

        first = compute_month_summary(everything, everything, date(2024, 3, 1), date(2024, 3, 15))
        second = compute_month_summary(everything, everything, date(2024, 3, 1), date(2024, 3, 15))

        assert first == second
        assert list(everything) == snapshot

    def test_category_distribution_keeps_first_occurrence_order(self, transactions):
        summary = compute_month_summary(
            transactions, transactions, date(2024, 3, 1), date(2024, 3, 15)
        )

        assert [s.category for s in summary.category_distribution] == ["Housing", "Food"]
        assert summary.category_amount("Food") == Decimal("450")
        assert summary.category_amount("Salary") == Decimal("0")

    def test_daily_flow_is_sorted_and_signed(self, transactions):
        summary = compute_month_summary(
            transactions, transactions, date(2024, 3, 1), date(2024, 3, 15)
        )

        assert [p.date for p in summary.daily_flow] == [
            date(2024, 3, 2),
            date(2024, 3, 5),
            date(2024, 3, 10),
            date(2024, 3, 20),
        ]
        assert [p.amount for p in summary.daily_flow] == [
            Decimal("-300"),
            Decimal("5000"),
            Decimal("-1200"),
            Decimal("-150"),
        ]

    def test_overdue_count_ignores_displayed_month(self, transactions):
        """The alert counts the whole document, whichever month is shown."""
        today = date(2024, 3, 15)

        march = compute_month_summary(transactions, transactions, date(2024, 3, 1), today)
        february = compute_month_summary(transactions, transactions, date(2024, 2, 1), today)
        empty_month = compute_month_summary([], transactions, date(2023, 7, 1), today)

        # market (Mar 2) and feb (Feb 25) are unpaid and in the past
        assert march.overdue_count == 2
        assert february.overdue_count == 2
        assert empty_month.overdue_count == 2
        assert march.has_overdue

    def test_empty_month(self):
        summary = compute_month_summary([], [], date(2024, 3, 1), date(2024, 3, 15))

        assert summary.balance == Decimal("0")
        assert summary.category_distribution == ()
        assert summary.daily_flow == ()
        assert not summary.has_overdue


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
