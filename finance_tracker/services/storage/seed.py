"""Seed document used on first run and when stored data is unreadable."""

from datetime import date
from decimal import Decimal
from typing import Optional

from finance_tracker.models.ledger import (
    CreditCard,
    Document,
    Investment,
    Loan,
    Transaction,
    TransactionKind,
)


def seed_document(today: Optional[date] = None) -> Document:
    """
    A small example document so a new user sees something on every screen.

    The salary and rent entries are dated today; the groceries entry is
    an old unpaid expense so the overdue alert has something to show.
    """
    today = today or date.today()
    return Document(
        transactions=(
            Transaction(
                id="1",
                description="Salary",
                amount=Decimal("5000"),
                kind=TransactionKind.INCOME,
                date=today,
                category="Salary",
                is_paid=True,
            ),
            Transaction(
                id="2",
                description="Rent",
                amount=Decimal("1200"),
                kind=TransactionKind.EXPENSE,
                date=today,
                category="Housing",
                is_paid=True,
            ),
            Transaction(
                id="3",
                description="Groceries",
                amount=Decimal("450"),
                kind=TransactionKind.EXPENSE,
                date=date(2023, 10, 20),
                category="Food",
                is_paid=False,
            ),
        ),
        cards=(
            CreditCard(
                id="1",
                name="Nubank",
                limit=Decimal("8000"),
                closing_day=5,
                due_day=12,
                color="#820AD1",
                brand_name="Nubank",
                brand_logo="https://logo.clearbit.com/nubank.com.br",
            ),
            CreditCard(
                id="2",
                name="Inter",
                limit=Decimal("4500"),
                closing_day=10,
                due_day=17,
                color="#FF7A00",
                brand_name="Inter",
                brand_logo="https://logo.clearbit.com/bancointer.com.br",
            ),
        ),
        loans=(
            Loan(
                id="1",
                name="Car Financing",
                total_value=Decimal("45000"),
                start_date=date(2023, 1, 15),
                end_date=date(2026, 1, 15),
                monthly_payment=Decimal("1250"),
                paid_installments=10,
                total_installments=36,
                last_installment_value=Decimal("1250"),
            ),
        ),
        investments=(
            Investment(
                id="1",
                name="Treasury Bonds",
                type="Fixed Income",
                amount_invested=Decimal("10000"),
                current_value=Decimal("10500"),
                date=date(2023, 5, 1),
            ),
        ),
    )
