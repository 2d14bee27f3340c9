"""
Shared fixtures for Finance Tracker tests.

Test strategy:
1. Unit tests for the pure engine functions (dates, recurrence, loans, cards)
2. Mutator and validator tests over small hand-built documents
3. Driver tests against in-memory storage (no real user files)
4. File storage tests under pytest's tmp_path only
"""

import itertools
from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.models import (
    CreditCard,
    Investment,
    Loan,
    Transaction,
    TransactionKind,
)


@pytest.fixture
def id_factory():
    """Deterministic ids: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def make_transaction():
    def _make(
        id="t1",
        amount="100",
        kind=TransactionKind.EXPENSE,
        on=date(2024, 3, 10),
        **kwargs,
    ) -> Transaction:
        kwargs.setdefault("description", f"Entry {id}")
        kwargs.setdefault("category", "General")
        return Transaction(
            id=id,
            amount=Decimal(amount),
            kind=kind,
            date=on,
            **kwargs,
        )
    return _make


@pytest.fixture
def card():
    return CreditCard(
        id="c1",
        name="Nubank",
        limit=Decimal("5000"),
        closing_day=5,
        due_day=12,
    )


@pytest.fixture
def loan():
    return Loan(
        id="l1",
        name="Car",
        total_value=Decimal("3250"),
        start_date=date(2023, 1, 15),
        monthly_payment=Decimal("1000"),
        total_installments=3,
        paid_installments=1,
        last_installment_value=Decimal("1250"),
    )


@pytest.fixture
def investment():
    return Investment(
        id="i1",
        name="Treasury Bonds",
        type="Fixed Income",
        amount_invested=Decimal("10000"),
        current_value=Decimal("10500"),
        date=date(2023, 5, 1),
    )
