"""Tests for loan schedule generation and loan progress."""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.engine.loans import (
    FINANCING_CATEGORY,
    compute_loan_progress,
    generate_loan_schedule,
    installment_amount,
)
from finance_tracker.models import TransactionKind


class TestGenerateLoanSchedule:
    """Tests for generate_loan_schedule."""

    def test_schedule_with_last_installment_override(self, loan, id_factory):
        """Three installments, the first prepaid, the last overridden."""
        schedule = generate_loan_schedule(loan, id_factory=id_factory)

        assert [t.date for t in schedule] == [
            date(2023, 1, 15),
            date(2023, 2, 15),
            date(2023, 3, 15),
        ]
        assert [t.amount for t in schedule] == [
            Decimal("1000"),
            Decimal("1000"),
            Decimal("1250"),
        ]
        assert [t.is_paid for t in schedule] == [True, False, False]

    def test_installments_are_linked_expenses(self, loan, id_factory):
        schedule = generate_loan_schedule(loan, id_factory=id_factory)

        for t in schedule:
            assert t.loan_id == "l1"
            assert t.kind == TransactionKind.EXPENSE
            assert t.category == FINANCING_CATEGORY
        assert [t.description for t in schedule] == ["Car (1/3)", "Car (2/3)", "Car (3/3)"]
        assert [t.id for t in schedule] == ["id-1", "id-2", "id-3"]

    def test_zero_override_uses_monthly_payment(self, loan):
        loan = loan.model_copy(update={"last_installment_value": Decimal("0")})
        assert installment_amount(loan, 2) == Decimal("1000")

    def test_missing_override_uses_monthly_payment(self, loan):
        loan = loan.model_copy(update={"last_installment_value": None})
        assert installment_amount(loan, 2) == Decimal("1000")

    def test_all_prepaid(self, loan, id_factory):
        loan = loan.model_copy(update={"paid_installments": 3})

        schedule = generate_loan_schedule(loan, id_factory=id_factory)

        assert all(t.is_paid for t in schedule)

    def test_end_of_month_start_date_is_clamped(self, loan, id_factory):
        loan = loan.model_copy(update={"start_date": date(2024, 1, 31)})

        schedule = generate_loan_schedule(loan, id_factory=id_factory)

        assert [t.date for t in schedule] == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
        ]

    def test_rejects_empty_schedule(self, loan, id_factory):
        loan = loan.model_copy(update={"total_installments": 0})
        with pytest.raises(ValueError):
            generate_loan_schedule(loan, id_factory=id_factory)


class TestLoanProgress:
    """Tests for compute_loan_progress."""

    def test_record_based_figures(self, loan):
        loan = loan.model_copy(update={
            "total_value": Decimal("4000"),
            "total_installments": 4,
            "paid_installments": 1,
        })

        progress = compute_loan_progress(loan, [])

        assert progress.progress_percent == Decimal("25")
        assert progress.remaining_value == Decimal("3000")
        assert progress.scheduled_installments == 0

    def test_schedule_based_figures(self, loan, id_factory, make_transaction):
        schedule = generate_loan_schedule(loan, id_factory=id_factory)
        unrelated = make_transaction(id="other", loan_id="l2")

        progress = compute_loan_progress(loan, list(schedule) + [unrelated])

        assert progress.scheduled_installments == 3
        assert progress.settled_installments == 1
        assert progress.outstanding_amount == Decimal("2250")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
