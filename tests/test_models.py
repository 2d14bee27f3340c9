"""
Tests for Finance Tracker models

Test strategy:
1. Unit tests for individual models (ledger entities, results, audit)
2. Schema rules enforced at construction time
3. Persisted shape of the document
"""

import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.models import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    CreditCard,
    Document,
    Investment,
    Loan,
    RecurrenceRequest,
    Transaction,
    TransactionKind,
    ValidationIssue,
    ValidationResult,
)


class TestTransactionModel:
    """Tests for the Transaction model."""

    def test_transaction_creation(self):
        """Test Transaction model creation with defaults."""
        tx = Transaction(
            id="t1",
            description="Rent",
            amount=Decimal("1200"),
            kind=TransactionKind.EXPENSE,
            date=date(2024, 3, 10),
        )
        assert tx.category == "General"
        assert tx.is_paid is False
        assert tx.card_id is None
        assert tx.is_expense

    def test_transaction_strips_whitespace(self):
        tx = Transaction(
            id="t1", description="  Rent  ", amount=Decimal("1"),
            kind=TransactionKind.EXPENSE, date=date(2024, 3, 10),
        )
        assert tx.description == "Rent"

    def test_transaction_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValueError):
            Transaction(
                id="t1",
                amount=Decimal("-100"),
                kind=TransactionKind.EXPENSE,
                date=date(2024, 3, 10),
            )

    def test_transaction_accepts_camel_case_and_legacy_keys(self):
        tx = Transaction.model_validate({
            "id": "t1",
            "amount": 50,
            "type": "income",
            "date": "2024-03-01",
            "cardId": "",
            "isPaid": True,
        })
        assert tx.kind == TransactionKind.INCOME
        assert tx.card_id is None
        assert tx.is_paid is True

    def test_signed_amount(self, make_transaction):
        assert make_transaction(amount="10").signed_amount == Decimal("-10")
        assert make_transaction(
            amount="10", kind=TransactionKind.INCOME
        ).signed_amount == Decimal("10")

    def test_transaction_is_immutable(self, make_transaction):
        tx = make_transaction()
        with pytest.raises(ValueError):
            tx.amount = Decimal("1")


class TestOtherEntities:
    """Tests for cards, loans and investments."""

    def test_card_brand_name_defaults_to_name(self):
        card = CreditCard(
            id="c1", name="Inter", limit=Decimal("4500"), closing_day=10, due_day=17
        )
        assert card.brand_name == "Inter"
        assert card.color == "#333333"

    @pytest.mark.parametrize("day", [0, 32])
    def test_card_rejects_invalid_day(self, day):
        with pytest.raises(ValueError):
            CreditCard(id="c1", name="X", limit=Decimal("1"), closing_day=day, due_day=10)

    def test_loan_blank_end_date_is_absent(self):
        loan = Loan.model_validate({
            "id": "l1",
            "name": "Car",
            "totalValue": 45000,
            "startDate": "2023-01-15",
            "endDate": "",
            "monthlyPayment": 1250,
            "totalInstallments": 36,
        })
        assert loan.end_date is None
        assert loan.paid_installments == 0

    def test_investment_current_value_defaults_to_invested(self):
        investment = Investment(
            id="i1", name="CDB", amount_invested=Decimal("1000"), date=date(2024, 1, 1)
        )
        assert investment.current_value == Decimal("1000")
        assert investment.type == "Other"

    def test_recurrence_request(self):
        assert RecurrenceRequest(months=2).expands
        assert not RecurrenceRequest(months=1).expands
        with pytest.raises(ValueError):
            RecurrenceRequest(months=0)


class TestDocument:
    """Tests for the Document aggregate."""

    def test_lookups(self, make_transaction, card, loan):
        document = Document(
            transactions=(
                make_transaction(id="a", card_id="c1"),
                make_transaction(id="b", loan_id="l1"),
            ),
            cards=(card,),
            loans=(loan,),
        )

        assert document.find_card("c1") == card
        assert document.find_loan("missing") is None
        assert [t.id for t in document.transactions_for_card("c1")] == ["a"]
        assert [t.id for t in document.transactions_for_loan("l1")] == ["b"]
        assert not document.is_empty

    def test_empty_document(self):
        document = Document()
        assert document.is_empty
        assert document.to_json_dict() == {
            "transactions": [],
            "cards": [],
            "loans": [],
            "investments": [],
        }


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.DOCUMENT_SAVED,
            description="Document saved",
        )
        assert event.event_type == AuditEventType.DOCUMENT_SAVED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_builder_recurrence_expanded(self):
        event = AuditEventBuilder.recurrence_expanded(
            transaction_id="t1",
            recurrence_group_id="g1",
            months=6,
        )

        assert event.entity_type == "transaction"
        assert event.entity_id == "t1"
        assert event.details == {"recurrence_group_id": "g1", "months": 6}

    def test_audit_event_json_line(self):
        event = AuditEventBuilder.save_failed("save_card", "disk full")

        restored = AuditEvent.model_validate_json(event.to_json_line())

        assert restored.event_id == event.event_id
        assert restored.severity == AuditSeverity.ERROR


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            entity_type="transaction",
            entity_id="t1",
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message="Amount must be greater than zero",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1
        assert result.is_valid is False

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            entity_type="card",
            issues=[
                ValidationIssue(
                    field="due_day",
                    issue_type="suspicious_value",
                    message="Due day is not after the closing day",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.warnings == ["Due day is not after the closing day"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
