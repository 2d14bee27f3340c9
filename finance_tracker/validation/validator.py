"""
Entity Validation

DESIGN DECISION: Validation happens before any state change.

Pydantic already rejects structurally broken entities (wrong types,
negative amounts, days outside 1-31) when the model is built. This
module adds the rules a save must satisfy on top of that:
- Required labels present (description, name)
- Amounts and limits strictly positive
- Counts within range (installments, recurrence months)
- Loan links only ever come from the loan schedule

A ValidationResult with any error-level issue blocks the mutation;
warnings are reported but do not.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the caller can show them to the user.
"""

from decimal import Decimal
from typing import Optional

from finance_tracker.config import get_settings
from finance_tracker.errors import EntityValidationError
from finance_tracker.models.commands import RecurrenceRequest
from finance_tracker.models.ledger import CreditCard, Investment, Loan, Transaction
from finance_tracker.models.validation import ValidationIssue, ValidationResult


def _missing(field: str, label: str) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type="missing",
        message=f"{label} is required",
        severity="error",
    )


def _not_positive(field: str, label: str) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type="invalid_value",
        message=f"{label} must be greater than zero",
        severity="error",
    )


class EntityValidator:
    """
    Validates entities before they are written into the document.

    One validate_* method per entity kind; each returns a
    ValidationResult and never raises.
    """

    def __init__(
        self,
        max_recurrence_months: Optional[int] = None,
        max_installments: Optional[int] = None,
    ):
        """
        Initialize validator.

        Args:
            max_recurrence_months: Upper bound for recurring entries.
                                   Defaults to the configured value.
            max_installments: Upper bound for loan installments.
                              Defaults to the configured value.
        """
        settings = get_settings().app
        self._max_recurrence_months = max_recurrence_months or settings.max_recurrence_months
        self._max_installments = max_installments or settings.max_installments

    def validate_transaction(
        self,
        transaction: Transaction,
        recurrence: Optional[RecurrenceRequest] = None,
        existing: Optional[Transaction] = None,
    ) -> ValidationResult:
        """
        Args:
            transaction: Entry about to be saved
            recurrence: Requested monthly repetition, if any
            existing: The stored transaction with the same id, if any
        """
        issues = []

        if not transaction.description:
            issues.append(_missing("description", "Description"))

        if transaction.amount <= 0:
            issues.append(_not_positive("amount", "Amount"))

        if recurrence is not None:
            issues.extend(self._recurrence_issues(recurrence))

        issues.extend(self._loan_link_issues(transaction, recurrence, existing))

        return ValidationResult(
            entity_type="transaction",
            entity_id=transaction.id,
            issues=issues,
        )

    def _recurrence_issues(self, recurrence: RecurrenceRequest) -> list[ValidationIssue]:
        if recurrence.months > self._max_recurrence_months:
            return [ValidationIssue(
                field="recurrence.months",
                issue_type="out_of_range",
                message=(
                    f"A recurring entry can repeat at most "
                    f"{self._max_recurrence_months} months"
                ),
                severity="error",
                suggested_fix="Use a smaller number of months",
            )]
        return []

    def _loan_link_issues(
        self,
        transaction: Transaction,
        recurrence: Optional[RecurrenceRequest],
        existing: Optional[Transaction],
    ) -> list[ValidationIssue]:
        """Only the loan schedule generator links transactions to a loan."""
        if transaction.loan_id is None:
            return []

        issues = []
        stored_loan_id = existing.loan_id if existing is not None else None
        if transaction.loan_id != stored_loan_id:
            issues.append(ValidationIssue(
                field="loan_id",
                issue_type="not_allowed",
                message="Installments can only be created by saving their loan",
                severity="error",
                suggested_fix="Remove the loan link or edit the loan instead",
            ))
        if recurrence is not None and recurrence.expands:
            issues.append(ValidationIssue(
                field="recurrence.months",
                issue_type="not_allowed",
                message="A loan installment cannot be repeated",
                severity="error",
            ))
        return issues

    def validate_card(self, card: CreditCard) -> ValidationResult:
        issues = []

        if not card.name:
            issues.append(_missing("name", "Card name"))

        if card.limit <= 0:
            issues.append(_not_positive("limit", "Card limit"))

        if card.due_day <= card.closing_day:
            issues.append(ValidationIssue(
                field="due_day",
                issue_type="suspicious_value",
                message=(
                    f"Due day ({card.due_day}) is not after the closing day "
                    f"({card.closing_day})"
                ),
                severity="warning",
                suggested_fix="Most cards are due a few days after closing",
            ))

        return ValidationResult(entity_type="card", entity_id=card.id, issues=issues)

    def validate_loan(self, loan: Loan) -> ValidationResult:
        issues = []

        if not loan.name:
            issues.append(_missing("name", "Loan name"))

        if loan.total_value <= 0:
            issues.append(_not_positive("total_value", "Total value"))

        if loan.total_installments < 1:
            issues.append(ValidationIssue(
                field="total_installments",
                issue_type="out_of_range",
                message="A loan needs at least one installment",
                severity="error",
            ))
        elif loan.total_installments > self._max_installments:
            issues.append(ValidationIssue(
                field="total_installments",
                issue_type="out_of_range",
                message=f"A loan can have at most {self._max_installments} installments",
                severity="error",
            ))

        if loan.paid_installments > loan.total_installments:
            issues.append(ValidationIssue(
                field="paid_installments",
                issue_type="out_of_range",
                message=(
                    f"Paid installments ({loan.paid_installments}) exceed the "
                    f"total ({loan.total_installments})"
                ),
                severity="error",
            ))

        if loan.monthly_payment <= 0:
            issues.append(ValidationIssue(
                field="monthly_payment",
                issue_type="suspicious_value",
                message="Monthly payment is zero, installments will have no amount",
                severity="warning",
            ))

        if loan.end_date is not None and loan.end_date < loan.start_date:
            issues.append(ValidationIssue(
                field="end_date",
                issue_type="inconsistent",
                message="End date is before start date",
                severity="warning",
            ))

        return ValidationResult(entity_type="loan", entity_id=loan.id, issues=issues)

    def validate_investment(self, investment: Investment) -> ValidationResult:
        issues = []

        if not investment.name:
            issues.append(_missing("name", "Investment name"))

        if investment.amount_invested <= Decimal("0"):
            issues.append(_not_positive("amount_invested", "Amount invested"))

        return ValidationResult(
            entity_type="investment",
            entity_id=investment.id,
            issues=issues,
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Short text listing what blocks the save and what to double-check."""
        if result.is_valid and not result.warnings:
            return "All checks passed."

        lines = []
        if result.has_errors:
            lines.append("Cannot save:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     {issue.suggested_fix}")

        if result.warnings:
            lines.append("Please verify:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)


def ensure_valid(result: ValidationResult) -> ValidationResult:
    """
    Raise if the result carries any error-level issue.

    Raises:
        EntityValidationError: With the blocking issues attached
    """
    if result.has_errors:
        errors = [i for i in result.issues if i.severity == "error"]
        summary = "; ".join(i.message for i in errors)
        raise EntityValidationError(
            f"Invalid {result.entity_type}: {summary}",
            issues=errors,
        )
    return result
