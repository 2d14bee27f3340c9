"""
Core Data Models for Finance Tracker

These models define the strict schemas for everything stored in the
document. They are designed to:
1. Enforce type safety at runtime
2. Be immutable, so every mutation produces a new document
3. Serialize field-for-field to the persisted JSON shape
4. Represent optional references explicitly (None means absent)

DESIGN DECISION: Persisted keys are camelCase (cardId, isPaid, ...) so the
document stays compatible with files written by earlier versions.
Python code uses snake_case field names; populate_by_name allows both.
"""

import datetime
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from finance_tracker.config import get_settings


# Amounts are Decimal in memory and plain JSON numbers on disk.
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionKind(str, Enum):
    """Direction of a ledger entry."""
    INCOME = "income"
    EXPENSE = "expense"


# =============================================================================
# BASE MODEL
# =============================================================================

class LedgerModel(BaseModel):
    """
    Base for every persisted entity.

    Frozen: entities are replaced, never mutated in place.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def _fill_default(
    data: Any,
    alias: str,
    name: str,
    fallback_key: str,
    fallback_name: str,
) -> Any:
    """Fill an absent field (under either key) from another field's value."""
    if not isinstance(data, dict):
        return data
    value = data.get(alias)
    if value is None:
        value = data.get(name)
    if value is None:
        value = data.get(fallback_key, data.get(fallback_name))
    cleaned = {k: v for k, v in data.items() if k not in (alias, name)}
    cleaned[alias] = value
    return cleaned


# =============================================================================
# LEDGER ENTITIES
# =============================================================================

class Transaction(LedgerModel):
    """
    A single ledger entry.

    card_id, loan_id and recurrence_group_id are weak references: the
    referenced entity may be deleted without touching this transaction.
    loan_id is only ever set by the loan schedule generator.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Unique transaction ID, immutable once created"
    )
    description: str = Field(
        default="",
        max_length=200,
        description="Free text label"
    )
    amount: Money = Field(
        ...,
        ge=0,
        description="Non-negative amount, currency agnostic"
    )
    kind: TransactionKind = Field(
        ...,
        validation_alias=AliasChoices("kind", "type"),
        serialization_alias="kind",
        description="Income or expense"
    )
    date: datetime.date = Field(
        ...,
        description="Calendar date of the entry"
    )
    category: str = Field(
        default_factory=lambda: get_settings().app.default_category,
        description="Free text category label"
    )

    # Weak references
    card_id: Optional[str] = None
    loan_id: Optional[str] = None
    recurrence_group_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "recurrenceGroupId", "recurrence_group_id", "recurrenceId"
        ),
        serialization_alias="recurrenceGroupId",
    )

    is_paid: bool = Field(
        default=False,
        description="Settlement flag"
    )

    @field_validator('card_id', 'loan_id', 'recurrence_group_id', mode='before')
    @classmethod
    def blank_reference_is_absent(cls, v: Any) -> Any:
        """Older documents stored an empty string for "no card"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_expense(self) -> bool:
        return self.kind == TransactionKind.EXPENSE

    @property
    def is_income(self) -> bool:
        return self.kind == TransactionKind.INCOME

    @property
    def signed_amount(self) -> Decimal:
        """Income positive, expense negative."""
        return self.amount if self.is_income else -self.amount


class CreditCard(LedgerModel):
    """
    A credit card billing account.

    closing_day and due_day are day-of-month ordinals. A due day after
    the closing day is expected for realistic cards but not enforced.
    """

    id: str = Field(..., min_length=1)
    name: str = Field(
        ...,
        max_length=100,
        description="Card display name"
    )
    limit: Money = Field(
        ...,
        ge=0,
        description="Spending limit"
    )
    closing_day: int = Field(
        ...,
        ge=1,
        le=31,
        description="Day of month the invoice closes"
    )
    due_day: int = Field(
        ...,
        ge=1,
        le=31,
        description="Day of month the invoice is due"
    )
    color: str = Field(
        default_factory=lambda: get_settings().app.default_card_color,
        description="Hex color used to draw the card"
    )
    brand_name: str = Field(
        default="",
        description="Issuer name, defaults to the card name"
    )
    brand_logo: Optional[str] = Field(
        default=None,
        description="URL of the issuer logo"
    )

    @model_validator(mode='before')
    @classmethod
    def default_brand_name(cls, data: Any) -> Any:
        return _fill_default(data, "brandName", "brand_name", "name", "name")


class Loan(LedgerModel):
    """
    An installment contract.

    paid_installments is only used when the loan is created, to mark
    that many leading installments as already settled. end_date is
    informational and never recomputed from the schedule.
    """

    id: str = Field(..., min_length=1)
    name: str = Field(..., max_length=100)
    total_value: Money = Field(
        ...,
        ge=0,
        description="Contracted total"
    )
    start_date: date = Field(
        ...,
        description="Date of the first installment"
    )
    end_date: Optional[date] = Field(
        default=None,
        description="Informational target end date"
    )
    monthly_payment: Money = Field(
        default=Decimal("0"),
        ge=0,
        description="Flat monthly installment amount"
    )
    total_installments: int = Field(
        default=1,
        ge=0,
        description="Number of installments in the schedule"
    )
    paid_installments: int = Field(
        default=0,
        ge=0,
        description="Installments already settled at creation time"
    )
    last_installment_value: Optional[Money] = Field(
        default=None,
        ge=0,
        description="Override amount for the final installment"
    )
    image_url: Optional[str] = Field(
        default=None,
        description="Display image reference"
    )

    @field_validator('end_date', 'image_url', mode='before')
    @classmethod
    def blank_is_absent(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Investment(LedgerModel):
    """A position or contribution."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., max_length=100)
    type: str = Field(
        default="Other",
        description="Asset class label (e.g. Fixed Income, Stocks)"
    )
    amount_invested: Money = Field(..., ge=0)
    current_value: Money = Field(
        ...,
        ge=0,
        description="Current market value, defaults to the amount invested"
    )
    date: datetime.date

    @model_validator(mode='before')
    @classmethod
    def default_current_value(cls, data: Any) -> Any:
        return _fill_default(
            data, "currentValue", "current_value", "amountInvested", "amount_invested"
        )


# =============================================================================
# DOCUMENT - the aggregate root and unit of persistence
# =============================================================================

class Document(LedgerModel):
    """
    The whole persisted state.

    Collections are ordered tuples. Id uniqueness is maintained by the
    mutator, not by the container.
    """

    transactions: tuple[Transaction, ...] = ()
    cards: tuple[CreditCard, ...] = ()
    loans: tuple[Loan, ...] = ()
    investments: tuple[Investment, ...] = ()

    def find_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self.transactions if t.id == transaction_id), None)

    def find_card(self, card_id: str) -> Optional[CreditCard]:
        return next((c for c in self.cards if c.id == card_id), None)

    def find_loan(self, loan_id: str) -> Optional[Loan]:
        return next((l for l in self.loans if l.id == loan_id), None)

    def find_investment(self, investment_id: str) -> Optional[Investment]:
        return next((i for i in self.investments if i.id == investment_id), None)

    def transactions_for_card(self, card_id: str) -> tuple[Transaction, ...]:
        return tuple(t for t in self.transactions if t.card_id == card_id)

    def transactions_for_loan(self, loan_id: str) -> tuple[Transaction, ...]:
        return tuple(t for t in self.transactions if t.loan_id == loan_id)

    @property
    def is_empty(self) -> bool:
        return not (self.transactions or self.cards or self.loans or self.investments)

    def to_json_dict(self) -> dict:
        """Persisted representation: camelCase keys, ISO dates, numeric amounts."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
