"""Document mutation package."""

from finance_tracker.mutations.mutator import (
    apply_command,
    delete_card,
    delete_investment,
    delete_loan,
    delete_transaction,
    set_transaction_paid,
    upsert_card,
    upsert_investment,
    upsert_loan,
    upsert_transaction,
)

__all__ = [
    "apply_command",
    "delete_card",
    "delete_investment",
    "delete_loan",
    "delete_transaction",
    "set_transaction_paid",
    "upsert_card",
    "upsert_investment",
    "upsert_loan",
    "upsert_transaction",
]
