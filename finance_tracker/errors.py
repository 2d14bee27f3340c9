"""
Exception hierarchy for Finance Tracker.

Computations never raise for dangling references; these exceptions
cover invalid input, storage failures, and explicit lookups of
entities that do not exist.
"""

from typing import Any, Optional


class FinanceError(Exception):
    """Base exception for all Finance Tracker errors."""
    pass


class EntityValidationError(FinanceError):
    """
    An entity failed validation and the mutation was not applied.

    Carries the list of ValidationIssue objects that caused the failure.
    """

    def __init__(self, message: str, issues: Optional[list[Any]] = None):
        super().__init__(message)
        self.issues = list(issues or [])


class NotFoundError(FinanceError):
    """Requested entity does not exist in the document."""
    pass
