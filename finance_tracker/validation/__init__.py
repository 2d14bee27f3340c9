"""Validation package."""

from finance_tracker.validation.validator import EntityValidator, ensure_valid

__all__ = ["EntityValidator", "ensure_valid"]
