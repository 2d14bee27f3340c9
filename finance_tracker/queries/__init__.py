"""Query execution package."""

from finance_tracker.queries.executor import QueryExecutionError, StatementExecutor

__all__ = ["QueryExecutionError", "StatementExecutor"]
