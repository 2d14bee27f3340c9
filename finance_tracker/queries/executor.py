"""
Statement Query Execution

DESIGN DECISION: Query execution is DETERMINISTIC and read-only.
The executor only ever looks at the document it is given and never
changes it. The same document, query and evaluation date always
produce the same result.
"""

from datetime import date

from finance_tracker.engine.aggregation import filter_month, is_overdue
from finance_tracker.errors import FinanceError
from finance_tracker.models.ledger import Document, Transaction
from finance_tracker.models.summaries import StatementQuery, StatementResult


class QueryExecutionError(FinanceError):
    """Error during query execution."""
    pass


class StatementExecutor:
    """
    Lists the transactions of one month for the statement screen.

    GUARANTEES:
    - Only returns transactions present in the document
    - Never changes the document
    - An empty result when nothing matches, never an error
    """

    def execute(
        self,
        document: Document,
        query: StatementQuery,
        today: date,
    ) -> StatementResult:
        """
        Run a statement query.

        Args:
            document: Document to read from
            query: Month and filters
            today: Evaluation date for the overdue flags
        """
        if today is None:
            raise QueryExecutionError("An evaluation date is required")

        matches = [
            t for t in filter_month(document.transactions, query.reference_month)
            if self._matches(t, query, today)
        ]
        # sorted() is stable: same-day entries keep document order
        matches = sorted(matches, key=lambda t: t.date, reverse=True)

        return StatementResult(
            transactions=tuple(matches),
            count=len(matches),
            overdue_ids=frozenset(t.id for t in matches if is_overdue(t, today)),
            description=self._describe(query),
        )

    def _matches(self, transaction: Transaction, query: StatementQuery, today: date) -> bool:
        if query.kind is not None and transaction.kind != query.kind:
            return False
        if query.only_overdue and not is_overdue(transaction, today):
            return False
        if query.search:
            needle = query.search.casefold()
            fields = (transaction.description, transaction.category)
            if not any(needle in field.casefold() for field in fields):
                return False
        return True

    def _describe(self, query: StatementQuery) -> str:
        desc_parts = [f"Statement for {query.reference_month.strftime('%B %Y')}"]
        if query.kind is not None:
            desc_parts.append(f"kind: {query.kind.value}")
        if query.search:
            desc_parts.append(f"matching '{query.search}'")
        if query.only_overdue:
            desc_parts.append("overdue only")
        return " | ".join(desc_parts)
