"""Tests for the statement query executor."""

import pytest
from datetime import date

from finance_tracker.errors import FinanceError
from finance_tracker.models import Document, StatementQuery, TransactionKind
from finance_tracker.queries import QueryExecutionError, StatementExecutor


TODAY = date(2024, 3, 15)


@pytest.fixture
def document(make_transaction):
    return Document(transactions=(
        make_transaction(
            id="salary", amount="5000", kind=TransactionKind.INCOME,
            on=date(2024, 3, 5), description="Salary", category="Income", is_paid=True,
        ),
        make_transaction(id="market", on=date(2024, 3, 2), description="Supermarket", category="Food"),
        make_transaction(id="bakery", on=date(2024, 3, 10), description="Bakery", category="Food"),
        make_transaction(id="rent", on=date(2024, 3, 10), description="Rent", category="Housing"),
        make_transaction(id="cinema", on=date(2024, 3, 20), description="Cinema", category="Leisure"),
        make_transaction(id="feb", on=date(2024, 2, 10), description="Old groceries", category="Food"),
    ))


@pytest.fixture
def executor():
    return StatementExecutor()


class TestStatementExecutor:
    """Tests for StatementExecutor.execute."""

    def test_lists_month_newest_first(self, executor, document):
        result = executor.execute(document, StatementQuery(reference_month=date(2024, 3, 1)), TODAY)

        # Same-day entries keep document order
        assert [t.id for t in result.transactions] == [
            "cinema", "bakery", "rent", "salary", "market",
        ]
        assert result.count == 5
        assert result.data_found

    def test_search_is_case_insensitive_on_description_and_category(self, executor, document):
        by_category = executor.execute(
            document, StatementQuery(reference_month=TODAY, search="FOOD"), TODAY
        )
        by_description = executor.execute(
            document, StatementQuery(reference_month=TODAY, search="bak"), TODAY
        )

        assert {t.id for t in by_category.transactions} == {"market", "bakery"}
        assert [t.id for t in by_description.transactions] == ["bakery"]

    def test_search_does_not_span_description_and_category(self, executor, document):
        spanning = executor.execute(
            document, StatementQuery(reference_month=TODAY, search="rent hous"), TODAY
        )
        category_only = executor.execute(
            document, StatementQuery(reference_month=TODAY, search="hous"), TODAY
        )

        assert spanning.count == 0
        assert [t.id for t in category_only.transactions] == ["rent"]

    def test_kind_filter(self, executor, document):
        result = executor.execute(
            document,
            StatementQuery(reference_month=TODAY, kind=TransactionKind.INCOME),
            TODAY,
        )
        assert [t.id for t in result.transactions] == ["salary"]

    def test_overdue_flags_and_filter(self, executor, document):
        all_rows = executor.execute(document, StatementQuery(reference_month=TODAY), TODAY)
        overdue_only = executor.execute(
            document, StatementQuery(reference_month=TODAY, only_overdue=True), TODAY
        )

        assert all_rows.overdue_ids == frozenset({"market", "bakery", "rent"})
        assert all_rows.is_overdue("market")
        assert not all_rows.is_overdue("cinema")
        assert {t.id for t in overdue_only.transactions} == {"market", "bakery", "rent"}

    def test_no_match_is_empty_not_error(self, executor, document):
        result = executor.execute(
            document, StatementQuery(reference_month=TODAY, search="yacht"), TODAY
        )

        assert result.count == 0
        assert not result.data_found

    def test_description(self, executor, document):
        result = executor.execute(
            document,
            StatementQuery(reference_month=TODAY, search="food", only_overdue=True),
            TODAY,
        )
        assert result.description == "Statement for March 2024 | matching 'food' | overdue only"

    def test_requires_evaluation_date(self, executor, document):
        with pytest.raises(QueryExecutionError):
            executor.execute(document, StatementQuery(reference_month=TODAY), None)

    def test_execution_error_is_a_finance_error(self, executor, document):
        with pytest.raises(FinanceError):
            executor.execute(document, StatementQuery(reference_month=TODAY), None)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
