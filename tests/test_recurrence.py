"""Tests for recurring transaction expansion."""

import pytest
from datetime import date

from finance_tracker.engine.recurrence import expand_recurring_transaction


class TestExpandRecurringTransaction:
    """Tests for expand_recurring_transaction."""

    def test_three_month_expansion(self, make_transaction, id_factory):
        """Instance 0 keeps id and paid flag; later instances start unpaid."""
        template = make_transaction(
            id="T1", on=date(2024, 1, 15), is_paid=True, description="Gym"
        )

        instances = expand_recurring_transaction(template, 3, id_factory=id_factory)

        assert [t.date for t in instances] == [
            date(2024, 1, 15),
            date(2024, 2, 15),
            date(2024, 3, 15),
        ]
        assert instances[0].id == "T1"
        assert instances[0].is_paid is True
        assert instances[1].is_paid is False
        assert instances[2].is_paid is False

    def test_instances_share_one_group(self, make_transaction, id_factory):
        template = make_transaction(id="T1")

        instances = expand_recurring_transaction(template, 3, id_factory=id_factory)

        assert {t.recurrence_group_id for t in instances} == {"id-1"}
        assert [t.id for t in instances] == ["T1", "id-2", "id-3"]

    def test_descriptions_are_numbered(self, make_transaction, id_factory):
        template = make_transaction(description="Gym")

        instances = expand_recurring_transaction(template, 2, id_factory=id_factory)

        assert [t.description for t in instances] == ["Gym (1/2)", "Gym (2/2)"]

    def test_other_fields_are_copied(self, make_transaction, id_factory):
        template = make_transaction(amount="89.90", category="Health", card_id="c1")

        instances = expand_recurring_transaction(template, 2, id_factory=id_factory)

        for t in instances:
            assert t.amount == template.amount
            assert t.category == "Health"
            assert t.card_id == "c1"
            assert t.kind == template.kind

    def test_end_of_month_returns_to_day_31(self, make_transaction, id_factory):
        """Dates are computed from the template, not chained."""
        template = make_transaction(on=date(2024, 1, 31))

        instances = expand_recurring_transaction(template, 3, id_factory=id_factory)

        assert [t.date for t in instances] == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
        ]

    @pytest.mark.parametrize("months", [0, 1])
    def test_rejects_fewer_than_two_months(self, make_transaction, id_factory, months):
        with pytest.raises(ValueError):
            expand_recurring_transaction(make_transaction(), months, id_factory=id_factory)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
