"""
Recurrence Expander

Turns one template transaction into N monthly instances that share a
recurrence group id. Expansion only produces transactions; merging them
into the document is the mutator's job.
"""

from finance_tracker.engine.dates import add_months
from finance_tracker.models.ledger import Transaction
from finance_tracker.services.ids import IdFactory, generate_id


def recurrence_description(description: str, index: int, months: int) -> str:
    return f"{description} ({index + 1}/{months})"


def expand_recurring_transaction(
    template: Transaction,
    months: int,
    *,
    id_factory: IdFactory = generate_id,
) -> tuple[Transaction, ...]:
    """
    Expand a template into `months` dated instances.

    Instance i is dated template.date + i calendar months, always
    computed from the template date so a day-31 entry returns to day 31
    whenever the month allows it.

    Instance 0 keeps the template's id and is_paid, so editing or paying
    "the first one" maps onto the entity the user created. Later
    instances get fresh ids and start unpaid.

    Raises:
        ValueError: If months < 2 (a single entry is never expanded)
    """
    if months < 2:
        raise ValueError(f"Recurrence needs at least 2 months, got {months}")

    group_id = id_factory()
    instances = []
    for i in range(months):
        instances.append(
            template.model_copy(
                update={
                    "id": template.id if i == 0 else id_factory(),
                    "date": add_months(template.date, i),
                    "description": recurrence_description(template.description, i, months),
                    "recurrence_group_id": group_id,
                    "is_paid": template.is_paid if i == 0 else False,
                }
            )
        )
    return tuple(instances)
