from typing import Iterable, Protocol

from fred.constants.purchase_order import (
    POStatus,
    ACTIVE_RENTAL_STATUSES,
    parse_status,
    status_value,
)
from fred.workflow.errors import (
    BusinessRuleError,
    ActiveRentalsBlockClosure,
    MissingVendor,
    MissingReleaseNumber,
)


class PurchaseOrderLookup(Protocol):
    """Read-only view of the entities the business rules inspect."""

    async def count_linked_rentals(
        self, po_id: int, statuses: Iterable[str]
    ) -> int: ...

    async def get_vendor_and_release(
        self, po_id: int
    ) -> tuple[str | None, str | None]: ...


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


async def validate_business_rules(
    lookup: PurchaseOrderLookup,
    po_id: int,
    new_status,
) -> BusinessRuleError | None:
    """
    Cross-entity preconditions for entering Closed or Active.

    Only meaningful once validate_transition has accepted the change.
    Reads through ``lookup`` and never writes.
    """
    target = parse_status(status_value(new_status))

    if target is POStatus.CLOSED:
        count = await lookup.count_linked_rentals(
            po_id, sorted(s.value for s in ACTIVE_RENTAL_STATUSES)
        )
        if count > 0:
            return ActiveRentalsBlockClosure(count)

    elif target is POStatus.ACTIVE:
        vendor_name, release_number = await lookup.get_vendor_and_release(po_id)
        # vendor is checked first so the message is deterministic
        if _is_blank(vendor_name):
            return MissingVendor()
        if _is_blank(release_number):
            return MissingReleaseNumber()

    return None
