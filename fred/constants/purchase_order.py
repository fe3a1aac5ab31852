# fred/constants/purchase_order.py

from enum import Enum
from types import MappingProxyType


class POStatus(str, Enum):
    DRAFT = "Draft"
    OPEN = "Open"
    ACTIVE = "Active"
    CLOSED = "Closed"
    CANCELLED = "Cancelled"


class RentalStatus(str, Enum):
    SUBMITTED = "Submitted"
    PENDING = "Pending"
    ACTIVE = "Active"
    DELIVERED = "Delivered"
    COMPLETED = "Completed"
    DENIED = "Denied"
    CANCELLED = "Cancelled"


# current status -> statuses reachable in one step
VALID_STATUS_TRANSITIONS = MappingProxyType(
    {
        POStatus.DRAFT: (POStatus.OPEN, POStatus.CANCELLED),
        POStatus.OPEN: (POStatus.ACTIVE, POStatus.CANCELLED),
        POStatus.ACTIVE: (POStatus.CLOSED, POStatus.CANCELLED),
        POStatus.CLOSED: (),  # terminal
        POStatus.CANCELLED: (),  # terminal
    }
)

# statuses a brand new PO may be created with from the UI
INITIAL_STATUSES = (POStatus.DRAFT, POStatus.OPEN)

# linked rentals in these statuses keep a PO from closing
ACTIVE_RENTAL_STATUSES = frozenset(
    {RentalStatus.ACTIVE, RentalStatus.DELIVERED, RentalStatus.PENDING}
)

DEFAULT_PO_TYPES = ("Standard", "Fleet", "Call-Off", "Emergency")


def status_value(status) -> str | None:
    """Plain string form of a status given as enum member, string or None."""
    if status is None:
        return None
    if isinstance(status, Enum):
        return status.value
    return str(status)


def parse_status(value) -> POStatus | None:
    """Coerce a persisted status into POStatus. Unknown values yield None."""
    if isinstance(value, POStatus):
        return value
    try:
        return POStatus(value)
    except ValueError:
        return None


def allowed_transitions(status) -> tuple[POStatus, ...]:
    parsed = parse_status(status)
    if parsed is None:
        return ()
    return VALID_STATUS_TRANSITIONS[parsed]
