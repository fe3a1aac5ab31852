from fred.constants.purchase_order import (
    VALID_STATUS_TRANSITIONS,
    parse_status,
    status_value,
)
from fred.workflow.errors import (
    TransitionError,
    InvalidCurrentStatus,
    TerminalStateViolation,
    IllegalTransition,
)


def validate_transition(current_status, new_status) -> TransitionError | None:
    """
    Check a single status change against the transition table.

    Returns None when the change is allowed. A missing current status means
    the PO is being created, so any first status is accepted. Setting the
    status a PO already has is a no-op and always allowed, terminal or not.
    """
    current = status_value(current_status)
    new = status_value(new_status)

    if not current:
        return None

    if new == current:
        return None

    parsed = parse_status(current)
    if parsed is None:
        return InvalidCurrentStatus(current)

    allowed = VALID_STATUS_TRANSITIONS[parsed]
    if not allowed:
        return TerminalStateViolation(current)

    if parse_status(new) not in allowed:
        return IllegalTransition(
            current_status=current,
            new_status=new,
            allowed=tuple(s.value for s in allowed),
        )

    return None
