# fred/workflow/guidance.py
#
# Advisory only: the UI uses this to render hints and fill the status
# dropdown. validate_transition / validate_business_rules stay authoritative.

from dataclasses import dataclass, field
from types import MappingProxyType

from fred.constants.purchase_order import (
    POStatus,
    INITIAL_STATUSES,
    allowed_transitions,
    parse_status,
    status_value,
)

CANCEL_STEP = "Set to Cancelled if PO needs to be terminated"

NEW_PO_STEPS = (
    "Create as Draft to continue editing",
    "Create as Open to submit for approval",
)

NEXT_STEPS = MappingProxyType(
    {
        POStatus.DRAFT: ("Set to Open when ready for approval", CANCEL_STEP),
        POStatus.OPEN: ("Set to Active once approved and vendor is ready", CANCEL_STEP),
        POStatus.ACTIVE: ("Set to Closed when all work is complete", CANCEL_STEP),
    }
)


@dataclass(frozen=True)
class WorkflowInfo:
    allowed_transitions: list[str] = field(default_factory=list)
    is_terminal: bool = False
    next_steps: list[str] = field(default_factory=list)


def get_workflow_info(current_status=None) -> WorkflowInfo:
    current = status_value(current_status)

    if not current:
        return WorkflowInfo(
            allowed_transitions=[s.value for s in INITIAL_STATUSES],
            is_terminal=False,
            next_steps=list(NEW_PO_STEPS),
        )

    allowed = [s.value for s in allowed_transitions(current)]
    parsed = parse_status(current)

    return WorkflowInfo(
        allowed_transitions=allowed,
        is_terminal=not allowed,
        next_steps=list(NEXT_STEPS.get(parsed, ())),
    )


def get_allowed_next_statuses(po_id=None, current_status=None) -> list[str]:
    """Options for the status dropdown; the current status always stays selectable."""
    current = status_value(current_status)

    if not po_id or not current:
        return [s.value for s in INITIAL_STATUSES]

    return [current, *(s.value for s in allowed_transitions(current))]
