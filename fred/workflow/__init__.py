from .transitions import validate_transition
from .business_rules import PurchaseOrderLookup, validate_business_rules
from .guidance import WorkflowInfo, get_workflow_info, get_allowed_next_statuses
from .errors import (
    WorkflowError,
    TransitionError,
    InvalidCurrentStatus,
    TerminalStateViolation,
    IllegalTransition,
    BusinessRuleError,
    ActiveRentalsBlockClosure,
    MissingVendor,
    MissingReleaseNumber,
)

__all__ = [
"validate_transition",
"validate_business_rules",
"PurchaseOrderLookup",

"WorkflowInfo",
"get_workflow_info",
"get_allowed_next_statuses",

"WorkflowError",
"TransitionError",
"InvalidCurrentStatus",
"TerminalStateViolation",
"IllegalTransition",
"BusinessRuleError",
"ActiveRentalsBlockClosure",
"MissingVendor",
"MissingReleaseNumber",
]
