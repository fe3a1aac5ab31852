"""
Typed rejections produced by the PO workflow validators.

Validators return one of these instead of raising so callers can tell an
expected, user-correctable rejection apart from infrastructure failures.
"""

from dataclasses import dataclass
from typing import ClassVar

from fred.constants.error_codes import ErrorCode


@dataclass(frozen=True)
class WorkflowError:
    error_code: ClassVar[ErrorCode]
    status_code: ClassVar[int] = 400

    @property
    def message(self) -> str:
        raise NotImplementedError

    def details(self) -> dict:
        return {}


# =====================================================
# TRANSITION ERRORS
# =====================================================
@dataclass(frozen=True)
class TransitionError(WorkflowError):
    pass


@dataclass(frozen=True)
class InvalidCurrentStatus(TransitionError):
    error_code: ClassVar[ErrorCode] = ErrorCode.PO_INVALID_CURRENT_STATUS

    current_status: str

    @property
    def message(self) -> str:
        return f"Invalid current status: {self.current_status}"

    def details(self) -> dict:
        return {"current_status": self.current_status}


@dataclass(frozen=True)
class TerminalStateViolation(TransitionError):
    error_code: ClassVar[ErrorCode] = ErrorCode.PO_TERMINAL_STATE

    current_status: str

    @property
    def message(self) -> str:
        return (
            f"Cannot change status from {self.current_status}. "
            "This is a terminal state."
        )

    def details(self) -> dict:
        return {"current_status": self.current_status}


@dataclass(frozen=True)
class IllegalTransition(TransitionError):
    error_code: ClassVar[ErrorCode] = ErrorCode.PO_ILLEGAL_TRANSITION

    current_status: str
    new_status: str
    allowed: tuple[str, ...]

    @property
    def message(self) -> str:
        return (
            f"Cannot transition from {self.current_status} to {self.new_status}. "
            f"Allowed transitions: {', '.join(self.allowed)}"
        )

    def details(self) -> dict:
        return {
            "current_status": self.current_status,
            "new_status": self.new_status,
            "allowed_transitions": list(self.allowed),
        }


# =====================================================
# BUSINESS RULE ERRORS
# =====================================================
@dataclass(frozen=True)
class BusinessRuleError(WorkflowError):
    status_code: ClassVar[int] = 409


@dataclass(frozen=True)
class ActiveRentalsBlockClosure(BusinessRuleError):
    error_code: ClassVar[ErrorCode] = ErrorCode.PO_ACTIVE_RENTALS_BLOCK_CLOSURE

    count: int

    @property
    def message(self) -> str:
        return (
            f"Cannot close PO. It has {self.count} active rental(s). "
            "Complete or cancel all rentals first."
        )

    def details(self) -> dict:
        return {"active_rentals": self.count}


@dataclass(frozen=True)
class MissingVendor(BusinessRuleError):
    error_code: ClassVar[ErrorCode] = ErrorCode.PO_MISSING_VENDOR

    @property
    def message(self) -> str:
        return "Cannot activate PO without a vendor name."


@dataclass(frozen=True)
class MissingReleaseNumber(BusinessRuleError):
    error_code: ClassVar[ErrorCode] = ErrorCode.PO_MISSING_RELEASE_NUMBER

    @property
    def message(self) -> str:
        return "Cannot activate PO without a PO release number."
