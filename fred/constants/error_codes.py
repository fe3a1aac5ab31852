from enum import Enum


class ErrorCode(str, Enum):
    # ---------------- GENERIC ----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    NO_CHANGES_DETECTED = "NO_CHANGES_DETECTED"

    # ---------------- PURCHASE ORDERS ----------------
    PO_NOT_FOUND = "PO_NOT_FOUND"
    PO_VERSION_CONFLICT = "PO_VERSION_CONFLICT"
    PO_INVALID_SORT_FIELD = "PO_INVALID_SORT_FIELD"
    PO_HAS_LINKED_RENTALS = "PO_HAS_LINKED_RENTALS"
    PO_RENTAL_ALREADY_LINKED = "PO_RENTAL_ALREADY_LINKED"

    # ---------------- PO WORKFLOW ----------------
    PO_INVALID_CURRENT_STATUS = "PO_INVALID_CURRENT_STATUS"
    PO_TERMINAL_STATE = "PO_TERMINAL_STATE"
    PO_ILLEGAL_TRANSITION = "PO_ILLEGAL_TRANSITION"
    PO_ACTIVE_RENTALS_BLOCK_CLOSURE = "PO_ACTIVE_RENTALS_BLOCK_CLOSURE"
    PO_MISSING_VENDOR = "PO_MISSING_VENDOR"
    PO_MISSING_RELEASE_NUMBER = "PO_MISSING_RELEASE_NUMBER"

    # ---------------- RENTALS ----------------
    RENTAL_NOT_FOUND = "RENTAL_NOT_FOUND"
