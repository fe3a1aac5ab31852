from enum import Enum


class ActivityCode(str, Enum):
    # ---------------- PURCHASE ORDERS ----------------
    CREATE_PO = "CREATE_PO"
    UPDATE_PO = "UPDATE_PO"
    CHANGE_PO_STATUS = "CHANGE_PO_STATUS"
    DELETE_PO = "DELETE_PO"

    # ---------------- RENTAL LINKS ----------------
    LINK_PO_RENTAL = "LINK_PO_RENTAL"
    UNLINK_PO_RENTAL = "UNLINK_PO_RENTAL"
