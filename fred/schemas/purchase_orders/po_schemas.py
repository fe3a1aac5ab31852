from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from decimal import Decimal
from datetime import date, datetime

from fred.constants.purchase_order import POStatus


# ==============================
# PO INPUT SCHEMAS
# ==============================
class POFieldsSchema(BaseModel):
    release_number: Optional[str] = Field(None, max_length=50)
    vendor_name: Optional[str] = Field(None, max_length=255)
    vendor_email: Optional[str] = Field(None, max_length=255)
    vendor_phone: Optional[str] = Field(None, max_length=50)

    business_unit: Optional[str] = Field(None, max_length=20)
    requisition_number: Optional[str] = Field(None, max_length=50)
    received_by: Optional[str] = Field(None, max_length=150)
    po_type: Optional[str] = Field(None, max_length=50)
    special_event: Optional[str] = Field(None, max_length=255)

    start_date: Optional[date] = None
    expiration_date: Optional[date] = None
    monthly_equipment_rate: Optional[Decimal] = Field(None, ge=0)

    requested_via_purchasing: Optional[bool] = None
    txdot_gps: Optional[bool] = None
    chart_fields: Optional[bool] = None

    @field_validator("requested_via_purchasing", "txdot_gps", "chart_fields")
    @classmethod
    def flags_not_null(cls, v):
        # omit the flag to leave it unchanged; the columns are NOT NULL
        if v is None:
            raise ValueError("must be true or false")
        return v


class POCreateSchema(POFieldsSchema):
    # any status is allowed on creation; Draft when omitted
    status: Optional[POStatus] = None


class POUpdateSchema(POFieldsSchema):
    status: Optional[POStatus] = None

    # optimistic locking
    version: int


class POStatusChangeSchema(BaseModel):
    status: POStatus


# ==============================
# PO OUTPUT SCHEMAS
# ==============================
class POOutSchema(BaseModel):
    po_id: int
    status: Optional[str]

    release_number: Optional[str]
    vendor_name: Optional[str]
    vendor_email: Optional[str]
    vendor_phone: Optional[str]

    business_unit: Optional[str]
    requisition_number: Optional[str]
    received_by: Optional[str]
    po_type: Optional[str]
    special_event: Optional[str]

    start_date: Optional[date]
    expiration_date: Optional[date]
    monthly_equipment_rate: Optional[Decimal]

    requested_via_purchasing: bool
    txdot_gps: bool
    chart_fields: bool

    version: int
    linked_rental_ids: List[int]

    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    created_by: Optional[int]
    updated_by: Optional[int]
    created_by_name: Optional[str]
    updated_by_name: Optional[str]

    class Config:
        from_attributes = True


class VendorOutSchema(BaseModel):
    vendor_name: str
    vendor_email: Optional[str] = None
    vendor_phone: Optional[str] = None


# ==============================
# WORKFLOW SCHEMAS
# ==============================
class WorkflowInfoSchema(BaseModel):
    po_id: Optional[int] = None
    current_status: Optional[str] = None
    allowed_transitions: List[str]
    allowed_next_statuses: List[str]
    is_terminal: bool
    next_steps: List[str]


class RentalLinkOutSchema(BaseModel):
    po_id: int
    rental_id: int
