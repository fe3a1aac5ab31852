from sqlalchemy import Column, Integer, String, Boolean, Date, Numeric, Index
from sqlalchemy.orm import relationship
from fred.core.db import Base
from fred.models.base.mixins import TimestampMixin, AuditMixin, VersionMixin


class PurchaseOrder(Base, TimestampMixin, AuditMixin, VersionMixin):
    __tablename__ = "purchase_orders"

    po_id = Column(Integer, primary_key=True)
    # Draft | Open | Active | Closed | Cancelled; legacy rows may be NULL
    status = Column(String(20), nullable=True, index=True)

    release_number = Column(String(50), nullable=True, index=True)
    vendor_name = Column(String(255), nullable=True, index=True)
    vendor_email = Column(String(255), nullable=True)
    vendor_phone = Column(String(50), nullable=True)

    business_unit = Column(String(20), nullable=True)
    requisition_number = Column(String(50), nullable=True)
    received_by = Column(String(150), nullable=True)
    po_type = Column(String(50), nullable=True, index=True)
    special_event = Column(String(255), nullable=True)

    start_date = Column(Date, nullable=True)
    expiration_date = Column(Date, nullable=True)
    monthly_equipment_rate = Column(Numeric(12, 2), nullable=True)

    requested_via_purchasing = Column(Boolean, nullable=False, default=False)
    txdot_gps = Column(Boolean, nullable=False, default=False)
    chart_fields = Column(Boolean, nullable=False, default=False)

    rental_links = relationship("RentalPO", back_populates="purchase_order", lazy="selectin")

    __table_args__ = (Index("ix_po_vendor_status", "vendor_name", "status"),)

    def __repr__(self):
        return f"<PurchaseOrder po_id={self.po_id} status={self.status}>"
