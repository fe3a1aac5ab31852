from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from fred.core.db import Base
from fred.models.base.mixins import TimestampMixin


class Rental(Base, TimestampMixin):
    __tablename__ = "rentals"

    rental_id = Column(Integer, primary_key=True)
    # Submitted | Pending | Active | Delivered | Completed | Denied | Cancelled
    status = Column(String(20), nullable=False, default="Submitted", index=True)
    equipment_description = Column(String(255), nullable=True)
    requested_by = Column(String(150), nullable=True)

    po_links = relationship("RentalPO", back_populates="rental")

    def __repr__(self):
        return f"<Rental rental_id={self.rental_id} status={self.status}>"


class RentalPO(Base):
    """Many-to-many link between rentals and the POs that bill them."""

    __tablename__ = "rental_pos"

    id = Column(Integer, primary_key=True)
    rental_id = Column(Integer, ForeignKey("rentals.rental_id", ondelete="CASCADE"), nullable=False, index=True)
    po_id = Column(Integer, ForeignKey("purchase_orders.po_id", ondelete="RESTRICT"), nullable=False, index=True)

    rental = relationship("Rental", back_populates="po_links")
    purchase_order = relationship("PurchaseOrder", back_populates="rental_links")

    __table_args__ = (UniqueConstraint("rental_id", "po_id", name="uq_rental_po"),)

    def __repr__(self):
        return f"<RentalPO rental_id={self.rental_id} po_id={self.po_id}>"
