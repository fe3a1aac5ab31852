from typing import Iterable

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from fred.constants.purchase_order import status_value
from fred.models.purchase_orders.purchase_order_models import PurchaseOrder
from fred.models.rentals.rental_models import Rental, RentalPO


class SqlAlchemyPurchaseOrderLookup:
    """
    PurchaseOrderLookup backed by the caller's session.

    Reads run inside whatever transaction the session has open, so they see
    the locked PO row and any flushed-but-uncommitted field changes.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def count_linked_rentals(
        self, po_id: int, statuses: Iterable[str]
    ) -> int:
        count = await self.db.scalar(
            select(func.count(RentalPO.id))
            .join(Rental, Rental.rental_id == RentalPO.rental_id)
            .where(
                RentalPO.po_id == po_id,
                Rental.status.in_([status_value(s) for s in statuses]),
            )
        )
        return count or 0

    async def get_vendor_and_release(
        self, po_id: int
    ) -> tuple[str | None, str | None]:
        row = (
            await self.db.execute(
                select(PurchaseOrder.vendor_name, PurchaseOrder.release_number)
                .where(PurchaseOrder.po_id == po_id)
            )
        ).first()

        if row is None:
            return None, None
        return row.vendor_name, row.release_number
