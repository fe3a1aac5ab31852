# fred/routers/__init__.py

from .purchase_orders.po_router import router as purchase_order_router


__all__ = [
"purchase_order_router",
]
