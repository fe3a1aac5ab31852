from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fred.constants.purchase_order import POStatus
from fred.core.db import get_db
from fred.utils.check_roles import require_role, READ_ROLES, PO_WRITE_ROLES
from fred.utils.response import success_response, APIResponse, PageData

from fred.schemas.purchase_orders.po_schemas import (
    POCreateSchema,
    POUpdateSchema,
    POStatusChangeSchema,
    POOutSchema,
    VendorOutSchema,
    WorkflowInfoSchema,
    RentalLinkOutSchema,
)

from fred.services.purchase_orders.po_service import (
    create_purchase_order,
    get_purchase_order,
    list_purchase_orders,
    update_purchase_order,
    apply_status_change,
    delete_purchase_order,
    link_rental,
    unlink_rental,
    list_vendors,
    list_po_statuses,
    list_po_types,
    build_workflow_info,
    get_po_workflow,
)

router = APIRouter(
    prefix="/purchase-orders",
    tags=["Purchase Orders"],
)

# =========================
# CREATE
# =========================
@router.post("/", response_model=APIResponse[POOutSchema])
async def create_po_api(
    payload: POCreateSchema,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(PO_WRITE_ROLES)),
):
    po = await create_purchase_order(db, payload, user)
    return success_response("Purchase order created successfully", po)


# =========================
# LIST
# =========================
@router.get("/", response_model=APIResponse[PageData[POOutSchema]])
async def list_pos_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(READ_ROLES)),

    search: str | None = Query(None, description="PO id, release number or vendor"),
    status: str | None = Query(None),
    vendor: str | None = Query(None),
    po_type: str | None = Query(None),
    start_date: date | None = Query(None, description="YYYY-MM-DD"),
    end_date: date | None = Query(None, description="YYYY-MM-DD"),

    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),

    sort_by: str = Query("po_id"),
    order: str = Query("desc"),
):
    data = await list_purchase_orders(
        db,
        search=search,
        status=status,
        vendor=vendor,
        po_type=po_type,
        start_date=start_date,
        end_date=end_date,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        order=order,
    )
    return success_response("Purchase orders fetched successfully", data)


# =========================
# LOOKUPS
# =========================
@router.get("/vendors", response_model=APIResponse[list[VendorOutSchema]])
async def list_vendors_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(READ_ROLES)),
):
    return success_response("Vendors fetched successfully", await list_vendors(db))


@router.get("/statuses", response_model=APIResponse[list[str]])
async def list_statuses_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(READ_ROLES)),
):
    return success_response("PO statuses fetched successfully", await list_po_statuses(db))


@router.get("/types", response_model=APIResponse[list[str]])
async def list_types_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(READ_ROLES)),
):
    return success_response("PO types fetched successfully", await list_po_types(db))


# =========================
# WORKFLOW (NEW / ANY STATUS)
# =========================
@router.get("/workflow", response_model=APIResponse[WorkflowInfoSchema])
async def workflow_info_api(
    status: POStatus | None = Query(None, description="Omit for a new PO"),
    user=Depends(require_role(READ_ROLES)),
):
    current = status.value if status else None
    info = build_workflow_info(None, current)
    return success_response("Workflow info fetched successfully", info)


# =========================
# GET BY ID
# =========================
@router.get("/{po_id}", response_model=APIResponse[POOutSchema])
async def get_po_api(
    po_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(READ_ROLES)),
):
    po = await get_purchase_order(db, po_id)
    return success_response("Purchase order fetched successfully", po)


@router.get("/{po_id}/workflow", response_model=APIResponse[WorkflowInfoSchema])
async def get_po_workflow_api(
    po_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(READ_ROLES)),
):
    info = await get_po_workflow(db, po_id)
    return success_response("Workflow info fetched successfully", info)


# =========================
# UPDATE
# =========================
@router.patch("/{po_id}", response_model=APIResponse[POOutSchema])
async def update_po_api(
    po_id: int,
    payload: POUpdateSchema,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(PO_WRITE_ROLES)),
):
    po = await update_purchase_order(db, po_id, payload, user)
    return success_response("Purchase order updated successfully", po)


# =========================
# STATUS CHANGE
# =========================
@router.post("/{po_id}/status", response_model=APIResponse[POOutSchema])
async def change_po_status_api(
    po_id: int,
    payload: POStatusChangeSchema,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(PO_WRITE_ROLES)),
):
    po = await apply_status_change(db, po_id, payload.status, user)
    return success_response(f"Purchase order status set to {po.status}", po)


# =========================
# DELETE (NO LINKED RENTALS)
# =========================
@router.delete("/{po_id}", response_model=APIResponse[dict])
async def delete_po_api(
    po_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(PO_WRITE_ROLES)),
):
    data = await delete_purchase_order(db, po_id, user)
    return success_response("Purchase order deleted successfully", data)


# =========================
# RENTAL LINKS
# =========================
@router.post("/{po_id}/rentals/{rental_id}", response_model=APIResponse[RentalLinkOutSchema])
async def link_rental_api(
    po_id: int,
    rental_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(PO_WRITE_ROLES)),
):
    link = await link_rental(db, po_id, rental_id, user)
    return success_response("Rental linked to purchase order", link)


@router.delete("/{po_id}/rentals/{rental_id}", response_model=APIResponse[RentalLinkOutSchema])
async def unlink_rental_api(
    po_id: int,
    rental_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(PO_WRITE_ROLES)),
):
    link = await unlink_rental(db, po_id, rental_id, user)
    return success_response("Rental unlinked from purchase order", link)
