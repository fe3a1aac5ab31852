from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, asc, desc, delete, or_
from sqlalchemy.exc import IntegrityError

from fred.models.purchase_orders.purchase_order_models import PurchaseOrder
from fred.models.rentals.rental_models import Rental, RentalPO
from fred.models.users.user_models import User

from fred.constants.purchase_order import POStatus, DEFAULT_PO_TYPES, status_value
from fred.constants.activity_codes import ActivityCode
from fred.constants.error_codes import ErrorCode

from fred.core.exceptions import AppException
from fred.services.purchase_orders.po_lookup import SqlAlchemyPurchaseOrderLookup
from fred.utils.activity_helpers import emit_activity
from fred.utils.logger import get_logger
from fred.utils.response import PageData
from fred.workflow import (
    WorkflowError,
    validate_transition,
    validate_business_rules,
    get_workflow_info,
    get_allowed_next_statuses,
)

from fred.schemas.purchase_orders.po_schemas import (
    POCreateSchema,
    POUpdateSchema,
    POOutSchema,
    VendorOutSchema,
    WorkflowInfoSchema,
    RentalLinkOutSchema,
)

logger = get_logger("fred.workflow")


# =====================================================
# SORT MAP
# =====================================================
ALLOWED_SORT_FIELDS = {
    "po_id": PurchaseOrder.po_id,
    "status": PurchaseOrder.status,
    "vendor_name": PurchaseOrder.vendor_name,
    "start_date": PurchaseOrder.start_date,
    "created_at": PurchaseOrder.created_at,
}

# plain PO columns a create/update payload may set
PO_FIELDS = (
    "release_number",
    "vendor_name",
    "vendor_email",
    "vendor_phone",
    "business_unit",
    "requisition_number",
    "received_by",
    "po_type",
    "special_event",
    "start_date",
    "expiration_date",
    "monthly_equipment_rate",
    "requested_via_purchasing",
    "txdot_gps",
    "chart_fields",
)


# =====================================================
# SHARED HELPERS
# =====================================================
def workflow_exception(error: WorkflowError) -> AppException:
    return AppException(
        error.status_code,
        error.message,
        error.error_code,
        details=error.details(),
    )


def _build_po_out(po: PurchaseOrder) -> POOutSchema:
    return POOutSchema(
        po_id=po.po_id,
        status=po.status,
        release_number=po.release_number,
        vendor_name=po.vendor_name,
        vendor_email=po.vendor_email,
        vendor_phone=po.vendor_phone,
        business_unit=po.business_unit,
        requisition_number=po.requisition_number,
        received_by=po.received_by,
        po_type=po.po_type,
        special_event=po.special_event,
        start_date=po.start_date,
        expiration_date=po.expiration_date,
        monthly_equipment_rate=po.monthly_equipment_rate,
        requested_via_purchasing=bool(po.requested_via_purchasing),
        txdot_gps=bool(po.txdot_gps),
        chart_fields=bool(po.chart_fields),
        version=po.version,
        linked_rental_ids=sorted(link.rental_id for link in po.rental_links),
        created_at=po.created_at,
        updated_at=po.updated_at,
        created_by=po.created_by_id,
        updated_by=po.updated_by_id,
        created_by_name=po.created_by_username,
        updated_by_name=po.updated_by_username,
    )


async def _lock_purchase_order(db: AsyncSession, po_id: int) -> PurchaseOrder:
    # row lock held until commit/rollback so validation and write see one state
    result = await db.execute(
        select(PurchaseOrder)
        .where(PurchaseOrder.po_id == po_id)
        .with_for_update(of=PurchaseOrder)
    )
    po = result.scalar_one_or_none()

    if not po:
        raise AppException(404, "Purchase order not found", ErrorCode.PO_NOT_FOUND)

    return po


async def _enforce_workflow(
    db: AsyncSession,
    po: PurchaseOrder,
    new_status: str,
    user: User,
) -> None:
    """Run both validators; on rejection roll back and raise."""
    po_id, current = po.po_id, po.status

    error = validate_transition(current, new_status)
    if error is None:
        error = await validate_business_rules(
            SqlAlchemyPurchaseOrderLookup(db), po_id, new_status
        )

    if error is None:
        return

    logger.info(
        "PO status change rejected",
        extra={
            "po_id": po_id,
            "from_status": current,
            "to_status": new_status,
            "error_code": error.error_code,
            "user_id": user.id,
        },
    )
    await db.rollback()
    raise workflow_exception(error)


# =====================================================
# CREATE
# =====================================================
async def create_purchase_order(
    db: AsyncSession,
    payload: POCreateSchema,
    user: User,
) -> POOutSchema:

    status = status_value(payload.status) or POStatus.DRAFT.value
    fields = payload.model_dump(include=set(PO_FIELDS), exclude_none=True)

    po = PurchaseOrder(
        **fields,
        status=status,
        created_by_id=user.id,
        updated_by_id=user.id,
    )
    db.add(po)
    await db.flush()

    await emit_activity(
        db,
        user=user,
        code=ActivityCode.CREATE_PO,
        target_name=po.po_id,
        to_status=status,
    )

    await db.commit()

    logger.info("PO created", extra={"po_id": po.po_id, "status": status})
    return await get_purchase_order(db, po.po_id)


# =====================================================
# GET
# =====================================================
async def get_purchase_order(
    db: AsyncSession,
    po_id: int,
) -> POOutSchema:

    result = await db.execute(
        select(PurchaseOrder)
        .where(PurchaseOrder.po_id == po_id)
        .execution_options(populate_existing=True)
    )
    po = result.scalar_one_or_none()

    if not po:
        raise AppException(404, "Purchase order not found", ErrorCode.PO_NOT_FOUND)

    return _build_po_out(po)


# =====================================================
# LIST
# =====================================================
async def list_purchase_orders(
    db: AsyncSession,
    *,
    search: str | None = None,
    status: str | None = None,
    vendor: str | None = None,
    po_type: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    page: int = 1,
    page_size: int = 20,
    sort_by: str = "po_id",
    order: str = "desc",
) -> PageData[POOutSchema]:

    sort_col = ALLOWED_SORT_FIELDS.get(sort_by)
    if sort_col is None:
        raise AppException(400, "Invalid sort field", ErrorCode.PO_INVALID_SORT_FIELD)

    filters = []

    if search:
        term = f"%{search.strip()}%"
        clauses = [
            PurchaseOrder.release_number.ilike(term),
            PurchaseOrder.vendor_name.ilike(term),
        ]
        if search.strip().isdigit():
            clauses.append(PurchaseOrder.po_id == int(search))
        filters.append(or_(*clauses))

    if status:
        filters.append(PurchaseOrder.status == status)
    if vendor:
        filters.append(PurchaseOrder.vendor_name.ilike(f"%{vendor}%"))
    if po_type:
        filters.append(PurchaseOrder.po_type == po_type)
    if start_date:
        filters.append(PurchaseOrder.start_date >= start_date)
    if end_date:
        filters.append(PurchaseOrder.start_date <= end_date)

    total = await db.scalar(
        select(func.count(PurchaseOrder.po_id)).where(*filters)
    )

    sort_order = desc(sort_col) if order.lower() == "desc" else asc(sort_col)
    rows = await db.execute(
        select(PurchaseOrder)
        .where(*filters)
        .order_by(sort_order, PurchaseOrder.po_id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )

    return PageData[POOutSchema](
        total=total or 0,
        page=page,
        page_size=page_size,
        items=[_build_po_out(po) for po in rows.scalars().all()],
    )


# =====================================================
# UPDATE
# =====================================================
async def update_purchase_order(
    db: AsyncSession,
    po_id: int,
    payload: POUpdateSchema,
    user: User,
) -> POOutSchema:

    po = await _lock_purchase_order(db, po_id)

    if po.version != payload.version:
        raise AppException(
            409,
            "Purchase order modified by another process",
            ErrorCode.PO_VERSION_CONFLICT,
        )

    changes: list[str] = []
    for name, value in payload.model_dump(
        include=set(PO_FIELDS), exclude_unset=True
    ).items():
        if getattr(po, name) != value:
            setattr(po, name, value)
            changes.append(name)

    from_status = po.status
    new_status = status_value(payload.status)
    status_changed = new_status is not None and new_status != from_status

    # an explicit same-status request is an audit-only write, as on /status
    if not changes and new_status is None:
        raise AppException(400, "No changes detected", ErrorCode.NO_CHANGES_DETECTED)

    if status_changed:
        # activation rules must see the vendor/release sent in this same request
        await db.flush()
        await _enforce_workflow(db, po, new_status, user)
        po.status = new_status
        changes.append("status")

    po.touch(user)

    if changes:
        await emit_activity(
            db,
            user=user,
            code=ActivityCode.UPDATE_PO,
            target_name=po.po_id,
            changes=", ".join(changes),
        )
    if status_changed:
        await emit_activity(
            db,
            user=user,
            code=ActivityCode.CHANGE_PO_STATUS,
            target_name=po.po_id,
            from_status=from_status,
            to_status=new_status,
        )

    await db.commit()

    return await get_purchase_order(db, po_id)


# =====================================================
# STATUS CHANGE
# =====================================================
async def apply_status_change(
    db: AsyncSession,
    po_id: int,
    new_status: POStatus | str,
    user: User,
) -> POOutSchema:
    """
    Read, validate and write a PO status change in one transaction.

    Same-status requests skip both validators and only touch audit fields.
    Rejections leave the row untouched and are never retried.
    """
    target = status_value(new_status)
    po = await _lock_purchase_order(db, po_id)
    from_status = po.status

    if target != from_status:
        await _enforce_workflow(db, po, target, user)
        po.status = target

        await emit_activity(
            db,
            user=user,
            code=ActivityCode.CHANGE_PO_STATUS,
            target_name=po.po_id,
            from_status=from_status,
            to_status=target,
        )

    po.touch(user)

    await db.commit()

    if target != from_status:
        logger.info(
            "PO status changed",
            extra={
                "po_id": po_id,
                "from_status": from_status,
                "to_status": target,
                "user_id": user.id,
            },
        )

    return await get_purchase_order(db, po_id)


# =====================================================
# DELETE
# =====================================================
async def delete_purchase_order(
    db: AsyncSession,
    po_id: int,
    user: User,
) -> dict:

    po = await _lock_purchase_order(db, po_id)

    linked = await db.scalar(
        select(func.count(RentalPO.id)).where(RentalPO.po_id == po_id)
    )
    if linked:
        raise AppException(
            409,
            f"Cannot delete PO. It has {linked} linked rental(s).",
            ErrorCode.PO_HAS_LINKED_RENTALS,
            details={"linked_rentals": linked},
        )

    await db.delete(po)

    await emit_activity(
        db,
        user=user,
        code=ActivityCode.DELETE_PO,
        target_name=po_id,
    )

    await db.commit()

    return {"po_id": po_id}


# =====================================================
# RENTAL LINKS
# =====================================================
async def link_rental(
    db: AsyncSession,
    po_id: int,
    rental_id: int,
    user: User,
) -> RentalLinkOutSchema:

    exists_po = await db.scalar(
        select(PurchaseOrder.po_id).where(PurchaseOrder.po_id == po_id)
    )
    if not exists_po:
        raise AppException(404, "Purchase order not found", ErrorCode.PO_NOT_FOUND)

    exists_rental = await db.scalar(
        select(Rental.rental_id).where(Rental.rental_id == rental_id)
    )
    if not exists_rental:
        raise AppException(404, "Rental not found", ErrorCode.RENTAL_NOT_FOUND)

    exists_link = await db.scalar(
        select(RentalPO.id).where(
            RentalPO.po_id == po_id,
            RentalPO.rental_id == rental_id,
        )
    )
    if exists_link:
        raise AppException(
            409,
            "PO is already linked to this rental",
            ErrorCode.PO_RENTAL_ALREADY_LINKED,
        )

    try:
        db.add(RentalPO(po_id=po_id, rental_id=rental_id))

        await emit_activity(
            db,
            user=user,
            code=ActivityCode.LINK_PO_RENTAL,
            target_name=po_id,
            rental_id=rental_id,
        )

        await db.commit()

    except IntegrityError:
        await db.rollback()
        raise AppException(
            409,
            "PO is already linked to this rental",
            ErrorCode.PO_RENTAL_ALREADY_LINKED,
        )

    return RentalLinkOutSchema(po_id=po_id, rental_id=rental_id)


async def unlink_rental(
    db: AsyncSession,
    po_id: int,
    rental_id: int,
    user: User,
) -> RentalLinkOutSchema:

    result = await db.execute(
        delete(RentalPO).where(
            RentalPO.po_id == po_id,
            RentalPO.rental_id == rental_id,
        )
    )

    if result.rowcount:
        await emit_activity(
            db,
            user=user,
            code=ActivityCode.UNLINK_PO_RENTAL,
            target_name=po_id,
            rental_id=rental_id,
        )

    await db.commit()

    return RentalLinkOutSchema(po_id=po_id, rental_id=rental_id)


# =====================================================
# LOOKUPS
# =====================================================
async def list_vendors(db: AsyncSession) -> list[VendorOutSchema]:
    rows = await db.execute(
        select(
            PurchaseOrder.vendor_name,
            func.min(PurchaseOrder.vendor_email).label("vendor_email"),
            func.min(PurchaseOrder.vendor_phone).label("vendor_phone"),
        )
        .where(PurchaseOrder.vendor_name.is_not(None))
        .group_by(PurchaseOrder.vendor_name)
        .order_by(PurchaseOrder.vendor_name.asc())
    )

    return [
        VendorOutSchema(
            vendor_name=r.vendor_name,
            vendor_email=r.vendor_email,
            vendor_phone=r.vendor_phone,
        )
        for r in rows.all()
    ]


async def list_po_statuses(db: AsyncSession) -> list[str]:
    rows = await db.execute(
        select(PurchaseOrder.status)
        .where(PurchaseOrder.status.is_not(None))
        .distinct()
        .order_by(PurchaseOrder.status.asc())
    )
    statuses = list(rows.scalars().all())
    return statuses or [s.value for s in POStatus]


async def list_po_types(db: AsyncSession) -> list[str]:
    rows = await db.execute(
        select(PurchaseOrder.po_type)
        .where(PurchaseOrder.po_type.is_not(None))
        .distinct()
        .order_by(PurchaseOrder.po_type.asc())
    )
    types = list(rows.scalars().all())
    return types or list(DEFAULT_PO_TYPES)


# =====================================================
# WORKFLOW GUIDANCE
# =====================================================
def build_workflow_info(
    po_id: int | None,
    current_status: str | None,
) -> WorkflowInfoSchema:
    info = get_workflow_info(current_status)
    return WorkflowInfoSchema(
        po_id=po_id,
        current_status=current_status,
        allowed_transitions=info.allowed_transitions,
        allowed_next_statuses=get_allowed_next_statuses(po_id, current_status),
        is_terminal=info.is_terminal,
        next_steps=info.next_steps,
    )


async def get_po_workflow(
    db: AsyncSession,
    po_id: int,
) -> WorkflowInfoSchema:

    exists = await db.execute(
        select(PurchaseOrder.po_id, PurchaseOrder.status)
        .where(PurchaseOrder.po_id == po_id)
    )
    row = exists.first()

    if not row:
        raise AppException(404, "Purchase order not found", ErrorCode.PO_NOT_FOUND)

    return build_workflow_info(row.po_id, row.status)
