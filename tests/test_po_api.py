import httpx
import pytest
import pytest_asyncio

from fred.core.db import get_db
from fred.core.security import create_access_token
from main import app


def _auth(user):
    token = create_access_token(subject=user.username, token_version=user.token_version)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)

    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def test_health_check(client):
    resp = await client.get("/")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


async def test_requests_need_a_valid_token(client):
    resp = await client.get("/purchase-orders/", headers={"Authorization": "Bearer nope"})

    assert resp.status_code == 401
    assert resp.json()["success"] is False
    assert resp.json()["error_code"] == "UNAUTHORIZED"


async def test_es_can_read_but_not_change_status(client, es_user, make_po):
    po = await make_po(status="Draft")

    read = await client.get(f"/purchase-orders/{po.po_id}", headers=_auth(es_user))
    assert read.status_code == 200
    assert read.json()["data"]["status"] == "Draft"

    write = await client.post(
        f"/purchase-orders/{po.po_id}/status",
        json={"status": "Open"},
        headers=_auth(es_user),
    )
    assert write.status_code == 403
    assert write.json()["error_code"] == "PERMISSION_DENIED"


async def test_create_then_walk_the_workflow(client, rc_user, make_rental):
    headers = _auth(rc_user)

    created = await client.post("/purchase-orders/", json={}, headers=headers)
    assert created.status_code == 200
    po_id = created.json()["data"]["po_id"]
    assert created.json()["data"]["status"] == "Draft"

    opened = await client.post(
        f"/purchase-orders/{po_id}/status", json={"status": "Open"}, headers=headers
    )
    assert opened.json()["data"]["status"] == "Open"

    blocked = await client.post(
        f"/purchase-orders/{po_id}/status", json={"status": "Active"}, headers=headers
    )
    assert blocked.status_code == 409
    assert blocked.json() == {
        "success": False,
        "message": "Cannot activate PO without a vendor name.",
        "error_code": "PO_MISSING_VENDOR",
        "details": {},
    }

    patched = await client.patch(
        f"/purchase-orders/{po_id}",
        json={
            "vendor_name": "Acme",
            "release_number": "R-100",
            "status": "Active",
            "version": opened.json()["data"]["version"],
        },
        headers=headers,
    )
    assert patched.status_code == 200
    assert patched.json()["data"]["status"] == "Active"

    rental = await make_rental("Delivered")
    linked = await client.post(
        f"/purchase-orders/{po_id}/rentals/{rental.rental_id}", headers=headers
    )
    assert linked.status_code == 200

    closing = await client.post(
        f"/purchase-orders/{po_id}/status", json={"status": "Closed"}, headers=headers
    )
    assert closing.status_code == 409
    assert closing.json()["details"] == {"active_rentals": 1}

    workflow = await client.get(f"/purchase-orders/{po_id}/workflow", headers=headers)
    assert workflow.json()["data"]["allowed_next_statuses"] == ["Active", "Closed", "Cancelled"]


async def test_illegal_transition_explains_allowed_options(client, rc_user, make_po):
    po = await make_po(status="Draft")

    resp = await client.post(
        f"/purchase-orders/{po.po_id}/status",
        json={"status": "Closed"},
        headers=_auth(rc_user),
    )

    assert resp.status_code == 400
    body = resp.json()
    assert body["error_code"] == "PO_ILLEGAL_TRANSITION"
    assert body["message"] == (
        "Cannot transition from Draft to Closed. Allowed transitions: Open, Cancelled"
    )
    assert body["details"]["allowed_transitions"] == ["Open", "Cancelled"]


async def test_unknown_status_value_is_rejected_by_schema(client, rc_user, make_po):
    po = await make_po(status="Draft")

    resp = await client.post(
        f"/purchase-orders/{po.po_id}/status",
        json={"status": "Approved"},
        headers=_auth(rc_user),
    )

    assert resp.status_code == 422
    assert resp.json()["error_code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize(
    "query,expected_steps",
    [
        ("", ["Create as Draft to continue editing", "Create as Open to submit for approval"]),
        ("?status=Closed", []),
    ],
)
async def test_workflow_guidance_endpoint(client, rc_user, query, expected_steps):
    resp = await client.get(f"/purchase-orders/workflow{query}", headers=_auth(rc_user))

    assert resp.status_code == 200
    assert resp.json()["data"]["next_steps"] == expected_steps


async def test_lookup_endpoints(client, rc_user, make_po):
    await make_po(vendor_name="Acme", po_type="Emergency")
    headers = _auth(rc_user)

    vendors = await client.get("/purchase-orders/vendors", headers=headers)
    types = await client.get("/purchase-orders/types", headers=headers)

    assert vendors.json()["data"][0]["vendor_name"] == "Acme"
    assert types.json()["data"] == ["Emergency"]


async def test_patch_with_null_flag_is_422(client, rc_user, make_po):
    po = await make_po(vendor_name="Acme")

    resp = await client.patch(
        f"/purchase-orders/{po.po_id}",
        json={"version": 1, "vendor_name": "Beta", "requested_via_purchasing": None},
        headers=_auth(rc_user),
    )

    assert resp.status_code == 422
    assert resp.json()["error_code"] == "VALIDATION_ERROR"


async def test_patch_with_current_status_bumps_version(client, rc_user, make_po):
    po = await make_po(status="Closed")

    resp = await client.patch(
        f"/purchase-orders/{po.po_id}",
        json={"version": 1, "status": "Closed"},
        headers=_auth(rc_user),
    )

    assert resp.status_code == 200
    assert resp.json()["data"]["version"] == 2
