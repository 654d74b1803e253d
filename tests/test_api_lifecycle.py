# tests/test_api_lifecycle.py

"""
End-to-end lifecycle through the HTTP API:
move-out → review → inspection → finalize → end → move-in.
"""

import base64
import io
from types import SimpleNamespace

from fastapi.testclient import TestClient
from PIL import Image

from core.config import settings
from models.enums import ChecklistKey


ALL_YES = {key.value: {"yes_no": True} for key in ChecklistKey}
SIGNATURE = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\n" + b"\x01" * 16).decode()


def png_bytes(size=(64, 48)):
    buf = io.BytesIO()
    Image.new("RGB", size, (200, 40, 40)).save(buf, "PNG")
    return buf.getvalue()


# -----------------------------------------------------
# Health
# -----------------------------------------------------
def test_health_app(client: TestClient):
    response = client.get("/health/app")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_startup_skips_route_entries_without_path(app):
    app.router.routes.append(SimpleNamespace(methods=None))

    with TestClient(app) as test_client:
        response = test_client.get("/health/app")

    assert response.status_code == 200


def test_health_db(client: TestClient, fake_db):
    response = client.get("/health/db")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["details"]["tables"]["tenancies"]["rows_found"] == 1


# -----------------------------------------------------
# Move-out
# -----------------------------------------------------
def test_damage_without_description_is_422(client: TestClient, fake_db, login_as, tenant_user):
    login_as(tenant_user)

    response = client.post(
        "/move-out",
        json={
            "tenancy_id": "tenancy-1",
            "planned_move_out_date": "2026-06-30",
            "has_damage": True,
            "damage_description": "",
        },
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "Damage description is required when reporting damage"
    assert fake_db.rows("move_out_intentions") == []


def test_upload_photos_returns_urls(client: TestClient, fake_db, login_as, tenant_user):
    login_as(tenant_user)

    response = client.post(
        "/uploads/photos",
        data={"category": "damage", "tenancy_id": "tenancy-1"},
        files=[
            ("files", ("wall.png", png_bytes(), "image/png")),
            ("files", ("floor.png", png_bytes((80, 60)), "image/png")),
        ],
    )

    assert response.status_code == 200
    body = response.json()
    assert body["bucket"] == "move-out-damage-photos"
    assert len(body["urls"]) == 2
    assert all(url.endswith(".webp") for url in body["urls"])
    assert all(obj["options"]["content-type"] == "image/webp" for obj in fake_db.objects.values())


def test_upload_rejects_non_images(client: TestClient, fake_db, login_as, tenant_user):
    login_as(tenant_user)

    response = client.post(
        "/uploads/photos",
        data={"category": "key_area", "tenancy_id": "tenancy-1"},
        files=[("files", ("notes.txt", b"hello", "text/plain"))],
    )

    assert response.status_code == 422
    assert "image files" in response.json()["detail"]
    assert fake_db.objects == {}


def test_upload_rejects_html_labelled_webp(client: TestClient, fake_db, login_as, tenant_user):
    login_as(tenant_user)

    response = client.post(
        "/uploads/photos",
        data={"category": "damage", "tenancy_id": "tenancy-1"},
        files=[("files", ("x.webp", b"<html>not an image</html>", "image/webp"))],
    )

    assert response.status_code == 400
    assert fake_db.objects == {}


def test_upload_rejects_oversized_raw_file(client: TestClient, fake_db, login_as, tenant_user, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 100)
    login_as(tenant_user)

    response = client.post(
        "/uploads/photos",
        data={"category": "key_area", "tenancy_id": "tenancy-1"},
        files=[
            ("files", ("small.png", png_bytes((4, 4)), "image/png")),
            ("files", ("big.png", b"\x89PNG" + b"\x00" * 500, "image/png")),
        ],
    )

    assert response.status_code == 422
    assert "upload limit" in response.json()["detail"]
    assert fake_db.objects == {}


def test_upload_to_someone_elses_tenancy(client: TestClient, fake_db, login_as, other_tenant_user):
    login_as(other_tenant_user)

    response = client.post(
        "/uploads/photos",
        data={"category": "key_area", "tenancy_id": "tenancy-1"},
        files=[("files", ("wall.png", png_bytes(), "image/png"))],
    )

    assert response.status_code == 403


def test_signed_url_for_coordinator(client: TestClient, fake_db, login_as, coordinator_user):
    login_as(coordinator_user)

    response = client.get("/uploads/signed-url", params={"category": "damage", "path": "tenancy-1/1-a.webp"})

    assert response.status_code == 200
    assert "move-out-damage-photos/tenancy-1/1-a.webp" in response.json()["url"]


# -----------------------------------------------------
# Full lifecycle
# -----------------------------------------------------
def test_full_tenancy_lifecycle(
    client: TestClient, fake_db, login_as, tenant_user, coordinator_user, admin_user, other_tenant_user
):
    # Tenant declares move-out
    login_as(tenant_user)
    response = client.post(
        "/move-out",
        json={
            "tenancy_id": "tenancy-1",
            "planned_move_out_date": "2026-06-30",
            "key_area_photos": ["https://fake.supabase.co/k.webp"],
            "rent_paid_up": True,
            "areas_cleaned": True,
        },
    )
    assert response.status_code == 201
    intention_id = response.json()["id"]

    # Coordinator reviews
    login_as(coordinator_user)
    queue = client.get("/move-out", params={"status": "PENDING"}).json()
    assert [i["id"] for i in queue] == [intention_id]

    response = client.post(
        f"/move-out/{intention_id}/review",
        json={"decision": "APPROVE", "coordinator_notes": "Confirmed date"},
    )
    assert response.status_code == 200
    assert response.json()["sign_off_status"] == "APPROVED"

    # Inspection
    response = client.post("/inspections", json={"tenancy_id": "tenancy-1", "room_id": "room-1"})
    assert response.status_code == 201
    inspection_id = response.json()["id"]

    response = client.put(
        f"/inspections/{inspection_id}/checklist",
        json={"items": {"no_damage": {"yes_no": False, "description": ""}}},
    )
    assert response.status_code == 422
    assert response.json()["detail"] == 'Please provide a description for "No damage/stain caused" (no_damage)'

    response = client.post(f"/inspections/{inspection_id}/finalize", json={"items": ALL_YES})
    assert response.status_code == 200
    assert response.json()["status"] == "FINAL"

    response = client.post(f"/inspections/{inspection_id}/finalize", json={"items": ALL_YES})
    assert response.status_code == 409

    detail = client.get(f"/inspections/{inspection_id}").json()
    assert len(detail["checklist"]) == len(ChecklistKey)

    # Admin ends the tenancy and lets the room again
    login_as(admin_user)
    response = client.post("/tenancies/tenancy-1/end")
    assert response.status_code == 200
    assert response.json()["status"] == "ENDED"

    response = client.post(
        "/tenancies",
        json={
            "room_id": "room-1",
            "tenant_user_id": "tenant-2",
            "start_date": "2026-07-01",
            "requires_move_in_signature": True,
        },
    )
    assert response.status_code == 201
    new_tenancy_id = response.json()["id"]
    assert response.json()["status"] == "MOVE_IN_PENDING_SIGNATURE"

    # New tenant reviews evidence, confirms keys and signs
    login_as(other_tenant_user)
    assert client.get("/tenancies/me/move-in").json()["id"] == new_tenancy_id

    evidence = client.get("/rooms/room-1/previous-evidence").json()
    assert evidence["intention_id"] == intention_id
    assert evidence["inspection_id"] == inspection_id

    response = client.post(f"/move-in/{new_tenancy_id}/sign", json={"signature_image": SIGNATURE})
    assert response.status_code == 422

    assert client.post(f"/move-in/{new_tenancy_id}/keys").status_code == 200

    response = client.post(
        f"/move-in/{new_tenancy_id}/sign",
        json={"signature_image": SIGNATURE},
        headers={"User-Agent": "lifecycle-test"},
    )
    assert response.status_code == 201
    ack = response.json()
    assert ack["inspection_id"] == inspection_id
    assert ack["audit_json"]["user_agent"] == "lifecycle-test"

    assert client.get("/tenancies/me").json()["status"] == "OCCUPIED"


# -----------------------------------------------------
# Admin surface
# -----------------------------------------------------
def test_admin_house_and_room_management(client: TestClient, fake_db, login_as, admin_user):
    login_as(admin_user)

    house = client.post("/houses", json={"name": "Garden Flat", "address": " 2 Park Rd "}).json()
    assert house["address"] == "2 Park Rd"

    response = client.post(f"/houses/{house['id']}/rooms", json={"label": "Front", "capacity": 2})
    assert response.status_code == 201
    room_id = response.json()["id"]

    response = client.post(f"/houses/{house['id']}/rooms", json={"label": "Back", "capacity": 3})
    assert response.status_code == 422

    rooms = client.get(f"/houses/{house['id']}/rooms").json()
    assert [r["id"] for r in rooms] == [room_id]

    response = client.post(f"/houses/{house['id']}/coordinators", json={"user_id": "coord-2"})
    assert response.status_code == 201
    assert client.get(f"/houses/{house['id']}/coordinators").json()[0]["user"]["name"] == "Robin"

    assert client.patch(f"/rooms/{room_id}", json={"active": False}).json()["active"] is False
    assert client.delete(f"/rooms/{room_id}").json() == {"success": True}
    assert client.delete("/rooms/missing").status_code == 404


def test_tenancy_slot_conflict_is_409(client: TestClient, fake_db, login_as, admin_user):
    login_as(admin_user)
    payload = {"room_id": "room-2", "tenant_user_id": "tenant-2", "start_date": "2026-07-01", "slot": "A"}

    assert client.post("/tenancies", json=payload).status_code == 201
    response = client.post("/tenancies", json=payload)

    assert response.status_code == 409


def test_remote_failure_is_502(client: TestClient, fake_db, login_as, admin_user):
    login_as(admin_user)
    fake_db.fail_on.add(("select", "tenancies"))

    response = client.get("/tenancies")

    assert response.status_code == 502
    assert response.json()["detail"] == "select on tenancies failed"


def test_create_user_endpoint(client: TestClient, fake_db, login_as, admin_user):
    login_as(admin_user)

    response = client.post(
        "/users",
        json={"email": "newbie@example.com", "name": "Newbie", "password": "longenough", "role": "TENANT"},
    )

    assert response.status_code == 201
    assert response.json()["role"] == "TENANT"
    assert any(u["email"] == "newbie@example.com" for u in client.get("/users").json())


def test_unknown_notification_type(client: TestClient, fake_db, login_as, admin_user):
    login_as(admin_user)

    response = client.post("/notifications", json={"type": "rent_reminder", "data": {}})

    assert response.status_code == 422
    assert response.json()["detail"] == "Unknown notification type: rent_reminder"


def test_get_house_respects_assignment(client: TestClient, fake_db, login_as, coordinator_user, other_coordinator_user):
    login_as(coordinator_user)
    assert client.get("/houses/house-1").json()["name"] == "Harbour House"

    login_as(other_coordinator_user)
    assert client.get("/houses/house-1").status_code == 403


def test_tenancy_listing_includes_room_and_tenant(client: TestClient, fake_db, login_as, admin_user):
    login_as(admin_user)

    tenancy = client.get("/tenancies").json()[0]

    assert tenancy["room"]["label"] == "Room 1"
    assert tenancy["tenant"]["email"] == "tenant@example.com"
