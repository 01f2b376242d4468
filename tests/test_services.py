# These tests cover the public catalog, the staff portal listing and the
# audited add/edit/delete operations, including image uploads.

from __future__ import annotations

from salon_booking_api.app.core.db import Database
from tests.support import ADMIN, JESSA, add_service, auth_headers, service_form


def _audit_rows(settings) -> list[dict]:
    with Database(settings.database_url).get_cursor() as cursor:
        rows = cursor.execute("SELECT username, action, service_id FROM service_logs ORDER BY id").fetchall()
    return [dict(row) for row in rows]


def test_public_listing_is_not_cached(client) -> None:
    add_service(client)

    response = client.get("/api/services")

    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store"
    service = response.json()[0]
    assert service == {
        "id": service["id"],
        "name": "Manicure - 60min",
        "performer": "Trechan",
        "duration": 60,
        "price": 6000,
        "category": "Beauty",
        "imageUrl": None,
        "description": "Classic manicure",
    }


def test_add_service_writes_one_row_and_one_audit_entry(client, settings) -> None:
    response = client.post("/services", data=service_form(), headers=JESSA)

    assert response.status_code == 200
    service_id = response.json()["id"]
    assert response.json() == {"success": True, "id": service_id}
    assert len(client.get("/api/services").json()) == 1
    assert _audit_rows(settings) == [{"username": "jessa", "action": "ADD", "service_id": service_id}]


def test_add_service_creates_missing_category(client) -> None:
    add_service(client, category="  lash   extensions")

    assert "Lash Extensions" in client.get("/api/categories").json()
    assert client.get("/api/services").json()[0]["category"] == "Lash Extensions"


def test_add_service_requires_token(client) -> None:
    response = client.post("/services", data=service_form())

    assert response.status_code == 401


def test_add_service_with_invalid_duration_is_rejected(client) -> None:
    response = client.post("/services", data=service_form(duration="sixty"), headers=ADMIN)

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid value for 'duration'")


def test_add_service_uploads_image(client, media) -> None:
    response = client.post(
        "/services",
        data=service_form(),
        files={"image": ("Lash Lift 2.png", b"\x89PNG fake", "image/png")},
        headers=ADMIN,
    )

    assert response.status_code == 200
    assert media.uploads[0]["folder"] == "awl_services"
    assert media.uploads[0]["public_id"] == "Lash_Lift_2"
    assert media.uploads[0]["content"] == b"\x89PNG fake"
    service = client.get("/api/services").json()[0]
    assert service["imageUrl"] == "https://res.cloudinary.com/demo/image/upload/awl_services/Lash_Lift_2.jpg"


def test_failed_image_upload_stores_nothing(client, media, settings) -> None:
    media.fail = True

    response = client.post(
        "/services",
        data=service_form(),
        files={"image": ("photo.jpg", b"jpeg", "image/jpeg")},
        headers=ADMIN,
    )

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to upload image"}
    assert client.get("/api/services").json() == []
    assert _audit_rows(settings) == []


def test_portal_listing_filters_by_performer_for_staff(client) -> None:
    add_service(client, name="Foot Reflexology - 45min", performer="Jessa")
    add_service(client, name="Hot Stone Massage - 60min", performer="Jessa & Ann")
    add_service(client, name="Brow Lamination - 60min", performer="Maricel")

    response = client.get("/services", headers=JESSA)

    assert response.status_code == 200
    performers = sorted(service["performer"] for service in response.json())
    assert performers == ["Jessa", "Jessa & Ann"]


def test_portal_listing_matches_accented_names_ignoring_case(client) -> None:
    add_service(client, name="Hydrafacial - 60min", performer="Élodie")
    add_service(client, name="Brow Lamination - 60min", performer="Maricel")

    response = client.get("/services", headers=auth_headers("élodie"))

    assert [service["performer"] for service in response.json()] == ["Élodie"]


def test_portal_listing_returns_everything_for_admin(client) -> None:
    add_service(client, performer="Jessa")
    add_service(client, performer="Maricel")

    response = client.get("/services", headers=auth_headers("owner", "Admin"))

    assert len(response.json()) == 2


def test_update_service_keeps_existing_image(client, settings) -> None:
    service_id = add_service(client)

    response = client.put(
        f"/services/{service_id}",
        data={**service_form(price="7000"), "existingImageUrl": "https://img.example/old.jpg"},
        headers=ADMIN,
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    service = client.get("/api/services").json()[0]
    assert service["price"] == 7000
    assert service["imageUrl"] == "https://img.example/old.jpg"
    assert _audit_rows(settings)[-1] == {"username": "admin", "action": "EDIT", "service_id": service_id}


def test_update_service_new_image_replaces_existing(client) -> None:
    service_id = add_service(client)

    client.put(
        f"/services/{service_id}",
        data={**service_form(), "existingImageUrl": "https://img.example/old.jpg"},
        files={"image": ("new look.jpg", b"jpeg", "image/jpeg")},
        headers=ADMIN,
    )

    image_url = client.get("/api/services").json()[0]["imageUrl"]
    assert image_url.endswith("/awl_services/new_look.jpg")


def test_update_unknown_service_returns_404(client, media, settings) -> None:
    response = client.put(
        "/services/999",
        data=service_form(),
        files={"image": ("x.jpg", b"jpeg", "image/jpeg")},
        headers=ADMIN,
    )

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Service not found"}
    assert _audit_rows(settings) == []
    assert media.uploads == []


def test_delete_service_logs_removed_row(client) -> None:
    service_id = add_service(client)

    response = client.delete(f"/services/{service_id}", headers=ADMIN)

    assert response.status_code == 200
    assert client.get("/api/services").json() == []
    logs = client.get("/admin/logs", params={"action": "DELETE"}, headers=ADMIN).json()
    assert len(logs) == 1
    assert logs[0]["service_id"] == service_id
    assert logs[0]["details"]["name"] == "Manicure - 60min"
    assert "imageUrl" in logs[0]["details"]


def test_delete_missing_service_returns_404_without_audit(client, settings) -> None:
    response = client.delete("/services/4242", headers=ADMIN)

    assert response.status_code == 404
    assert _audit_rows(settings) == []
