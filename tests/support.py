# This file provides shared helpers for the API tests.
# It builds deterministic settings around a temporary SQLite file and
# replaces every external provider with an in-memory fake, so no test
# touches the network.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from types import MappingProxyType
from typing import Any

from fastapi.testclient import TestClient

from salon_booking_api.app.core.config import AdminAccount, Settings
from salon_booking_api.app.core.errors import IntegrationError
from salon_booking_api.app.core.passwords import hash_password
from salon_booking_api.app.core.security import create_access_token
from salon_booking_api.app.integrations import Integrations
from salon_booking_api.app.main import create_app

TEST_SECRET = "test-secret"

ACCOUNTS = {
    "admin": ("admin-pass", "admin"),
    "jessa": ("jessa-pass", "user"),
}

# Hashing is slow on purpose; do it once per session.
_HASHED_ACCOUNTS = MappingProxyType(
    {
        username: AdminAccount(username=username, password_hash=hash_password(password), role=role)
        for username, (password, role) in ACCOUNTS.items()
    }
)


def build_test_settings(tmp_path: Path, **overrides: Any) -> Settings:
    """Create settings backed by a fresh database and email assets under ``tmp_path``."""

    assets_dir = tmp_path / "public"
    assets_dir.mkdir(exist_ok=True)
    (assets_dir / "AWL_Logo.jpg").write_bytes(b"\xff\xd8\xff\xe0logo")
    (assets_dir / "AWL_Banner.jpg").write_bytes(b"\xff\xd8\xff\xe0banner")

    values: dict[str, Any] = {
        "project_name": "Test Salon API",
        "log_level": "WARNING",
        "log_file": None,
        "cors_origins": "*",
        "secret_key": TEST_SECRET,
        "access_token_expire_minutes": 240,
        "admin_accounts": _HASHED_ACCOUNTS,
        "database_url": str(tmp_path / "salon_test.db"),
        "seed_demo_services": False,
        "payment_currency": "cad",
        "business_timezone": "America/Toronto",
        "email_user": "bookings@example.com",
        "email_assets_dir": str(assets_dir),
        "cloudinary_folder": "awl_services",
    }
    values.update(overrides)
    return Settings(**values)


class FakePaymentGateway:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[dict[str, Any]] = []

    def create_payment_intent(self, amount: int, currency: str, description: str) -> str:
        self.calls.append({"amount": amount, "currency": currency, "description": description})
        if self.fail:
            raise IntegrationError("card processor unavailable")
        return f"pi_test_{len(self.calls)}_secret"


class FakeCalendarClient:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.events: list[tuple[str, dict[str, Any]]] = []
        self.freebusy_calls: list[tuple[str, Any, Any]] = []

    def query_freebusy(self, calendar_id: str, time_min: Any, time_max: Any) -> dict[str, Any]:
        self.freebusy_calls.append((calendar_id, time_min, time_max))
        if self.fail:
            raise IntegrationError("calendar unavailable")
        return {
            "kind": "calendar#freeBusy",
            "calendars": {
                calendar_id: {"busy": [{"start": "2026-10-17T14:00:00Z", "end": "2026-10-17T15:00:00Z"}]}
            },
        }

    def insert_event(self, calendar_id: str, event: dict[str, Any]) -> dict[str, Any]:
        if self.fail:
            raise IntegrationError("calendar unavailable")
        self.events.append((calendar_id, event))
        return {"id": f"evt{len(self.events)}", **event}


class FakeMailer:
    sender = "bookings@example.com"

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[Any] = []

    def send(self, message: Any) -> None:
        if self.fail:
            raise IntegrationError("smtp login rejected")
        self.sent.append(message)


class FakeMediaUploader:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.uploads: list[dict[str, Any]] = []

    async def upload(
        self,
        content: bytes,
        filename: str,
        folder: str,
        public_id: str,
        image_format: str = "jpg",
        content_type: str | None = None,
    ) -> str:
        if self.fail:
            raise IntegrationError("upload rejected")
        self.uploads.append(
            {
                "content": content,
                "filename": filename,
                "folder": folder,
                "public_id": public_id,
                "image_format": image_format,
            }
        )
        return f"https://res.cloudinary.com/demo/image/upload/{folder}/{public_id}.{image_format}"


def build_fake_integrations(
    *,
    payments: Any | None = None,
    calendar: Any | None = None,
    mailer: Any | None = None,
    media: Any | None = None,
) -> Integrations:
    return Integrations(
        payments=payments or FakePaymentGateway(),
        calendar=calendar or FakeCalendarClient(),
        mailer=mailer or FakeMailer(),
        media=media or FakeMediaUploader(),
    )


@contextmanager
def api_test_client(settings: Settings, integrations: Integrations | None = None) -> Iterator[TestClient]:
    """Yield a TestClient for an app wired to ``settings`` and fake providers."""

    app = create_app(settings, integrations or build_fake_integrations())
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


def auth_headers(username: str, role: str = "user", *, expires_in: int = 3600) -> dict[str, str]:
    token = create_access_token({"username": username, "role": role}, secret_key=TEST_SECRET, expires_in=expires_in)
    return {"Authorization": f"Bearer {token}"}


ADMIN = auth_headers("admin", "admin")
JESSA = auth_headers("jessa", "user")


def service_form(**overrides: Any) -> dict[str, str]:
    form = {
        "name": "Manicure - 60min",
        "performer": "Trechan",
        "duration": "60",
        "price": "6000",
        "category": "beauty",
        "description": "Classic manicure",
    }
    form.update({key: str(value) for key, value in overrides.items() if value is not None})
    return form


def add_service(client: TestClient, headers: dict[str, str] | None = None, **overrides: Any) -> int:
    response = client.post("/services", data=service_form(**overrides), headers=headers or ADMIN)
    assert response.status_code == 200, response.text
    return response.json()["id"]
