"""
Shared test configuration.

Every test gets its own SQLite file under ``tmp_path`` and fake
provider clients; see ``tests/support.py``.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from tests.support import (  # noqa: E402
    FakeCalendarClient,
    FakeMailer,
    FakeMediaUploader,
    FakePaymentGateway,
    api_test_client,
    build_test_settings,
)
from salon_booking_api.app.integrations import Integrations  # noqa: E402


@pytest.fixture
def settings(tmp_path: Path):
    return build_test_settings(tmp_path)


@pytest.fixture
def payments() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
def calendar() -> FakeCalendarClient:
    return FakeCalendarClient()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def media() -> FakeMediaUploader:
    return FakeMediaUploader()


@pytest.fixture
def client(settings, payments, calendar, mailer, media):
    integrations = Integrations(payments=payments, calendar=calendar, mailer=mailer, media=media)
    with api_test_client(settings, integrations) as test_client:
        yield test_client
