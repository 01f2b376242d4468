"""
Google Calendar client authenticated with a service account.

The discovery client is built lazily on first use, so the application
starts (and the catalog keeps working) even when calendar credentials
are not configured.
"""

import logging
import threading
from typing import Any, Dict, Optional

import google_auth_httplib2
import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..core.errors import IntegrationError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar"]


class GoogleCalendarClient:
    """Thin wrapper over the Calendar v3 ``freebusy`` and ``events`` resources."""

    def __init__(self, service_account_info: Optional[Dict[str, str]], timeout: float = 30) -> None:
        self._service_account_info = service_account_info
        self._timeout = timeout
        self._service = None
        self._lock = threading.Lock()

    def _get_service(self):
        if self._service is not None:
            return self._service
        if not self._service_account_info:
            raise IntegrationError("Google Calendar credentials are not configured")
        with self._lock:
            if self._service is None:
                try:
                    credentials = service_account.Credentials.from_service_account_info(
                        self._service_account_info, scopes=SCOPES
                    )
                except (ValueError, GoogleAuthError) as exc:
                    raise IntegrationError(f"Invalid Google service account: {exc}") from exc
                http = google_auth_httplib2.AuthorizedHttp(
                    credentials, http=httplib2.Http(timeout=self._timeout)
                )
                self._service = build("calendar", "v3", http=http, cache_discovery=False)
                logger.info("Google Calendar client initialised")
        return self._service

    def query_freebusy(self, calendar_id: str, time_min: Optional[str], time_max: Optional[str]) -> Dict[str, Any]:
        """Return the raw free/busy response for one calendar."""
        body = {"timeMin": time_min, "timeMax": time_max, "items": [{"id": calendar_id}]}
        try:
            return self._get_service().freebusy().query(body=body).execute()
        except (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError) as exc:
            raise IntegrationError(f"Free/busy query failed: {exc}") from exc

    def insert_event(self, calendar_id: str, event: Dict[str, Any]) -> Dict[str, Any]:
        """Insert an event and return the created event resource."""
        try:
            return self._get_service().events().insert(calendarId=calendar_id, body=event).execute()
        except (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError) as exc:
            raise IntegrationError(f"Event insert failed: {exc}") from exc
