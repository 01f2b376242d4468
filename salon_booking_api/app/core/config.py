"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
application can start without credentials; the external bridges only
fail when they are actually used without being configured.

Staff accounts are loaded once into an immutable mapping of username
to :class:`AdminAccount`.  Two sources are supported:

* ``ADMIN_ACCOUNTS`` – a JSON object such as
  ``{"jessa": {"password_hash": "<salt>$<hash>", "role": "user"}}``.
  Hashes are produced with ``hash_admin_password.py``.
* ``AWLOUNGE_USER_<n>`` / ``AWLOUNGE_PASS_<n>`` / ``AWLOUNGE_ROLE_<n>``
  for ``n`` in 1..10, the older numbered triples.  Their plain
  passwords are hashed at load time and never kept in memory.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .passwords import hash_password

logger = logging.getLogger(__name__)

LEGACY_ACCOUNT_SLOTS = 10


@dataclass(frozen=True)
class AdminAccount:
    """A staff account allowed to log into the portal."""

    username: str
    password_hash: str
    role: str = "user"


def load_admin_accounts(environ: Optional[Mapping[str, str]] = None) -> Mapping[str, AdminAccount]:
    """Build the read‑only account mapping from environment variables.

    Entries from ``ADMIN_ACCOUNTS`` take precedence over numbered
    triples with the same username.
    """
    env = os.environ if environ is None else environ
    accounts: Dict[str, AdminAccount] = {}

    for i in range(1, LEGACY_ACCOUNT_SLOTS + 1):
        user = env.get(f"AWLOUNGE_USER_{i}")
        password = env.get(f"AWLOUNGE_PASS_{i}")
        if user and password:
            role = env.get(f"AWLOUNGE_ROLE_{i}") or "user"
            accounts[user] = AdminAccount(username=user, password_hash=hash_password(password), role=role)

    raw = env.get("ADMIN_ACCOUNTS")
    if raw:
        try:
            entries = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError("ADMIN_ACCOUNTS must be a JSON object") from exc
        if not isinstance(entries, dict):
            raise ValueError("ADMIN_ACCOUNTS must be a JSON object")
        for username, entry in entries.items():
            if not isinstance(entry, dict) or not entry.get("password_hash"):
                raise ValueError(f"ADMIN_ACCOUNTS entry for {username!r} needs a password_hash")
            accounts[username] = AdminAccount(
                username=username,
                password_hash=entry["password_hash"],
                role=entry.get("role") or "user",
            )

    if not accounts:
        logger.warning("No staff accounts configured; portal login is disabled")
    return MappingProxyType(accounts)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Salon Booking API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "10000"))
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Tokens are signed with this secret.  ``JWT_SECRET`` is accepted as
    # an alias for existing deployments.
    secret_key: str = os.getenv("SECRET_KEY", os.getenv("JWT_SECRET", "change_me"))
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(4 * 60)))
    admin_accounts: Mapping[str, AdminAccount] = field(default_factory=load_admin_accounts)

    # Path to the SQLite database file.  A ``sqlite:///`` prefix is
    # accepted and stripped; relative paths are resolved against the
    # project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "salon_booking.db")
    seed_demo_services: bool = _env_flag("SEED_DEMO_SERVICES")

    stripe_secret_key: str = os.getenv("STRIPE_SECRET_KEY", "")
    payment_currency: str = os.getenv("PAYMENT_CURRENCY", "cad")

    google_project_id: str = os.getenv("GOOGLE_PROJECT_ID", "")
    google_private_key_id: str = os.getenv("GOOGLE_PRIVATE_KEY_ID", "")
    google_private_key: str = os.getenv("GOOGLE_PRIVATE_KEY", "")
    google_client_email: str = os.getenv("GOOGLE_CLIENT_EMAIL", "")
    google_client_id: str = os.getenv("GOOGLE_CLIENT_ID", "")
    business_timezone: str = os.getenv("BUSINESS_TIMEZONE", "America/Toronto")

    email_user: str = os.getenv("EMAIL_USER", "")
    email_pass: str = os.getenv("EMAIL_PASS", "")
    email_smtp_server: str = os.getenv("EMAIL_SMTP_SERVER", "smtp.gmail.com")
    email_smtp_port: int = int(os.getenv("EMAIL_SMTP_PORT", "587"))
    # Directory holding the logo and banner embedded in confirmation emails.
    email_assets_dir: str = os.getenv("EMAIL_ASSETS_DIR", "public")

    cloudinary_cloud_name: str = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    cloudinary_api_key: str = os.getenv("CLOUDINARY_API_KEY", "")
    cloudinary_api_secret: str = os.getenv("CLOUDINARY_API_SECRET", "")
    cloudinary_folder: str = os.getenv("CLOUDINARY_FOLDER", "awl_services")

    external_timeout_seconds: float = float(os.getenv("EXTERNAL_TIMEOUT_SECONDS", "30"))

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def google_service_account_info(self) -> Optional[Dict[str, str]]:
        """Service account credentials in the shape Google's libraries expect.

        Returns ``None`` when the private key or client email is missing.
        Escaped ``\\n`` sequences in the key are turned into newlines
        because most hosting dashboards store the key on one line.
        """
        if not self.google_private_key or not self.google_client_email:
            return None
        return {
            "type": "service_account",
            "project_id": self.google_project_id,
            "private_key_id": self.google_private_key_id,
            "private_key": self.google_private_key.replace("\\n", "\n"),
            "client_email": self.google_client_email,
            "client_id": self.google_client_id,
            "token_uri": "https://oauth2.googleapis.com/token",
            "universe_domain": "googleapis.com",
        }


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at import time, environment variables should be set
# before importing this module.
settings = Settings()
