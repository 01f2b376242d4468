"""
Security helpers for bearer token authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC‑SHA256 signatures and base64url encoding.  Tokens embed the
staff member's ``username`` and ``role`` and an expiration timestamp
(``exp``).  Tokens are never stored: a token is valid exactly when its
signature matches the configured secret and it has not expired, so a
token cannot be revoked before it runs out.

Protected routes declare ``Depends(get_current_user)``; routes limited
to administrators use ``Depends(require_roles("admin"))``.
"""

import base64
import binascii
import hashlib
import hmac
import json
import time
from typing import Callable, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .errors import Forbidden


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC‑SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, str], secret_key: str, expires_in: int) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with an ``exp`` field representing the
    expiration time as a UNIX timestamp.  The token is a string of the
    form ``header.payload.signature``, where each part is base64url
    encoded.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"username": "jessa", "role": "user"}``).
    secret_key : str
        Signing secret.
    expires_in : int
        Lifetime of the token in seconds.

    Returns
    -------
    str
        A signed JWT token.
    """
    to_encode = data.copy()
    to_encode["exp"] = int(time.time()) + expires_in
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, secret_key: str) -> Optional[Dict[str, str]]:
    """Verify and decode a JWT token.

    Returns the payload dictionary if the signature is valid and the
    token has not expired, otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
    except (binascii.Error, ValueError):
        return None
    # Constant‑time comparison to prevent timing attacks
    if not hmac.compare_digest(_sign(signing_input, secret_key), actual_sig):
        return None
    try:
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (binascii.Error, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    exp = data.get("exp")
    if not isinstance(exp, int) or exp < int(time.time()):
        return None
    return data


security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, str]:
    """Dependency that retrieves the authenticated staff member.

    Missing credentials yield 401 ``Unauthorized``; a bad signature, a
    malformed token or an expired token yields 401 ``Invalid token``.
    On success returns ``{"username": ..., "role": ...}``.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    payload = decode_access_token(credentials.credentials, request.app.state.settings.secret_key)
    if not payload or not payload.get("username"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"username": payload["username"], "role": payload.get("role") or "user"}


def is_admin(current_user: Dict[str, str]) -> bool:
    return (current_user.get("role") or "").lower() == "admin"


def require_roles(*roles: str) -> Callable[[Dict[str, str]], Dict[str, str]]:
    """Dependency factory to enforce that the current user has one of the given roles.

    Role names are compared case‑insensitively.  Use as
    ``Depends(require_roles("admin"))``; other roles get HTTP 403.
    """
    allowed = {role.lower() for role in roles}

    def _role_dependency(current_user: Dict[str, str] = Depends(get_current_user)) -> Dict[str, str]:
        if (current_user.get("role") or "").lower() not in allowed:
            raise Forbidden("Insufficient permissions")
        return current_user

    return _role_dependency
