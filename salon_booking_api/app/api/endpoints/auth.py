"""
Staff portal login.

Accounts come from configuration; see ``core.config``.  The returned
token is valid for ``ACCESS_TOKEN_EXPIRE_MINUTES`` (four hours by
default) and must be sent as ``Authorization: Bearer <token>``.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ...core.errors import Unauthorized
from ...schemas.auth import LoginRequest, LoginResponse
from ...services.auth_service import AuthService
from ..dependencies import get_auth_service

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: Optional[LoginRequest] = None,
    auth: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    credentials = credentials or LoginRequest()
    account = auth.authenticate(credentials.username, credentials.password)
    if account is None:
        raise Unauthorized("Invalid credentials")
    return LoginResponse(token=auth.issue_token(account), username=account.username, role=account.role)
