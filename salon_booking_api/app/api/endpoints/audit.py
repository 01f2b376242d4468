"""
Audit log endpoint.

Lets administrators review who added, edited or deleted which service.
Other roles get 403.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ...core.security import require_roles
from ...schemas.audit import ServiceLogRead
from ...services.audit_service import AuditService
from ..dependencies import get_audit_service

router = APIRouter()


@router.get("/logs", response_model=List[ServiceLogRead])
async def list_service_logs(
    username: Optional[str] = Query(None, description="Filter by acting username"),
    action: Optional[str] = Query(None, description="Filter by action (ADD, EDIT, DELETE)"),
    service_id: Optional[int] = Query(None, description="Filter by service id"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    current_user: dict = Depends(require_roles("admin")),
    audit: AuditService = Depends(get_audit_service),
) -> List[dict]:
    """Return audit entries, newest first."""
    return await audit.list_logs(
        username=username,
        action=action,
        service_id=service_id,
        limit=limit,
        offset=offset,
    )
