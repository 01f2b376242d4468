"""Pydantic models for audit log entries."""

from typing import Any, Optional

from pydantic import BaseModel


class ServiceLogRead(BaseModel):
    id: int
    username: Optional[str] = None
    action: str
    service_id: Optional[int] = None
    details: Any = None
    timestamp: str
