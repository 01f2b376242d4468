"""
Business logic for the service catalog.

Writes go through :meth:`Database.transaction` so that the service row,
its category and its audit entry are committed together: an add
always leaves exactly one new row and one ``ADD`` audit entry, and a
failed write leaves neither.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from ..core.db import Database
from ..core.errors import NotFound
from ..core.security import is_admin
from ..schemas.service import ServiceForm, ServiceRead
from .audit_service import AuditService
from .category_service import CategoryService, normalize_category_name

logger = logging.getLogger(__name__)

SERVICE_COLUMNS = "id, name, performer, duration, price, category, imageUrl, description"


def _row_to_service(row: sqlite3.Row) -> ServiceRead:
    return ServiceRead(
        id=row["id"],
        name=row["name"],
        performer=row["performer"],
        duration=row["duration"],
        price=row["price"],
        category=row["category"],
        image_url=row["imageUrl"],
        description=row["description"],
    )


class CatalogService:
    """Catalog reads and audited writes."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_services(self) -> List[ServiceRead]:
        """Return every service ordered by category, then name."""
        with self.db.get_cursor() as cursor:
            rows = cursor.execute(
                f"SELECT {SERVICE_COLUMNS} FROM services ORDER BY category, name"
            ).fetchall()
        return [_row_to_service(row) for row in rows]

    async def list_services_for(self, current_user: Dict[str, str]) -> List[ServiceRead]:
        """Return the services a portal user may manage.

        Administrators see the whole catalog.  Other staff see only the
        services whose performer contains their username, ignoring case.
        """
        if is_admin(current_user):
            return await self.list_services()
        with self.db.get_cursor() as cursor:
            rows = cursor.execute(
                f"SELECT {SERVICE_COLUMNS} FROM services "
                "WHERE instr(casefold(performer), casefold(?)) > 0 ORDER BY category, name",
                (current_user["username"],),
            ).fetchall()
        return [_row_to_service(row) for row in rows]

    async def ensure_exists(self, service_id: int) -> None:
        """Raise ``NotFound`` unless a service with this id exists."""
        with self.db.get_cursor() as cursor:
            row = cursor.execute("SELECT 1 FROM services WHERE id = ?", (service_id,)).fetchone()
        if not row:
            raise NotFound("Service not found")

    @staticmethod
    def _prepare_category(cursor: sqlite3.Cursor, category: Optional[str]) -> Optional[str]:
        normalized = normalize_category_name(category or "")
        if not normalized:
            return None
        CategoryService.ensure_category(cursor, normalized)
        return normalized

    async def create_service(
        self,
        data: ServiceForm,
        image_url: Optional[str],
        username: str,
        payload: Dict[str, Any],
    ) -> int:
        """Insert a service and its ``ADD`` audit entry; return the new id."""
        with self.db.transaction() as cursor:
            category = self._prepare_category(cursor, data.category)
            cursor.execute(
                "INSERT INTO services (name, performer, duration, price, category, imageUrl, description) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (data.name, data.performer, data.duration, data.price, category, image_url, data.description),
            )
            service_id = cursor.lastrowid
            AuditService.log_change(cursor, username, "ADD", service_id, payload)
        logger.info("User %s added service %s '%s'", username, service_id, data.name)
        return service_id

    async def update_service(
        self,
        service_id: int,
        data: ServiceForm,
        image_url: Optional[str],
        username: str,
        payload: Dict[str, Any],
    ) -> None:
        """Replace a service's fields and append an ``EDIT`` audit entry.

        Raises ``NotFound`` (and writes nothing) if the id is unknown.
        """
        with self.db.transaction() as cursor:
            exists = cursor.execute("SELECT 1 FROM services WHERE id = ?", (service_id,)).fetchone()
            if not exists:
                raise NotFound("Service not found")
            category = self._prepare_category(cursor, data.category)
            cursor.execute(
                "UPDATE services SET name = ?, performer = ?, duration = ?, price = ?, category = ?, "
                "imageUrl = ?, description = ? WHERE id = ?",
                (
                    data.name,
                    data.performer,
                    data.duration,
                    data.price,
                    category,
                    image_url,
                    data.description,
                    service_id,
                ),
            )
            AuditService.log_change(cursor, username, "EDIT", service_id, payload)
        logger.info("User %s updated service %s", username, service_id)

    async def delete_service(self, service_id: int, username: str) -> None:
        """Delete a service and log the removed row as a ``DELETE`` entry."""
        with self.db.transaction() as cursor:
            row = cursor.execute(
                f"SELECT {SERVICE_COLUMNS} FROM services WHERE id = ?", (service_id,)
            ).fetchone()
            if not row:
                raise NotFound("Service not found")
            cursor.execute("DELETE FROM services WHERE id = ?", (service_id,))
            AuditService.log_change(
                cursor, username, "DELETE", service_id, _row_to_service(row).model_dump(by_alias=True)
            )
        logger.info("User %s deleted service %s", username, service_id)
