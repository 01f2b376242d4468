"""
Audit service for recording and querying catalog changes.

Every add, edit and delete of a service appends one row to
``service_logs`` with the acting username and a JSON snapshot of the
change: the submitted form for ADD/EDIT and the removed row for
DELETE.  Entries are written with the caller's cursor so they commit
or roll back together with the change they describe.  Rows are never
updated or deleted.
"""

from __future__ import annotations

import json
import sqlite3
from typing import Any, Dict, List, Optional

from ..core.db import Database

ACTIONS = ("ADD", "EDIT", "DELETE")


class AuditService:
    """Service class for writing and retrieving audit logs."""

    def __init__(self, db: Database) -> None:
        self.db = db

    @staticmethod
    def log_change(
        cursor: sqlite3.Cursor,
        username: Optional[str],
        action: str,
        service_id: Optional[int],
        details: Optional[Dict[str, Any]],
    ) -> None:
        """Insert a new audit record using an open cursor.

        Parameters
        ----------
        cursor : sqlite3.Cursor
            Cursor of the transaction that performs the change.
        username : Optional[str]
            Staff member performing the action.
        action : str
            One of ``ADD``, ``EDIT`` or ``DELETE``.
        service_id : Optional[int]
            Primary key of the affected service.
        details : Optional[dict]
            Snapshot of the change, stored as JSON.
        """
        if action not in ACTIONS:
            raise ValueError(f"Unknown audit action: {action}")
        details_json = json.dumps(details, default=str) if details is not None else None
        cursor.execute(
            "INSERT INTO service_logs (username, action, service_id, details) VALUES (?, ?, ?, ?)",
            (username, action, service_id, details_json),
        )

    async def list_logs(
        self,
        username: Optional[str] = None,
        action: Optional[str] = None,
        service_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """Retrieve audit records, newest first, with optional filters."""
        where_clauses: List[str] = []
        params: List[Any] = []
        if username:
            where_clauses.append("username = ?")
            params.append(username)
        if action:
            where_clauses.append("action = ?")
            params.append(action.upper())
        if service_id is not None:
            where_clauses.append("service_id = ?")
            params.append(service_id)
        query = "SELECT id, username, action, service_id, details, timestamp FROM service_logs"
        if where_clauses:
            query += " WHERE " + " AND ".join(where_clauses)
        query += " ORDER BY id DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])
        with self.db.get_cursor() as cursor:
            rows = cursor.execute(query, tuple(params)).fetchall()
        logs = []
        for row in rows:
            details_data = None
            if row["details"]:
                try:
                    details_data = json.loads(row["details"])
                except json.JSONDecodeError:
                    details_data = row["details"]
            logs.append(
                {
                    "id": row["id"],
                    "username": row["username"],
                    "action": row["action"],
                    "service_id": row["service_id"],
                    "details": details_data,
                    "timestamp": str(row["timestamp"]),
                }
            )
        return logs
