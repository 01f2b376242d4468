"""
Endpoint modules.

Each module defines an APIRouter for one area (categories, services,
payments, calendar, auth, audit, health).  They are aggregated in
``api/router.py``.
"""
