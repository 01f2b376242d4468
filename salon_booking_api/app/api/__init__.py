"""
HTTP layer: routers, endpoint modules and dependency providers.

Paths are unversioned because the booking page and the staff portal
already call them at these locations.
"""
