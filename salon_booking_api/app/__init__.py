"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  The catalog (services and categories), the audit log,
authentication and the external bridges (payments, calendar, mail and
image storage) each live in their own module.  HTTP handlers are
defined in ``api/endpoints`` and business logic in ``services``.
"""

from .main import app  # noqa: F401
