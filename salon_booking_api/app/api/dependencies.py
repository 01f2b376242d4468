"""
Dependency providers for FastAPI routes.

The settings, the database and the external clients are created once
per process by ``main.create_app`` and kept on ``app.state``.  The
functions below hand them to the service classes, so routers stay
thin and tests can swap any piece through ``create_app`` arguments or
``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from ..core.config import Settings
from ..core.db import Database
from ..integrations import Integrations
from ..services.audit_service import AuditService
from ..services.auth_service import AuthService
from ..services.booking_service import BookingService
from ..services.catalog_service import CatalogService
from ..services.category_service import CategoryService
from ..services.image_service import ImageService
from ..services.notification_service import NotificationService
from ..services.payment_service import PaymentService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.db


def get_integrations(request: Request) -> Integrations:
    return request.app.state.integrations


def get_category_service(db: Database = Depends(get_database)) -> CategoryService:
    return CategoryService(db)


def get_catalog_service(db: Database = Depends(get_database)) -> CatalogService:
    return CatalogService(db)


def get_audit_service(db: Database = Depends(get_database)) -> AuditService:
    return AuditService(db)


def get_auth_service(settings: Settings = Depends(get_settings)) -> AuthService:
    return AuthService(
        settings.admin_accounts,
        secret_key=settings.secret_key,
        expire_minutes=settings.access_token_expire_minutes,
    )


def get_image_service(
    settings: Settings = Depends(get_settings),
    integrations: Integrations = Depends(get_integrations),
) -> ImageService:
    return ImageService(integrations.media, folder=settings.cloudinary_folder)


def get_payment_service(
    db: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
    integrations: Integrations = Depends(get_integrations),
) -> PaymentService:
    return PaymentService(db, integrations.payments, currency=settings.payment_currency)


def get_booking_service(
    db: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
    integrations: Integrations = Depends(get_integrations),
) -> BookingService:
    notifications = NotificationService(
        integrations.mailer,
        assets_dir=settings.email_assets_dir,
        timezone_name=settings.business_timezone,
    )
    return BookingService(
        db,
        integrations.calendar,
        notifications,
        timezone_name=settings.business_timezone,
    )
