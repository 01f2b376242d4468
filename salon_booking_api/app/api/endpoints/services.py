"""
Catalog service endpoints.

``GET /api/services`` feeds the public booking page and is never
cached.  The ``/services`` routes back the staff portal: they require a
token, accept multipart forms with an optional ``image`` file and
record every change in the audit log.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile

from ...core.security import get_current_user
from ...schemas.service import ServiceCreated, ServiceForm, ServiceRead
from ...services.catalog_service import CatalogService
from ...services.image_service import ImageService
from ..dependencies import get_catalog_service, get_image_service

router = APIRouter()


def service_form(
    name: str = Form(...),
    performer: str = Form(...),
    duration: int = Form(..., gt=0),
    price: int = Form(..., ge=0),
    category: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
) -> ServiceForm:
    return ServiceForm(
        name=name,
        performer=performer,
        duration=duration,
        price=price,
        category=category,
        description=description,
    )


@router.get("/api/services", response_model=List[ServiceRead])
async def list_public_services(
    response: Response,
    catalog: CatalogService = Depends(get_catalog_service),
) -> List[ServiceRead]:
    """Return the whole catalog ordered by category, then name."""
    response.headers["Cache-Control"] = "no-store"
    return await catalog.list_services()


@router.get("/services", response_model=List[ServiceRead])
async def list_portal_services(
    current_user: dict = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
) -> List[ServiceRead]:
    """Return the services the logged‑in staff member manages.

    Admins get every service; other roles only the services whose
    performer contains their username.
    """
    return await catalog.list_services_for(current_user)


@router.post("/services", response_model=ServiceCreated)
async def create_service(
    form: ServiceForm = Depends(service_form),
    image: Optional[UploadFile] = File(None),
    current_user: dict = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
    images: ImageService = Depends(get_image_service),
) -> ServiceCreated:
    image_url = await images.store(image)
    service_id = await catalog.create_service(
        form,
        image_url=image_url,
        username=current_user["username"],
        payload=form.model_dump(),
    )
    return ServiceCreated(id=service_id)


@router.put("/services/{service_id}")
async def update_service(
    service_id: int,
    form: ServiceForm = Depends(service_form),
    existing_image_url: Optional[str] = Form(None, alias="existingImageUrl"),
    image: Optional[UploadFile] = File(None),
    current_user: dict = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
    images: ImageService = Depends(get_image_service),
) -> dict:
    """Replace a service.

    A new ``image`` wins over ``existingImageUrl``; with neither the
    service ends up without an image.  An unknown id is rejected
    before anything is uploaded.
    """
    await catalog.ensure_exists(service_id)
    image_url = await images.store(image) or existing_image_url or None
    payload = form.model_dump()
    payload["existingImageUrl"] = existing_image_url
    await catalog.update_service(
        service_id,
        form,
        image_url=image_url,
        username=current_user["username"],
        payload=payload,
    )
    return {"success": True}


@router.delete("/services/{service_id}")
async def delete_service(
    service_id: int,
    current_user: dict = Depends(get_current_user),
    catalog: CatalogService = Depends(get_catalog_service),
) -> dict:
    await catalog.delete_service(service_id, username=current_user["username"])
    return {"success": True}
