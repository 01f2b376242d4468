"""
Category endpoints.

Listing is public so the booking page can build its filters; adding
and deleting require a portal token.
"""

from typing import List

from fastapi import APIRouter, Body, Depends

from ...core.security import get_current_user
from ...schemas.category import CategoryName, CategoryResult
from ...services.category_service import CategoryService
from ..dependencies import get_category_service

router = APIRouter()


@router.get("", response_model=List[str])
async def list_categories(categories: CategoryService = Depends(get_category_service)) -> List[str]:
    """Return all category names in alphabetical order."""
    return await categories.list_categories()


@router.post("", response_model=CategoryResult)
async def add_category(
    payload: CategoryName,
    current_user: dict = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service),
) -> CategoryResult:
    """Add a category.

    The name is trimmed and title‑cased before it is stored.  Adding
    a category that already exists succeeds without creating a second
    row; the response carries the stored name.
    """
    name = await categories.add_category(payload.name)
    return CategoryResult(message=f"Category '{name}' added.", name=name)


@router.delete("")
async def delete_category(
    payload: CategoryName = Body(...),
    current_user: dict = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service),
) -> dict:
    """Delete a category no service uses.

    Responds 400 while any service still references the category and
    404 if it does not exist.
    """
    name = await categories.delete_category(payload.name)
    return {"success": True, "message": f"Category '{name}' deleted."}
