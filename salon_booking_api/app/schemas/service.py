"""
Pydantic models for catalog services.

``ServiceForm`` carries the multipart form fields of the add/update
requests once FastAPI has validated them; ``ServiceRead`` is the row
shape returned by both service listings.  Prices are integers in
cents.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ServiceForm(BaseModel):
    name: str = Field(..., examples=["Brow Lamination - 60min"])
    performer: str = Field(..., examples=["Maricel"])
    duration: int = Field(..., examples=[60], description="Length in minutes")
    price: int = Field(..., examples=[8000], description="Price in cents")
    category: Optional[str] = Field(None, examples=["Beauty"])
    description: Optional[str] = Field(None, examples=["Semi-permanent brow styling"])


class ServiceRead(BaseModel):
    """Schema for reading a service from the API."""

    id: int
    name: str
    performer: str
    duration: int
    price: int
    category: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    description: Optional[str] = None

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }


class ServiceCreated(BaseModel):
    success: bool = True
    id: int
