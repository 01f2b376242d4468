"""Pydantic models for category requests."""

from pydantic import BaseModel, Field


class CategoryName(BaseModel):
    """Body of the add and delete category requests."""

    name: str = Field(..., examples=["hair treatment"])


class CategoryResult(BaseModel):
    success: bool = True
    message: str
    name: str
