"""Pydantic schemas for same-variety drug groups.

Defines update, response, list and detail models.
"""
from datetime import date

from pydantic import BaseModel, Field

from .product import ProductResponse


class DrugGroupBase(BaseModel):
    """Base schema for drug groups.

    Attributes:
        id: Main ID of the group.
        name: Display name of the group.
        product_ids: Member product IDs, main ID included.
    """
    id: str
    name: str
    product_ids: list[str]


class DrugGroupUpdate(BaseModel):
    """Schema for editing an existing group.

    All fields are optional. ``product_ids`` accepts a list or free text
    separated by commas or whitespace.
    """
    name: str | None = None
    product_ids: str | list[str] | None = None
    main_id: str | None = None


class DrugGroupResponse(DrugGroupBase):
    """Schema for drug group API responses."""
    created_at: date

    class Config:
        from_attributes = True


class DrugGroupListResponse(BaseModel):
    """Filtered page of groups with the total match count."""
    items: list[DrugGroupResponse]
    total: int
    limit: int
    offset: int = Field(ge=0)


class GroupMemberResponse(ProductResponse):
    """A member product, flagged when it is the group's main product."""
    is_main: bool = False


class DrugGroupDetailResponse(DrugGroupResponse):
    """Group with member products resolved against the catalog."""
    members: list[GroupMemberResponse]
