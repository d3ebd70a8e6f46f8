"""Pydantic schemas for LINK/UNBIND applications."""
from datetime import datetime

from pydantic import BaseModel, Field

from app.models import ApplicationStatus, ApplicationType

from .product import ProductResponse


class ApplicationCreate(BaseModel):
    """Schema for submitting an application.

    Attributes:
        type: LINK to associate products, UNBIND to remove them from their group.
        product_ids: Target product IDs; blanks and duplicates are dropped.
        reason: Why the products are (or are not) the same variety.
        subject: Optional subject line; derived from the products when omitted.
        applicant: Optional applicant name; defaults to the role's label.
        image_count: Number of mocked supporting images.
    """
    type: ApplicationType = ApplicationType.LINK
    product_ids: list[str] = Field(default_factory=list)
    reason: str = ""
    subject: str | None = None
    applicant: str | None = None
    image_count: int = 0


class ApplicationResponse(BaseModel):
    """Schema for application API responses."""
    id: str
    type: ApplicationType
    subject: str
    applicant: str
    submitted_at: datetime
    status: ApplicationStatus
    product_ids: list[str]
    reason: str
    review_comment: str | None = None
    reviewed_at: datetime | None = None
    images: list[str] = []

    class Config:
        from_attributes = True


class PendingCountResponse(BaseModel):
    pending: int


class QueueEntryResponse(BaseModel):
    """A pending application with its product details pulled from the catalog."""
    application: ApplicationResponse
    products: list[ProductResponse]

    class Config:
        from_attributes = True
