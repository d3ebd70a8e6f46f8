"""Pydantic schemas for catalog products."""
from pydantic import BaseModel

from app.models import RxType


class ProductResponse(BaseModel):
    """Schema for product API responses.

    Attributes:
        id: Product identifier.
        name: Generic display name; products sharing it are candidate varieties.
        brand: Brand name.
        spec: Pack specification.
        rx_type: Prescription type (OTC or Rx).
        approval_no: Regulatory approval number.
        manufacturer: Manufacturer name.
        is_unknown: True when the ID is missing from the catalog and this is a placeholder.
    """
    id: str
    name: str
    brand: str
    spec: str
    rx_type: RxType
    approval_no: str
    manufacturer: str
    is_unknown: bool = False

    class Config:
        from_attributes = True
