from dataclasses import dataclass

from app.models.enums import RxType

UNKNOWN_PRODUCT_NAME = "Unknown product"


@dataclass(frozen=True)
class Product:
    """
    Catalog entry for a single product.

    Reference data only: products are loaded once and never mutated.
    """

    id: str
    name: str
    brand: str
    spec: str
    rx_type: RxType
    approval_no: str
    manufacturer: str

    @classmethod
    def unknown(cls, product_id: str) -> "Product":
        """Placeholder rendered for IDs missing from the catalog."""
        return cls(
            id=product_id,
            name=UNKNOWN_PRODUCT_NAME,
            brand="Unknown",
            spec="-",
            rx_type=RxType.OTC,
            approval_no="-",
            manufacturer="-",
        )

    @property
    def is_unknown(self) -> bool:
        return self.name == UNKNOWN_PRODUCT_NAME and self.approval_no == "-"

    def __repr__(self) -> str:
        return f"<Product(id='{self.id}', name='{self.name}', rx_type='{self.rx_type.value}')>"
