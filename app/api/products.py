"""Product catalog API endpoints.

Provides lookups into the read-only product reference table, used by the
application form and the review queue to pull product details.
"""
from fastapi import APIRouter, Depends, Query
from loguru import logger

from app.api.deps import get_group_service
from app.schemas import ProductResponse
from app.services.group_service import GroupService
from app.utils.helpers import parse_product_ids

router = APIRouter(prefix="/products", tags=["products"])


@router.get(
    "",
    response_model=list[ProductResponse],
    summary="Resolve Products",
    description="Resolves a list of product IDs; unknown IDs yield placeholders",
)
async def resolve_products(
    ids: str = Query("", description="Product IDs separated by commas or spaces"),
    group_service: GroupService = Depends(get_group_service),
):
    """Resolve several product IDs at once.

    Args:
        ids: Product IDs separated by commas or whitespace.
        group_service: Injected group service.

    Returns:
        list[ProductResponse]: One entry per distinct ID, in input order.
    """
    product_ids = parse_product_ids(ids)
    logger.debug(f"Resolving {len(product_ids)} product IDs")
    return [ProductResponse.model_validate(p) for p in group_service.resolve_products(product_ids)]


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get Product",
)
async def get_product(
    product_id: str,
    group_service: GroupService = Depends(get_group_service),
):
    """Get a single catalog product; 404 when unknown."""
    return ProductResponse.model_validate(group_service.get_product(product_id.strip()))
