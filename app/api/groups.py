"""Drug group API endpoints.

The list/browse view: filtering, expandable member details, and the
compliance-only edit and delete actions.
"""
from fastapi import APIRouter, Depends, Query

from app.api.deps import get_group_service, require_compliance
from app.schemas import (
    DrugGroupDetailResponse,
    DrugGroupListResponse,
    DrugGroupResponse,
    DrugGroupUpdate,
    GroupMemberResponse,
    ProductResponse,
)
from app.services.group_service import GroupDetail, GroupService

router = APIRouter(prefix="/groups", tags=["groups"])


def _detail_response(detail: GroupDetail) -> DrugGroupDetailResponse:
    group = detail.group
    return DrugGroupDetailResponse(
        id=group.id,
        name=group.name,
        product_ids=list(group.product_ids),
        created_at=group.created_at,
        members=[
            GroupMemberResponse(
                **ProductResponse.model_validate(product).model_dump(),
                is_main=detail.is_main(product.id),
            )
            for product in detail.members
        ],
    )


@router.get(
    "",
    response_model=DrugGroupListResponse,
    summary="List Groups",
    description="Filters groups by member-ID and name fragments",
)
async def list_groups(
    product_id: str | None = Query(None, description="Fragment of a member product ID"),
    name: str | None = Query(None, description="Fragment of the group name"),
    limit: int | None = Query(None, ge=1, le=100, description="Page size"),
    offset: int = Query(0, ge=0),
    group_service: GroupService = Depends(get_group_service),
):
    page = group_service.list_groups(product_id=product_id, name=name, limit=limit, offset=offset)
    return DrugGroupListResponse(
        items=[DrugGroupResponse.model_validate(g) for g in page.groups],
        total=page.total,
        limit=page.limit,
        offset=page.offset,
    )


@router.get("/{group_id}", response_model=DrugGroupDetailResponse, summary="Get Group")
async def get_group(
    group_id: str,
    group_service: GroupService = Depends(get_group_service),
):
    """Expanded row: the group with every member's product details."""
    return _detail_response(group_service.get_group(group_id))


@router.patch(
    "/{group_id}",
    response_model=DrugGroupDetailResponse,
    summary="Edit Group",
    dependencies=[Depends(require_compliance)],
)
async def update_group(
    group_id: str,
    payload: DrugGroupUpdate,
    group_service: GroupService = Depends(get_group_service),
):
    """Edit a group's name, members or main ID (compliance only)."""
    group = group_service.update_group(
        group_id,
        name=payload.name,
        product_ids=payload.product_ids,
        main_id=payload.main_id,
    )
    return _detail_response(group_service.get_group(group.id))


@router.delete(
    "/{group_id}",
    response_model=DrugGroupResponse,
    summary="Delete Group",
    dependencies=[Depends(require_compliance)],
)
async def delete_group(
    group_id: str,
    confirm: bool = Query(False, description="Must be true; deletion cannot be undone"),
    group_service: GroupService = Depends(get_group_service),
):
    """Delete a group (compliance only, confirmation required)."""
    return DrugGroupResponse.model_validate(group_service.delete_group(group_id, confirm=confirm))
