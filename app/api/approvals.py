"""Approval queue API endpoints.

Compliance-only review of pending applications: analysis of the proposed
strategy, approval commits and rejections.
"""
from fastapi import APIRouter, Depends
from loguru import logger

from app.api.deps import get_approval_service, require_compliance
from app.models import MergeStrategy
from app.schemas import (
    ApplicationResponse,
    ApprovalAnalysisResponse,
    ApprovalResultResponse,
    ApproveRequest,
    DrugGroupResponse,
    ProductResponse,
    QueueEntryResponse,
    RejectRequest,
    SimilarGroupResponse,
)
from app.services.approval_service import (
    ApprovalAnalysis,
    ApprovalDecision,
    ApprovalService,
)

router = APIRouter(
    prefix="/approvals",
    tags=["approvals"],
    dependencies=[Depends(require_compliance)],
)

OUTCOME_MESSAGES = {
    MergeStrategy.NEW: "Application approved: a new group was created",
    MergeStrategy.MERGE: "Application approved: the existing group was updated",
    MergeStrategy.DISSOLVE: "Application approved: the group was dissolved",
}


def _analysis_response(analysis: ApprovalAnalysis) -> ApprovalAnalysisResponse:
    return ApprovalAnalysisResponse(
        application=ApplicationResponse.model_validate(analysis.application),
        strategy=analysis.strategy,
        forced=analysis.forced,
        target_group=(
            DrugGroupResponse.model_validate(analysis.target_group)
            if analysis.target_group
            else None
        ),
        group_name=analysis.group_name,
        candidates=[
            SimilarGroupResponse(
                **candidate.to_dict(),
                seed_ids=analysis.seed_for(candidate.group),
            )
            for candidate in analysis.candidates
        ],
        orphans=[ProductResponse.model_validate(p) for p in analysis.orphans],
        seed_ids=analysis.seed_ids,
        default_main_id=analysis.default_main_id,
    )


@router.get("", response_model=list[QueueEntryResponse], summary="Approval Queue")
async def approval_queue(
    approval_service: ApprovalService = Depends(get_approval_service),
):
    """Pending applications with product details pulled from the catalog."""
    return [QueueEntryResponse.model_validate(entry) for entry in approval_service.queue()]


@router.get(
    "/{application_id}/analysis",
    response_model=ApprovalAnalysisResponse,
    summary="Analyze Application",
    description="Proposes NEW or MERGE, ranks similar groups and lists orphan products",
)
async def analyze_application(
    application_id: str,
    approval_service: ApprovalService = Depends(get_approval_service),
):
    return _analysis_response(approval_service.analyze(application_id))


@router.post(
    "/{application_id}/approve",
    response_model=ApprovalResultResponse,
    summary="Approve Application",
)
async def approve_application(
    application_id: str,
    payload: ApproveRequest,
    approval_service: ApprovalService = Depends(get_approval_service),
):
    """Commit an approval with the reviewer's final member list and main ID.

    Args:
        application_id: ID of the pending application.
        payload: Target group, final IDs, main ID and comment.
        approval_service: Injected approval service.

    Returns:
        ApprovalResultResponse: The approved application and the affected group.
    """
    outcome = approval_service.approve(
        application_id,
        ApprovalDecision(
            target_group_id=payload.target_group_id,
            final_ids=payload.final_ids,
            main_id=payload.main_id,
            comment=payload.comment,
        ),
    )
    logger.debug(f"Approval outcome for {application_id}: {outcome.strategy.value}")
    return ApprovalResultResponse(
        application=ApplicationResponse.model_validate(outcome.application),
        strategy=outcome.strategy,
        group=DrugGroupResponse.model_validate(outcome.group) if outcome.group else None,
        removed_group_ids=outcome.removed_group_ids,
        message=OUTCOME_MESSAGES[outcome.strategy],
    )


@router.post(
    "/{application_id}/reject",
    response_model=ApplicationResponse,
    summary="Reject Application",
)
async def reject_application(
    application_id: str,
    payload: RejectRequest,
    approval_service: ApprovalService = Depends(get_approval_service),
):
    """Reject an application; a non-empty reason is required."""
    return ApplicationResponse.model_validate(
        approval_service.reject(application_id, payload.reason)
    )
