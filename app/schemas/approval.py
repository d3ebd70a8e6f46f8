"""Pydantic schemas for the compliance review queue."""
from pydantic import BaseModel

from app.models import MatchType, MergeStrategy

from .application import ApplicationResponse
from .drug_group import DrugGroupResponse
from .product import ProductResponse


class SimilarGroupResponse(BaseModel):
    """An existing group ranked as a possible merge target.

    Attributes:
        group_id: ID of the candidate group.
        group_name: Name of the candidate group.
        product_ids: Current members of the candidate group.
        match_type: EXACT, NAME_ONLY or FUZZY.
        score: Ranking score of the match type.
        seed_ids: Member list the reviewer starts from when choosing this group.
    """
    group_id: str
    group_name: str
    product_ids: list[str]
    match_type: MatchType
    score: int
    seed_ids: list[str]


class ApprovalAnalysisResponse(BaseModel):
    """Proposed approval for a pending application."""
    application: ApplicationResponse
    strategy: MergeStrategy
    forced: bool
    target_group: DrugGroupResponse | None = None
    group_name: str
    candidates: list[SimilarGroupResponse] = []
    orphans: list[ProductResponse] = []
    seed_ids: list[str]
    default_main_id: str


class ApproveRequest(BaseModel):
    """Reviewer decision.

    Attributes:
        target_group_id: Group to merge into; None creates a new group.
        final_ids: Final member IDs as a list or free text; None keeps the proposal.
        main_id: Custom main ID; None uses the numerically smallest final ID.
        comment: Optional review comment.
    """
    target_group_id: str | None = None
    final_ids: str | list[str] | None = None
    main_id: str | None = None
    comment: str | None = None


class RejectRequest(BaseModel):
    reason: str = ""


class ApprovalResultResponse(BaseModel):
    """Outcome of an approval commit."""
    application: ApplicationResponse
    strategy: MergeStrategy
    group: DrugGroupResponse | None = None
    removed_group_ids: list[str] = []
    message: str
