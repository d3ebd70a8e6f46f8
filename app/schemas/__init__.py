"""Pydantic schemas for request/response validation.

This module exports all Pydantic schema classes used for API request
validation and response serialization.
"""
from .application import (
    ApplicationCreate,
    ApplicationResponse,
    PendingCountResponse,
    QueueEntryResponse,
)
from .approval import (
    ApprovalAnalysisResponse,
    ApprovalResultResponse,
    ApproveRequest,
    RejectRequest,
    SimilarGroupResponse,
)
from .drug_group import (
    DrugGroupBase,
    DrugGroupDetailResponse,
    DrugGroupListResponse,
    DrugGroupResponse,
    DrugGroupUpdate,
    GroupMemberResponse,
)
from .product import ProductResponse

__all__ = [
    "ApplicationCreate",
    "ApplicationResponse",
    "PendingCountResponse",
    "QueueEntryResponse",
    "ApprovalAnalysisResponse",
    "ApprovalResultResponse",
    "ApproveRequest",
    "RejectRequest",
    "SimilarGroupResponse",
    "DrugGroupBase",
    "DrugGroupDetailResponse",
    "DrugGroupListResponse",
    "DrugGroupResponse",
    "DrugGroupUpdate",
    "GroupMemberResponse",
    "ProductResponse",
]
