"""Application API endpoints.

Submission of LINK/UNBIND applications and browsing of their status.
"""
from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_application_service, require_business
from app.models import ApplicationStatus, Role
from app.schemas import ApplicationCreate, ApplicationResponse, PendingCountResponse
from app.services.application_service import ApplicationDraft, ApplicationService

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get("", response_model=list[ApplicationResponse], summary="List Applications")
async def list_applications(
    status_filter: ApplicationStatus | None = Query(None, alias="status"),
    application_service: ApplicationService = Depends(get_application_service),
):
    """List applications newest first, optionally filtered by status."""
    return [
        ApplicationResponse.model_validate(app)
        for app in application_service.list_applications(status_filter)
    ]


@router.get(
    "/pending-count",
    response_model=PendingCountResponse,
    summary="Pending Application Count",
)
async def pending_count(
    application_service: ApplicationService = Depends(get_application_service),
):
    """Number of applications waiting in the review queue."""
    return PendingCountResponse(pending=application_service.pending_count())


@router.get("/{application_id}", response_model=ApplicationResponse, summary="Get Application")
async def get_application(
    application_id: str,
    application_service: ApplicationService = Depends(get_application_service),
):
    return ApplicationResponse.model_validate(
        application_service.get_application(application_id)
    )


@router.post(
    "",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Application",
    description="Validates and queues a LINK or UNBIND application for compliance review",
)
async def submit_application(
    payload: ApplicationCreate,
    role: Role = Depends(require_business),
    application_service: ApplicationService = Depends(get_application_service),
):
    """Submit an application.

    Args:
        payload: Application type, product IDs, reason and optional metadata.
        role: Submitter role; only business staff may submit.
        application_service: Injected application service.

    Returns:
        ApplicationResponse: The queued PENDING application.
    """
    application = application_service.submit(
        ApplicationDraft(
            type=payload.type,
            product_ids=payload.product_ids,
            reason=payload.reason,
            subject=payload.subject,
            applicant=payload.applicant,
            image_count=payload.image_count,
        ),
        role=role,
    )
    return ApplicationResponse.model_validate(application)
