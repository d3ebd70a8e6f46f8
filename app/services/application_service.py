"""
Application submission service layer.
Validates LINK/UNBIND requests and queues them for compliance review.
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from app.api.repository.applications_repository import ApplicationsRepository
from app.api.repository.groups_repository import GroupsRepository
from app.api.repository.products_repository import ProductsRepository
from app.core.config import Settings, get_settings
from app.core.exceptions import NotFoundError, ValidationError
from app.models import Application, ApplicationStatus, ApplicationType, Role
from app.utils.helpers import dedupe_ids, min_id

TYPE_LABELS = {
    ApplicationType.LINK: "Same-variety link",
    ApplicationType.UNBIND: "Same-variety unbind",
}


@dataclass
class ApplicationDraft:
    """
    Submitter input before validation.
    """

    type: ApplicationType
    product_ids: list[str]
    reason: str
    subject: Optional[str] = None
    applicant: Optional[str] = None
    image_count: int = 0


class ApplicationService:
    """
    Service layer for the application workflow.
    Handles submission rules and listing.
    """

    def __init__(
        self,
        applications_repo: ApplicationsRepository,
        groups_repo: GroupsRepository,
        products_repo: ProductsRepository,
        settings: Settings | None = None,
    ):
        self.applications_repo = applications_repo
        self.groups_repo = groups_repo
        self.products_repo = products_repo
        self.settings = settings or get_settings()

    def submit(self, draft: ApplicationDraft, role: Role) -> Application:
        """
        Validate a draft and queue it as a PENDING application.

        Args:
            draft: Submitter input
            role: Role of the submitter, used for the default applicant label

        Returns:
            The stored application, now at the head of the list

        Raises:
            ValidationError: When any submission rule fails
        """
        product_ids = dedupe_ids(draft.product_ids)
        logger.debug(f"Submitting {draft.type.value} application for {product_ids}")

        self._check_member_count(draft.type, product_ids)
        self._check_reason(draft.reason)
        self._check_images(draft.image_count)
        self._check_catalog(product_ids)

        if draft.type == ApplicationType.LINK:
            self._check_not_redundant(product_ids)
        else:
            self._check_unbindable(product_ids)

        duplicate = self.applications_repo.find_pending_duplicate(draft.type, product_ids)
        if duplicate is not None:
            logger.warning(
                f"Duplicate application rejected: matches pending {duplicate.id}"
            )
            raise ValidationError(
                f"A pending {draft.type.value} application with the same products "
                f"already exists ({duplicate.id})",
                product_ids=product_ids,
            )

        application = Application(
            id=self.applications_repo.next_id(),
            type=draft.type,
            subject=(draft.subject or "").strip() or self._default_subject(draft.type, product_ids),
            applicant=(draft.applicant or "").strip() or role.label,
            product_ids=product_ids,
            reason=draft.reason.strip(),
            images=[f"image-{i}" for i in range(1, draft.image_count + 1)],
        )

        self.applications_repo.add(application)
        logger.info(
            f"Application queued: id={application.id}, type={application.type.value}, "
            f"products={len(product_ids)}"
        )
        return application

    def list_applications(
        self, status: ApplicationStatus | None = None
    ) -> list[Application]:
        return self.applications_repo.list_by_status(status)

    def get_application(self, application_id: str) -> Application:
        application = self.applications_repo.get_by_id(application_id)
        if application is None:
            raise NotFoundError(
                f"Application {application_id} not found", resource="application"
            )
        return application

    def pending_count(self) -> int:
        return self.applications_repo.pending_count()

    # ------------------------------------------------------------------
    # Submission rules
    # ------------------------------------------------------------------

    def _check_member_count(self, app_type: ApplicationType, product_ids: list[str]) -> None:
        if app_type == ApplicationType.LINK:
            minimum = self.settings.link_min_products
        else:
            minimum = self.settings.unbind_min_products
        if len(product_ids) < minimum:
            raise ValidationError(
                f"{app_type.value} applications need at least {minimum} product ID(s)"
            )
        maximum = self.settings.application_max_products
        if len(product_ids) > maximum:
            raise ValidationError(
                f"An application may name at most {maximum} product IDs",
                product_ids=product_ids,
            )

    def _check_reason(self, reason: str) -> None:
        if not reason or not reason.strip():
            raise ValidationError("A reason is required")
        if len(reason.strip()) > self.settings.reason_max_length:
            raise ValidationError(
                f"Reason must be at most {self.settings.reason_max_length} characters"
            )

    def _check_images(self, image_count: int) -> None:
        if image_count < 0 or image_count > self.settings.application_max_images:
            raise ValidationError(
                f"Between 0 and {self.settings.application_max_images} images may be attached"
            )

    def _check_catalog(self, product_ids: list[str]) -> None:
        missing = self.products_repo.missing_ids(product_ids)
        if missing:
            raise ValidationError(
                f"Unknown product ID(s): {', '.join(missing)}", product_ids=missing
            )

    def _check_not_redundant(self, product_ids: list[str]) -> None:
        hosts = [g for g in self.groups_repo.get_all() if g.contains_all(product_ids)]
        if len(hosts) == 1:
            raise ValidationError(
                f"All products already belong to group {hosts[0].id} ({hosts[0].name})",
                product_ids=product_ids,
            )

    def _check_unbindable(self, product_ids: list[str]) -> None:
        ungrouped = [
            pid for pid in product_ids if self.groups_repo.find_containing(pid) is None
        ]
        if ungrouped:
            raise ValidationError(
                f"Product ID(s) not in any group: {', '.join(ungrouped)}",
                product_ids=ungrouped,
            )

        main_ids = [
            pid
            for pid in product_ids
            if any(g.id == pid for g in self.groups_repo.find_all_containing(pid))
        ]
        if main_ids:
            raise ValidationError(
                f"Cannot unbind the main ID of a group: {', '.join(main_ids)}",
                product_ids=main_ids,
            )

    def _default_subject(self, app_type: ApplicationType, product_ids: list[str]) -> str:
        product = self.products_repo.get_by_id(min_id(product_ids))
        name = product.name if product else product_ids[0]
        return f"{TYPE_LABELS[app_type]}: {name}"
