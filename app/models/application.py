from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from app.core.exceptions import InvalidStateTransitionError
from app.models.enums import ApplicationStatus, ApplicationType
from app.utils.helpers import sorted_ids


@dataclass
class Application:
    """
    A LINK or UNBIND request awaiting (or past) compliance review.

    Created PENDING; ``approve`` and ``reject`` move it exactly once to a
    terminal status. Any later review attempt raises
    InvalidStateTransitionError.
    """

    id: str
    type: ApplicationType
    subject: str
    applicant: str
    product_ids: list[str]
    reason: str
    status: ApplicationStatus = ApplicationStatus.PENDING
    submitted_at: datetime = field(default_factory=datetime.now)
    review_comment: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    images: list[str] = field(default_factory=list)

    @property
    def is_pending(self) -> bool:
        return self.status == ApplicationStatus.PENDING

    @staticmethod
    def signature_of(
        app_type: ApplicationType, product_ids: list[str]
    ) -> tuple[str, tuple[str, ...]]:
        """Order-independent identity used for duplicate detection."""
        return app_type.value, tuple(sorted_ids(product_ids))

    @property
    def signature(self) -> tuple[str, tuple[str, ...]]:
        return self.signature_of(self.type, self.product_ids)

    def approve(self, comment: Optional[str] = None) -> None:
        self._close(ApplicationStatus.APPROVED, comment)

    def reject(self, comment: str) -> None:
        self._close(ApplicationStatus.REJECTED, comment)

    def _close(self, status: ApplicationStatus, comment: Optional[str]) -> None:
        if not self.is_pending:
            raise InvalidStateTransitionError(
                f"Application {self.id} is already {self.status.value}",
                current_status=self.status.value,
            )
        self.status = status
        self.review_comment = comment or None
        self.reviewed_at = datetime.now()

    def __repr__(self) -> str:
        return f"<Application(id='{self.id}', type='{self.type.value}', status='{self.status.value}')>"
