"""
Applications repository.
"""

from app.models import Application, ApplicationStatus, ApplicationType

from .database_repository import BaseRepository


class ApplicationsRepository(BaseRepository[Application]):
    """Repository for LINK/UNBIND applications, newest first."""

    @property
    def items(self) -> list[Application]:
        return self.store.applications

    def next_id(self) -> str:
        return self.store.next_application_id()

    def list_by_status(self, status: ApplicationStatus | None = None) -> list[Application]:
        if status is None:
            return list(self.items)
        return [app for app in self.items if app.status == status]

    def pending(self) -> list[Application]:
        return self.list_by_status(ApplicationStatus.PENDING)

    def pending_count(self) -> int:
        return len(self.pending())

    def find_pending_duplicate(
        self, app_type: ApplicationType, product_ids: list[str]
    ) -> Application | None:
        """A pending application with the same type and the same ID set."""
        signature = Application.signature_of(app_type, product_ids)
        return next(
            (app for app in self.pending() if app.signature == signature),
            None,
        )
