"""
Exception hierarchy for the same-variety drug manager.

Every user-facing failure is a SameVarietyError subclass carrying a
human-readable message, a machine-readable code and the HTTP status the
API layer answers with.
"""


class SameVarietyError(Exception):
    """Base exception for domain failures."""

    status_code = 400

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for JSON responses."""
        return {
            "success": False,
            "error": self.message,
            "code": self.code,
        }


class ValidationError(SameVarietyError):
    """Raised when user input fails a submission or review rule."""

    def __init__(self, message: str, product_ids: list[str] | None = None):
        super().__init__(message, code="VALIDATION_ERROR")
        self.product_ids = product_ids or []

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.product_ids:
            result["product_ids"] = self.product_ids
        return result


class NotFoundError(SameVarietyError):
    """Raised when a product, group or application does not exist."""

    status_code = 404

    def __init__(self, message: str, resource: str = "unknown"):
        super().__init__(message, code="NOT_FOUND")
        self.resource = resource

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["resource"] = self.resource
        return result


class PermissionDeniedError(SameVarietyError):
    """Raised when the current role may not perform an action."""

    status_code = 403

    def __init__(self, message: str):
        super().__init__(message, code="PERMISSION_DENIED")


class ConflictError(SameVarietyError):
    """Raised when a write would collide with existing state."""

    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")


class InvalidStateTransitionError(SameVarietyError):
    """Raised when an application that is no longer pending is reviewed again."""

    status_code = 409

    def __init__(self, message: str, current_status: str = "unknown"):
        super().__init__(message, code="INVALID_STATE_TRANSITION")
        self.current_status = current_status

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["current_status"] = self.current_status
        return result


class ConfirmationRequiredError(SameVarietyError):
    """Raised when a destructive action is attempted without confirmation."""

    status_code = 428

    def __init__(self, message: str):
        super().__init__(message, code="CONFIRMATION_REQUIRED")
