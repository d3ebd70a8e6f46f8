"""Enumerations shared by the domain models and API schemas."""
from enum import Enum


class Role(str, Enum):
    """Role of the staff member issuing a request."""

    BUSINESS = "BUSINESS"
    COMPLIANCE = "COMPLIANCE"

    @property
    def label(self) -> str:
        return "Business operator" if self is Role.BUSINESS else "Compliance officer"


class RxType(str, Enum):
    """Prescription type of a product."""

    OTC = "OTC"
    RX = "Rx"


class ApplicationType(str, Enum):
    LINK = "LINK"
    UNBIND = "UNBIND"


class ApplicationStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class MergeStrategy(str, Enum):
    """How an approved application is applied to the group list."""

    NEW = "NEW"
    MERGE = "MERGE"
    DISSOLVE = "DISSOLVE"


class MatchType(str, Enum):
    """Similarity class between an application and an existing group."""

    EXACT = "EXACT"
    NAME_ONLY = "NAME_ONLY"
    FUZZY = "FUZZY"
