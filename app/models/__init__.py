"""Domain models held by the in-memory store.

This module exports the entity classes and enumerations used throughout
the application.
"""
from .application import Application
from .drug_group import DrugGroup
from .enums import (
    ApplicationStatus,
    ApplicationType,
    MatchType,
    MergeStrategy,
    Role,
    RxType,
)
from .product import Product

__all__ = [
    "Application",
    "ApplicationStatus",
    "ApplicationType",
    "DrugGroup",
    "MatchType",
    "MergeStrategy",
    "Product",
    "Role",
    "RxType",
]
