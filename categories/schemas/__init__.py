"""Pydantic schemas for category input, output and sync results."""
from categories.schemas.category import (
    Category,
    CategoryCreate,
    CategoryTree,
    CategoryUpdate,
    CategoryWithChildren,
    SelectOption,
)
from categories.schemas.categorization import SyncChanges

__all__ = [
    "Category", "CategoryCreate", "CategoryUpdate",
    "CategoryWithChildren", "CategoryTree",
    "SelectOption",
    "SyncChanges",
]
