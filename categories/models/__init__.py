"""
SQLAlchemy models for the categories package.
"""
from categories.models.base import Base
from categories.models.category import Category
from categories.models.associations import categorizables

__all__ = [
    "Base",
    "Category",
    "categorizables",
]
