"""
Association table for the polymorphic many-to-many relationship.

One table serves every categorizable kind; categorizable_type holds
the kind-name (table name) of the associated entity.
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, UniqueConstraint

from categories.models.base import Base

# Category <-> any categorizable entity
categorizables = Table(
    "categorizables",
    Base.metadata,
    Column(
        "category_id",
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("categorizable_id", String(64), nullable=False),
    Column("categorizable_type", String(100), nullable=False),
    Column("created_at", DateTime, default=datetime.utcnow, nullable=False),
    Column("updated_at", DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False),
    UniqueConstraint(
        "category_id", "categorizable_id", "categorizable_type",
        name="categorizables_ids_type_unique",
    ),
)
