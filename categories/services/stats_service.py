"""
Stats service - per-category usage counters.

Every category carries a stats blob keyed by kind-name:

    {
        "articles": {"other": 5, "post": 1},   # partitioned by type value
        "videos": 3,                           # plain counter
    }

A kind is partitioned when its entities expose the configured type
field (StatsOptions.categorizable_type_field). A plain counter becomes
the "other" bucket as soon as a typed entity is counted; a partitioned
counter collapses to its sum only when an untyped entity is counted.
Counters never drop below zero.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from categories.categorizable import CategorizableRef
from categories.config import StatsOptions
from categories.models.category import Category
from categories.schemas.categorization import SyncChanges

logger = logging.getLogger(__name__)

OTHER = "other"


@dataclass(frozen=True)
class ScalarCount:
    """Counter for a kind without type partitioning."""
    value: int = 0

    def increment(self) -> "ScalarCount":
        return ScalarCount(self.value + 1)

    def decrement(self) -> "ScalarCount":
        return ScalarCount(max(self.value - 1, 0))

    def as_scalar(self) -> "ScalarCount":
        return self

    def as_partitioned(self) -> "PartitionedCount":
        return PartitionedCount({OTHER: self.value})

    def dump(self) -> int:
        return self.value


@dataclass(frozen=True)
class PartitionedCount:
    """Counters keyed by type value, with "other" for untyped entities."""
    buckets: dict[str, int] = field(default_factory=dict)

    def increment(self, key: str) -> "PartitionedCount":
        buckets = dict(self.buckets)
        buckets[key] = buckets.get(key, 0) + 1
        return PartitionedCount(buckets)

    def decrement(self, key: str) -> "PartitionedCount":
        buckets = dict(self.buckets)
        buckets[key] = max(buckets.get(key, 0) - 1, 0)
        return PartitionedCount(buckets)

    def as_scalar(self) -> ScalarCount:
        return ScalarCount(sum(self.buckets.values()))

    def as_partitioned(self) -> "PartitionedCount":
        return self

    def dump(self) -> dict[str, int]:
        return dict(self.buckets)


Count = Union[ScalarCount, PartitionedCount]


def load_bucket(raw: Any) -> Optional[Count]:
    """Read one kind entry of a stats blob; None when absent."""
    if raw is None:
        return None
    if isinstance(raw, dict):
        return PartitionedCount({str(key): max(int(value or 0), 0) for key, value in raw.items()})
    return ScalarCount(max(int(raw), 0))


def update_bucket(raw: Any, entity: CategorizableRef, type_field: str, step: int) -> Count:
    """Apply one attach (step=1) or detach (step=-1) of entity to a bucket."""
    current = load_bucket(raw)

    if entity.has_attribute(type_field):
        bucket = (current or PartitionedCount({OTHER: 0})).as_partitioned()
        value = entity.get(type_field)
        key = OTHER if value is None else str(value)
        return bucket.increment(key) if step > 0 else bucket.decrement(key)

    bucket = (current or ScalarCount(0)).as_scalar()
    return bucket.increment() if step > 0 else bucket.decrement()


class StatsAggregator:
    """Keeps category stats in line with association changes."""

    def __init__(self, db: Session, options: StatsOptions):
        self.db = db
        self.options = options

    def apply_diff(self, entity: CategorizableRef, changes: SyncChanges) -> None:
        """
        Update stats for a sync/attach/detach result.

        Attached ids win: when a diff both attaches and detaches, only the
        attached categories are counted and the detached ones are left as is.
        """
        if not self.options.status:
            return

        if changes.attached:
            category_ids, step = changes.attached, 1
        elif changes.detached:
            category_ids, step = changes.detached, -1
        else:
            return

        # Persist pending changes before re-reading the locked rows
        self.db.flush()
        query = (
            select(Category)
            .where(Category.id.in_(category_ids))
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        categories = {category.id: category for category in self.db.scalars(query)}

        for category_id in category_ids:
            category = categories.get(category_id)
            if category is None:
                logger.warning(f"Stats target category {category_id} not found, skipping")
                continue

            stats = dict(category.stats or {})
            bucket = update_bucket(
                stats.get(entity.kind), entity, self.options.categorizable_type_field, step
            )
            stats[entity.kind] = bucket.dump()
            category.stats = stats
            self.db.flush()

            logger.debug(f"Category {category_id} stats[{entity.kind}] -> {stats[entity.kind]}")
