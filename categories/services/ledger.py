"""
Categorization ledger - attach, detach and sync categories of an entity.

    ledger = CategorizationLedger(db, settings)
    ledger.sync(article, ["news", "sports"])     # by slug
    ledger.attach(article, 7)                    # by id, keeps the others
    ledger.detach(article)                       # detach everything

Every change goes through the StatsAggregator before returning.
Nothing is committed; the caller owns the transaction.
"""
import logging
from collections.abc import Iterable
from typing import Any, Optional

from sqlalchemy import ColumnElement, String, and_, cast, exists, inspect, not_, select, true
from sqlalchemy.orm import Session

from categories.categorizable import as_categorizable
from categories.config import Settings
from categories.exceptions import InvalidArgumentError, NotFoundError
from categories.models.associations import categorizables
from categories.models.category import Category
from categories.schemas.categorization import SyncChanges
from categories.services import association_service
from categories.services.stats_service import StatsAggregator

logger = logging.getLogger(__name__)


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and value.strip().isdecimal()


def _unique(values: Iterable[int]) -> list[int]:
    return list(dict.fromkeys(values))


class CategorizationLedger:
    """Association bookkeeping for categorizable entities."""

    def __init__(self, db: Session, settings: Settings, stats: Optional[StatsAggregator] = None):
        self.db = db
        self.settings = settings
        self.stats = stats or StatsAggregator(db, settings.stats)

    # === REFERENCES ===

    def resolve_ids(self, refs: Any) -> list[int]:
        """
        Resolve category references to ids.

        Accepts None, an id, a numeric string, a slug, a Category, or an
        iterable of any one of those. Ids are taken as-is; slugs are
        looked up and must all exist.
        """
        if refs is None:
            return []
        if isinstance(refs, (Category, int, str)):
            refs = [refs]
        refs = list(refs)
        if not refs:
            return []

        ids: list[int] = []
        slugs: list[str] = []
        for ref in refs:
            if isinstance(ref, Category):
                ids.append(ref.id)
            elif _is_numeric(ref):
                ids.append(int(ref))
            elif isinstance(ref, str):
                slugs.append(ref)
            else:
                raise InvalidArgumentError(f"Unsupported category reference: {ref!r}")

        if slugs:
            found = dict(
                self.db.execute(select(Category.slug, Category.id).where(Category.slug.in_(slugs))).all()
            )
            missing = [slug for slug in slugs if slug not in found]
            if missing:
                raise NotFoundError(f"Categories not found: {', '.join(missing)}")
            ids.extend(found[slug] for slug in slugs)

        return _unique(ids)

    # === READ OPERATIONS ===

    def category_ids(self, entity: Any) -> list[int]:
        ref = as_categorizable(entity)
        return association_service.get_category_ids(self.db, ref.kind, ref.id)

    def categories(self, entity: Any) -> list[Category]:
        ids = self.category_ids(entity)
        if not ids:
            return []
        rows = self.db.scalars(select(Category).where(Category.id.in_(ids))).all()
        by_id = {category.id: category for category in rows}
        return [by_id[category_id] for category_id in ids if category_id in by_id]

    def has_categories(self, entity: Any, refs: Any) -> bool:
        """True when the entity has any of the given categories."""
        wanted = set(self.resolve_ids(refs))
        return bool(wanted & set(self.category_ids(entity)))

    def has_any_categories(self, entity: Any, refs: Any) -> bool:
        return self.has_categories(entity, refs)

    def has_all_categories(self, entity: Any, refs: Any) -> bool:
        """True when the entity has every one of the given categories."""
        wanted = set(self.resolve_ids(refs))
        return wanted <= set(self.category_ids(entity))

    def entries(self, category: Category | int, kind: str) -> list[str]:
        """Ids of the entities of one kind attached to a category."""
        category_id = category.id if isinstance(category, Category) else int(category)
        return association_service.get_categorizable_ids(self.db, category_id, kind)

    # === WRITE OPERATIONS ===

    def sync(self, entity: Any, refs: Any, detaching: bool = True) -> SyncChanges:
        """
        Make the entity's categories match refs.

        With detaching=False existing associations are kept and only the
        missing ones are added.
        """
        ref = as_categorizable(entity)
        wanted = self.resolve_ids(refs)
        current = association_service.get_category_ids(self.db, ref.kind, ref.id)

        current_set = set(current)
        wanted_set = set(wanted)
        changes = SyncChanges(
            attached=[category_id for category_id in wanted if category_id not in current_set],
            detached=[category_id for category_id in current if category_id not in wanted_set] if detaching else [],
        )

        if changes.detached:
            association_service.delete_associations(self.db, ref.kind, ref.id, changes.detached)
        if changes.attached:
            association_service.insert_associations(self.db, ref.kind, ref.id, changes.attached)

        if not changes.is_empty:
            logger.info(
                f"Synced {ref.kind}#{ref.id} categories: "
                f"+{changes.attached} -{changes.detached}"
            )

        self.stats.apply_diff(ref, changes)
        return changes

    def attach(self, entity: Any, refs: Any) -> SyncChanges:
        return self.sync(entity, refs, detaching=False)

    def detach(self, entity: Any, refs: Any = None) -> SyncChanges:
        """
        Detach categories from the entity.

        With no refs (None or empty) every category is detached; otherwise
        only the requested categories the entity actually has.
        """
        ref = as_categorizable(entity)
        requested = self.resolve_ids(refs)
        current = association_service.get_category_ids(self.db, ref.kind, ref.id)

        if requested:
            requested_set = set(requested)
            detached = [category_id for category_id in current if category_id in requested_set]
        else:
            detached = current

        changes = SyncChanges(detached=detached)
        if detached:
            association_service.delete_associations(self.db, ref.kind, ref.id, detached)
            logger.info(f"Detached {ref.kind}#{ref.id} categories: {detached}")

        self.stats.apply_diff(ref, changes)
        return changes

    def detach_all(self, entity: Any) -> SyncChanges:
        return self.detach(entity)

    def delete_entity(self, entity: Any) -> SyncChanges:
        """Detach every category, then delete the mapped entity itself."""
        changes = self.detach_all(entity)
        self.db.delete(entity)
        self.db.flush()
        return changes

    # === QUERY PREDICATES ===

    def _association_exists(self, model, *criteria) -> ColumnElement[bool]:
        mapper = inspect(model)
        (primary_key,) = mapper.primary_key
        return exists().where(
            categorizables.c.categorizable_type == mapper.local_table.name,
            categorizables.c.categorizable_id == cast(primary_key, String),
            *criteria,
        )

    def with_all_categories(self, model, refs: Any) -> ColumnElement[bool]:
        """Filter clause: rows having every one of the given categories."""
        ids = self.resolve_ids(refs)
        return and_(
            true(),
            *[self._association_exists(model, categorizables.c.category_id == category_id) for category_id in ids],
        )

    def with_any_categories(self, model, refs: Any) -> ColumnElement[bool]:
        """Filter clause: rows having at least one of the given categories."""
        ids = self.resolve_ids(refs)
        return self._association_exists(model, categorizables.c.category_id.in_(ids))

    def with_categories(self, model, refs: Any) -> ColumnElement[bool]:
        return self.with_any_categories(model, refs)

    def without_categories(self, model, refs: Any) -> ColumnElement[bool]:
        """Filter clause: rows having none of the given categories."""
        ids = self.resolve_ids(refs)
        return not_(self._association_exists(model, categorizables.c.category_id.in_(ids)))

    def without_any_categories(self, model) -> ColumnElement[bool]:
        """Filter clause: rows without any category at all."""
        return not_(self._association_exists(model))
