"""
Category service - create, update and delete categories.

Keeps slugs generated and nested-set bounds consistent. Nothing is
committed here; writes are flushed so integrity errors surface early.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from categories.config import Settings
from categories.exceptions import ConstraintViolation, InvalidArgumentError, NotFoundError
from categories.models.category import Category
from categories.schemas.category import CategoryCreate, CategoryTree, CategoryUpdate
from categories.services.slug_service import SlugGenerator
from categories.services.tree_service import build_tree

logger = logging.getLogger(__name__)


def _flush(db: Session, action: str) -> None:
    try:
        db.flush()
    except IntegrityError as exc:
        raise ConstraintViolation(f"Could not {action}: {exc.orig}") from exc


def _get_parent(db: Session, parent_id: Optional[int]) -> Optional[Category]:
    if parent_id is None:
        return None
    parent = db.get(Category, parent_id)
    if parent is None:
        raise NotFoundError(f"Parent category {parent_id} not found")
    return parent


def get_category_tree(db: Session) -> CategoryTree:
    """Get all live categories as a hierarchical tree."""
    categories = db.scalars(
        select(Category)
        .where(Category.deleted_at.is_(None))
        .order_by(Category.lft, Category.id)
    ).all()
    return CategoryTree(items=build_tree(categories))


def get_category_by_slug(db: Session, slug: str) -> Category | None:
    """Get live category by slug."""
    return db.scalars(
        select(Category).where(Category.slug == slug, Category.deleted_at.is_(None))
    ).first()


def create_category(db: Session, settings: Settings, data: CategoryCreate) -> Category:
    """Create a category, appended as the last child of its parent."""
    _get_parent(db, data.parent_id)

    last_bound = db.scalar(select(func.max(Category.rgt))) or 0
    category = Category(
        slug=data.slug,
        name=data.name,
        description=data.description,
        type=data.type,
        parent_id=data.parent_id,
        lft=last_bound + 1,
        rgt=last_bound + 2,
    )

    SlugGenerator(db, settings.slug, settings.locale).on_create(category)

    db.add(category)
    _flush(db, f"create category '{category.slug}'")
    rebuild_bounds(db)

    logger.info(f"Created category {category.id} '{category.slug}'")
    return category


def update_category(db: Session, settings: Settings, category: Category, data: CategoryUpdate) -> Category:
    """Apply the fields set on data, then refresh the slug."""
    changes = data.model_dump(exclude_unset=True)

    moved = "parent_id" in changes and changes["parent_id"] != category.parent_id
    if moved:
        parent = _get_parent(db, changes["parent_id"])
        if parent is not None and category.lft <= parent.lft and parent.rgt <= category.rgt:
            raise InvalidArgumentError(f"Category {category.id} cannot be moved under its own subtree")

    for key, value in changes.items():
        setattr(category, key, value)

    SlugGenerator(db, settings.slug, settings.locale).on_update(category)

    _flush(db, f"update category {category.id}")
    if moved:
        rebuild_bounds(db)

    logger.info(f"Updated category {category.id} '{category.slug}'")
    return category


def soft_delete_category(db: Session, category: Category) -> Category:
    """Hide a category. Its slug stays reserved and its associations stay."""
    category.deleted_at = datetime.utcnow()
    _flush(db, f"delete category {category.id}")
    return category


def restore_category(db: Session, category: Category) -> Category:
    category.deleted_at = None
    _flush(db, f"restore category {category.id}")
    return category


def delete_category(db: Session, category: Category) -> None:
    """Remove a category for good; its associations cascade in the database."""
    category_id = category.id
    for child in list(category.children):
        child.parent = category.parent
    db.delete(category)
    _flush(db, f"delete category {category_id}")
    rebuild_bounds(db)
    logger.info(f"Deleted category {category_id}")


def rebuild_bounds(db: Session) -> None:
    """
    Recompute lft/rgt from parent_id.

    Siblings keep their current lft order (ties broken by id). Nodes
    whose parent no longer exists are treated as roots.
    """
    rows = db.execute(
        select(Category.id, Category.parent_id).order_by(Category.lft, Category.id)
    ).all()
    known = {row.id for row in rows}

    children: dict[Optional[int], list[int]] = {}
    for row in rows:
        parent_id = row.parent_id if row.parent_id in known else None
        children.setdefault(parent_id, []).append(row.id)

    bounds: dict[int, tuple[int, int]] = {}
    counter = 0
    # (node, entered) pairs; a node is closed after all its children
    stack = [(node_id, False) for node_id in reversed(children.get(None, []))]
    while stack:
        node_id, entered = stack.pop()
        counter += 1
        if entered:
            bounds[node_id] = (bounds[node_id][0], counter)
            continue
        bounds[node_id] = (counter, 0)
        stack.append((node_id, True))
        stack.extend((child_id, False) for child_id in reversed(children.get(node_id, [])))

    for category in db.scalars(select(Category).where(Category.id.in_(list(bounds)))):
        lft, rgt = bounds[category.id]
        if (category.lft, category.rgt) != (lft, rgt):
            category.lft, category.rgt = lft, rgt
    db.flush()
