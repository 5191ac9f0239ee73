"""
Association service - reads and writes rows of the categorizables table.
"""
from collections.abc import Iterable
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from categories.exceptions import ConstraintViolation
from categories.models.associations import categorizables


def _owner(kind: str, categorizable_id):
    return (
        categorizables.c.categorizable_type == kind,
        categorizables.c.categorizable_id == str(categorizable_id),
    )


def get_category_ids(db: Session, kind: str, categorizable_id) -> list[int]:
    """Category ids attached to one entity, oldest association first."""
    query = (
        select(categorizables.c.category_id)
        .where(*_owner(kind, categorizable_id))
        .order_by(categorizables.c.created_at, categorizables.c.category_id)
    )
    return list(db.scalars(query).all())


def get_categorizable_ids(db: Session, category_id: int, kind: str) -> list[str]:
    """Ids of the entities of one kind attached to a category."""
    query = (
        select(categorizables.c.categorizable_id)
        .where(categorizables.c.category_id == category_id)
        .where(categorizables.c.categorizable_type == kind)
        .order_by(categorizables.c.created_at)
    )
    return list(db.scalars(query).all())


def insert_associations(db: Session, kind: str, categorizable_id, category_ids: Iterable[int]) -> None:
    """Attach categories; a dangling or duplicate id raises ConstraintViolation."""
    now = datetime.utcnow()
    rows = [
        {
            "category_id": category_id,
            "categorizable_id": str(categorizable_id),
            "categorizable_type": kind,
            "created_at": now,
            "updated_at": now,
        }
        for category_id in category_ids
    ]
    if not rows:
        return

    try:
        db.execute(insert(categorizables), rows)
    except IntegrityError as exc:
        raise ConstraintViolation(
            f"Could not attach categories {[row['category_id'] for row in rows]} to {kind}#{categorizable_id}"
        ) from exc


def delete_associations(
    db: Session,
    kind: str,
    categorizable_id,
    category_ids: Optional[Iterable[int]] = None,
) -> int:
    """Detach the given categories, or every category when None. Returns the row count."""
    statement = delete(categorizables).where(*_owner(kind, categorizable_id))
    if category_ids is not None:
        category_ids = list(category_ids)
        if not category_ids:
            return 0
        statement = statement.where(categorizables.c.category_id.in_(category_ids))
    return db.execute(statement).rowcount
