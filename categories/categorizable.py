"""
Categorizable entities.

Any entity can be categorized. The core only needs its kind-name
(the table it lives in), its id, and - for stats partitioning - the
attributes it exposes. SQLAlchemy instances are converted with
as_categorizable(); anything else can build a CategorizableRef directly.
"""
from dataclasses import dataclass, field
from typing import Any, Mapping

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable

from categories.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class CategorizableRef:
    """An entity reference: {kind, id} plus the attributes it exposes."""
    kind: str
    id: Any
    attributes: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def get(self, name: str, default=None):
        return self.attributes.get(name, default)


def as_categorizable(entity: Any) -> CategorizableRef:
    """Convert a mapped instance (or pass a CategorizableRef through)."""
    if isinstance(entity, CategorizableRef):
        return entity

    try:
        state = inspect(entity)
    except NoInspectionAvailable:
        raise InvalidArgumentError(f"{entity!r} is not a categorizable entity") from None

    mapper = state.mapper
    identity = mapper.primary_key_from_instance(entity)
    if len(identity) != 1 or identity[0] is None:
        raise InvalidArgumentError(f"{entity!r} needs a single, persisted primary key")

    attributes = {attr.key: getattr(entity, attr.key) for attr in mapper.column_attrs}
    return CategorizableRef(kind=mapper.local_table.name, id=identity[0], attributes=attributes)
