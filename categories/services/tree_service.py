"""
Tree service - nested trees and hierarchical select options.

Flattens the category forest into (id, label) pairs where every
label is the breadcrumb of its ancestors:

    Sports
    Sports > Football
    Sports > Football > Leagues
"""
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from categories.config import Settings
from categories.exceptions import InvalidArgumentError
from categories.models.category import Category, translate
from categories.schemas.category import Category as CategorySchema
from categories.schemas.category import CategoryWithChildren, SelectOption

OUTPUT_SHAPES = ("list", "dict")
_EXHAUSTED = object()


def _field(node: Any, name: str, default=None):
    if isinstance(node, Mapping):
        return node.get(name, default)
    return getattr(node, name, default)


def render(tree: Iterable[Any], separator: str, locale: str = "en") -> Iterator[tuple[Any, str]]:
    """
    Depth-first, pre-order walk yielding (id, label).

    Nodes are mappings or objects exposing id, name and children.
    Parents come before their descendants; sibling order is kept.
    Iterative, so nesting depth is not bounded by the recursion limit.
    """
    stack: list[tuple[Iterator[Any], Optional[str]]] = [(iter(tree), None)]
    seen: set[int] = set()

    while stack:
        nodes, parent_label = stack[-1]
        node = next(nodes, _EXHAUSTED)
        if node is _EXHAUSTED:
            stack.pop()
            continue

        # Guard against a node reachable twice (cyclic input)
        if node is None or id(node) in seen:
            continue
        seen.add(id(node))

        name = translate(_field(node, "name"), locale)
        label = name if parent_label is None else f"{parent_label}{separator}{name}"
        yield _field(node, "id"), label

        children = _field(node, "children") or []
        if children:
            stack.append((iter(children), label))


def build_tree(categories: Sequence[Category]) -> list[CategoryWithChildren]:
    """
    Nest a flat, lft-ordered list of categories.

    Categories whose parent is not part of the list become roots.
    """
    nodes: dict[int, CategoryWithChildren] = {}
    for category in categories:
        data = CategorySchema.model_validate(category).model_dump()
        nodes[category.id] = CategoryWithChildren(**data)

    roots = []
    for category in categories:
        node = nodes[category.id]
        parent = nodes.get(category.parent_id) if category.parent_id is not None else None
        if parent is None:
            roots.append(node)
        else:
            parent.children.append(node)
    return roots


def get_select_tree(db: Session, type: Optional[int] = None) -> list[CategoryWithChildren]:
    """Live categories, optionally of one type, as a nested tree."""
    query = select(Category).where(Category.deleted_at.is_(None))
    if type is not None:
        query = query.where(Category.type == type)
    categories = db.scalars(query.order_by(Category.lft, Category.id)).all()
    return build_tree(categories)


def render_select_options(
    db: Session,
    settings: Settings,
    as_: str = "list",
    prepend: Optional[Sequence[Any]] = None,
    type: Optional[int] = None,
) -> list[SelectOption] | dict[Any, str]:
    """
    Options for a hierarchical select input.

    as_: "list" for SelectOption entries, "dict" for an ordered {id: label}
    prepend: (label, value) placeholder placed first, e.g. ("Choose...", "")
    type: only render categories of this type
    """
    if as_ not in OUTPUT_SHAPES:
        raise InvalidArgumentError(f"as_ should be one of {', '.join(OUTPUT_SHAPES)}, got '{as_}'")

    if prepend and (len(prepend) < 2 or prepend[1] is None):
        raise InvalidArgumentError("prepend should be a (label, value) pair")

    tree = get_select_tree(db, type=type)
    pairs = list(render(tree, settings.html.select.separator, settings.locale))

    if prepend:
        label, value = prepend[0], prepend[1]
        pairs.insert(0, (value, label))

    if as_ == "dict":
        return dict(pairs)
    return [SelectOption(id=option_id, label=label) for option_id, label in pairs]
