"""
Category model.

A node in the category forest:
- slug: unique, generated by the SlugGenerator
- name / description: locale-keyed maps ({"en": "News", "fa": "..."})
- lft / rgt: nested-set bounds, ordered pre-order
- stats: per-kind usage counters, written only by the StatsAggregator
"""
from sqlalchemy import JSON, Column, ForeignKey, Integer, SmallInteger, String
from sqlalchemy.orm import relationship

from categories.models.base import Base, SoftDeleteMixin, TimestampMixin


class Category(Base, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(150), unique=True, nullable=False, index=True)

    # Translations
    name = Column(JSON, nullable=False)
    description = Column(JSON)

    # Optional grouping, filters select rendering
    type = Column(SmallInteger, index=True)

    # {"articles": 3, "videos": {"other": 1, "clip": 4}}
    stats = Column(JSON)

    # Self-referential for hierarchy
    parent_id = Column(Integer, ForeignKey("categories.id"), index=True)
    lft = Column(Integer, nullable=False, default=0, index=True)
    rgt = Column(Integer, nullable=False, default=0, index=True)

    # Relationships
    parent = relationship("Category", remote_side=[id], backref="children")

    def __repr__(self):
        return f"<Category(id={self.id}, slug='{self.slug}')>"

    def get_name(self, locale: str = "en") -> str:
        """Name in the given locale, falling back to the first translation."""
        return translate(self.name, locale)

    def get_description(self, locale: str = "en") -> str | None:
        return translate(self.description, locale) or None


def translate(value, locale: str) -> str:
    """Pick a translation out of a locale map; plain strings pass through."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if value.get(locale):
        return value[locale]
    return next(iter(value.values()), "") or ""
