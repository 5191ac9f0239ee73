"""
Slug service.

Generates URL-safe, unique category slugs:

    generator = SlugGenerator(db, settings.slug, locale=settings.locale)
    generator.generate("Hello World!")     # "hello-world"
    generator.generate("Hello World!")     # "hello-world-1" once the first is saved

Soft-deleted categories keep their slug reserved: the unique index
covers every row, so the existence check does too.
"""
import logging
import re

from sqlalchemy import select
from sqlalchemy.orm import Session

from categories.config import SlugOptions
from categories.exceptions import ConfigurationError
from categories.models.category import Category, translate
from categories.services.transliteration import transliterate

logger = logging.getLogger(__name__)


def slugify(text: str, separator: str = "-", language: str | None = "en") -> str:
    """Turn display text into a slug; no uniqueness check."""
    text = transliterate(text, language)

    # Convert all dashes/underscores into separator
    flip = "_" if separator == "-" else "-"
    text = re.sub(f"[{re.escape(flip)}]+", separator, text)

    text = text.replace("@", f"{separator}at{separator}")

    # Keep the separator, letters, digits and whitespace
    text = "".join(
        char for char in text.lower()
        if char.isalnum() or char.isspace() or char in separator
    )

    text = re.sub(rf"[{re.escape(separator)}\s]+", separator, text)

    return text.strip(separator)


class SlugGenerator:
    """Slug generation bound to a session and a set of options."""

    def __init__(self, db: Session, options: SlugOptions, locale: str = "en"):
        self._guard_against_invalid_options(options)
        self.db = db
        self.options = options
        self.lang = options.lang or locale
        self.locale = locale

    @staticmethod
    def _guard_against_invalid_options(options: SlugOptions | None):
        if options is None:
            raise ConfigurationError("slug options are required")

        missing = []
        if not options.field:
            missing.append("field")
        if not options.from_field:
            missing.append("from")
        for name in ("on_create", "on_update", "separator"):
            if getattr(options, name) is None:
                missing.append(name)

        if missing:
            raise ConfigurationError(f"{', '.join(missing)} not set or is null")

    def generate(self, text: str, separator: str | None = None, exclude_id: int | None = None) -> str:
        """Slugify text and append -1, -2, ... until no other row uses it."""
        separator = self.options.separator if separator is None else separator
        slug = slugify(text or "", separator, self.lang)
        original = slug
        i = 1

        # Pending edits on the category being slugged must not reach the table first
        with self.db.no_autoflush:
            while slug == "" or self._exists(slug, exclude_id):
                slug = f"{original}{separator}{i}"
                i += 1

        if slug != original:
            logger.debug(f"Slug '{original}' taken, using '{slug}'")
        return slug

    def _exists(self, slug: str, exclude_id: int | None) -> bool:
        field = getattr(Category, self.options.field)
        query = select(Category.id).where(field == slug)
        if exclude_id is not None:
            query = query.where(Category.id != exclude_id)
        return self.db.execute(query.limit(1)).first() is not None

    def on_create(self, category: Category) -> None:
        if self.options.on_create:
            self._add_slug(category)

    def on_update(self, category: Category) -> None:
        if self.options.on_update:
            self._add_slug(category)

    def _add_slug(self, category: Category) -> None:
        field = self.options.field
        current = getattr(category, field, None)
        if current:
            title = current
        else:
            title = translate(getattr(category, self.options.from_field, None), self.locale)

        setattr(category, field, self.generate(title, exclude_id=category.id))
