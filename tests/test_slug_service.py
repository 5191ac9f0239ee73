import pytest

from categories.config import SlugOptions
from categories.exceptions import ConfigurationError
from categories.models.category import Category
from categories.schemas.category import CategoryUpdate
from categories.services import category_service
from categories.services.slug_service import SlugGenerator, slugify


def _add_slug(db, slug: str, **fields) -> Category:
    category = Category(slug=slug, name={"en": slug}, **fields)
    db.add(category)
    db.flush()
    return category


def test_slugify_lowercases_and_strips_punctuation() -> None:
    assert slugify("Hello World!", "-") == "hello-world"
    assert slugify("  Spaces   everywhere  ") == "spaces-everywhere"
    assert slugify("--Already-dashed--") == "already-dashed"


def test_slugify_flips_the_alternate_separator() -> None:
    assert slugify("snake_case name", "-") == "snake-case-name"
    assert slugify("kebab-case name", "_") == "kebab_case_name"


def test_slugify_spells_out_at_sign() -> None:
    assert slugify("Tom & Jerry @ Home") == "tom-jerry-at-home"


def test_slugify_transliterates_accents_and_scripts() -> None:
    assert slugify("Crème Brûlée") == "creme-brulee"
    assert slugify("Привет мир") == "privet-mir"
    assert slugify("Straße") == "strasse"
    assert slugify("Երևան") == "erevan"
    assert slugify("اخبار ورزشی") == "akhbar-orzshi"


def test_slugify_uses_language_specific_replacements_first() -> None:
    assert slugify("Über Größe", language="de") == "ueber-groesse"
    assert slugify("Über Größe", language="en") == "uber-grosse"


def test_slugify_keeps_persian_letters_for_rtl_languages() -> None:
    assert slugify("اخبار ورزشی", language="fa") == "اخبار-ورزشی"
    assert slugify("۱۴۰۲ news!", language="fa") == "۱۴۰۲-news"


def test_generate_appends_counter_on_collision(db, settings) -> None:
    generator = SlugGenerator(db, settings.slug)

    first = generator.generate("Hello World!", "-")
    assert first == "hello-world"
    _add_slug(db, first)

    second = generator.generate("Hello World!", "-")
    assert second == "hello-world-1"
    _add_slug(db, second)

    assert generator.generate("Hello World!", "-") == "hello-world-2"


def test_generate_empty_text_goes_straight_to_counter(db, settings) -> None:
    generator = SlugGenerator(db, settings.slug)

    assert generator.generate("") == "-1"
    assert generator.generate("!!!") == "-1"
    _add_slug(db, "-1")
    assert generator.generate("") == "-2"


def test_generate_ignores_the_excluded_record(db, settings) -> None:
    category = _add_slug(db, "news")
    generator = SlugGenerator(db, settings.slug)

    assert generator.generate("News", exclude_id=category.id) == "news"
    assert generator.generate("News") == "news-1"


def test_soft_deleted_slugs_stay_reserved(db, settings, make_category) -> None:
    news = make_category("News")
    category_service.soft_delete_category(db, news)

    assert make_category("News").slug == "news-1"


def test_generator_rejects_missing_options(db) -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        SlugGenerator(db, SlugOptions(field=None, separator=None))

    message = str(excinfo.value)
    assert "field" in message
    assert "separator" in message
    assert "from" not in message

    with pytest.raises(ConfigurationError):
        SlugGenerator(db, SlugOptions(**{"from": ""}))

    with pytest.raises(ConfigurationError):
        SlugGenerator(db, None)


def test_generator_uses_configured_language(db) -> None:
    generator = SlugGenerator(db, SlugOptions(lang="de"), locale="en")
    assert generator.generate("Müsli") == "muesli"

    generator = SlugGenerator(db, SlugOptions(), locale="de")
    assert generator.generate("Müsli") == "muesli"


def test_create_builds_slug_from_name(make_category) -> None:
    assert make_category("Breaking News").slug == "breaking-news"
    assert make_category("Breaking News").slug == "breaking-news-1"


def test_create_reslugs_an_explicit_slug(make_category) -> None:
    assert make_category("Anything", slug="My Custom_Slug").slug == "my-custom-slug"


def test_create_without_slug_generation_keeps_given_slug(db, settings) -> None:
    settings = settings.model_copy(update={"slug": SlugOptions(on_create=False)})
    category = Category(slug="As Is", name={"en": "Name"})

    SlugGenerator(db, settings.slug).on_create(category)

    assert category.slug == "As Is"


def test_update_keeps_slug_when_name_changes(db, settings, make_category) -> None:
    category = make_category("Sports")

    category_service.update_category(db, settings, category, CategoryUpdate(name={"en": "Athletics"}))

    assert category.slug == "sports"


def test_update_regenerates_from_name_when_slug_cleared(db, settings, make_category) -> None:
    make_category("Athletics")
    category = make_category("Sports")

    category_service.update_category(
        db, settings, category, CategoryUpdate(name={"en": "Athletics"}, slug=None)
    )

    assert category.slug == "athletics-1"


def test_update_skipped_when_disabled(db, make_category) -> None:
    category = make_category("Sports")
    category.slug = "Sports Today"

    SlugGenerator(db, SlugOptions(on_update=False)).on_update(category)

    assert category.slug == "Sports Today"


def test_update_to_a_taken_slug_gets_a_counter(db, settings, make_category) -> None:
    make_category("News")
    sports = make_category("Sports")

    category_service.update_category(db, settings, sports, CategoryUpdate(slug="news"))

    assert sports.slug == "news-1"
