import pytest

from categories.config import HtmlOptions, SelectOptions
from categories.exceptions import InvalidArgumentError
from categories.schemas.category import SelectOption
from categories.services import category_service, tree_service


def test_render_builds_breadcrumb_labels() -> None:
    tree = [{"id": 1, "name": "A", "children": [{"id": 2, "name": "B", "children": []}]}]

    assert list(tree_service.render(tree, " > ")) == [(1, "A"), (2, "A > B")]


def test_render_is_preorder_and_keeps_sibling_order() -> None:
    tree = [
        {"id": 1, "name": "Sports", "children": [
            {"id": 2, "name": "Football", "children": [
                {"id": 3, "name": "Leagues", "children": []},
            ]},
            {"id": 4, "name": "Tennis", "children": []},
        ]},
        {"id": 5, "name": "News", "children": []},
    ]

    assert list(tree_service.render(tree, "/")) == [
        (1, "Sports"),
        (2, "Sports/Football"),
        (3, "Sports/Football/Leagues"),
        (4, "Sports/Tennis"),
        (5, "News"),
    ]


def test_render_is_restartable() -> None:
    tree = [{"id": 1, "name": "A", "children": []}]

    assert list(tree_service.render(tree, " > ")) == list(tree_service.render(tree, " > "))


def test_render_handles_deep_nesting() -> None:
    depth = 2000
    root = node = {"id": 0, "name": "n", "children": []}
    for i in range(1, depth):
        child = {"id": i, "name": "n", "children": []}
        node["children"].append(child)
        node = child

    options = list(tree_service.render([root], "."))

    assert len(options) == depth
    assert [option_id for option_id, _ in options] == list(range(depth))
    assert options[-1][1].count(".") == depth - 1


def test_render_picks_translated_names() -> None:
    tree = [{"id": 1, "name": {"en": "News", "fa": "اخبار"}, "children": []}]

    assert list(tree_service.render(tree, " > ", locale="fa")) == [(1, "اخبار")]
    assert list(tree_service.render(tree, " > ", locale="de")) == [(1, "News")]


def test_build_tree_nests_by_parent(make_category) -> None:
    sports = make_category("Sports")
    football = make_category("Football", parent=sports)
    news = make_category("News")

    roots = tree_service.build_tree([sports, football, news])

    assert [root.id for root in roots] == [sports.id, news.id]
    assert [child.id for child in roots[0].children] == [football.id]


def test_build_tree_promotes_orphans_to_roots(make_category) -> None:
    sports = make_category("Sports")
    football = make_category("Football", parent=sports)

    roots = tree_service.build_tree([football])

    assert [root.id for root in roots] == [football.id]


def test_select_options_follow_nested_set_order(db, settings, make_category) -> None:
    sports = make_category("Sports")
    news = make_category("News")
    football = make_category("Football", parent=sports)

    options = tree_service.render_select_options(db, settings)

    assert options == [
        SelectOption(id=sports.id, label="Sports"),
        SelectOption(id=football.id, label="Sports > Football"),
        SelectOption(id=news.id, label="News"),
    ]


def test_select_options_as_dict_with_placeholder(db, settings, make_category) -> None:
    sports = make_category("Sports")
    football = make_category("Football", parent=sports)

    options = tree_service.render_select_options(db, settings, as_="dict", prepend=("Choose...", ""))

    assert list(options.items()) == [
        ("", "Choose..."),
        (sports.id, "Sports"),
        (football.id, "Sports > Football"),
    ]


def test_select_options_filter_by_type(db, settings, make_category) -> None:
    sports = make_category("Sports", type=1)
    make_category("Football", parent=sports, type=2)
    make_category("News", type=1)

    options = tree_service.render_select_options(db, settings, as_="dict", type=2)

    assert list(options.values()) == ["Football"]


def test_select_options_skip_soft_deleted(db, settings, make_category) -> None:
    sports = make_category("Sports")
    category_service.soft_delete_category(db, make_category("News"))

    options = tree_service.render_select_options(db, settings, as_="dict")

    assert options == {sports.id: "Sports"}


def test_select_options_use_configured_separator(db, settings, make_category) -> None:
    settings = settings.model_copy(update={"html": HtmlOptions(select=SelectOptions(separator=" / "))})
    sports = make_category("Sports")
    football = make_category("Football", parent=sports)

    options = tree_service.render_select_options(db, settings, as_="dict")

    assert options[football.id] == "Sports / Football"


def test_select_options_reject_unknown_shape(db, settings) -> None:
    with pytest.raises(InvalidArgumentError):
        tree_service.render_select_options(db, settings, as_="collection")


def test_select_options_reject_prepend_without_value(db, settings) -> None:
    with pytest.raises(InvalidArgumentError):
        tree_service.render_select_options(db, settings, prepend=("Choose...",))


def test_select_options_reject_prepend_with_null_value(db, settings) -> None:
    with pytest.raises(InvalidArgumentError):
        tree_service.render_select_options(db, settings, prepend=("Choose...", None))
