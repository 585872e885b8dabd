import pytest
from unittest.mock import MagicMock

from pagescope.core.tree import PageNode, describe_path, get_context, key_of, parent_of, root_of


def test_children_are_attached_with_keys():
    page = PageNode(section=PageNode(scope=".section", button=PageNode(scope=".button")))

    assert page.section.key == "section"
    assert page.section.button.key == "button"
    assert parent_of(page.section.button) is page.section
    assert parent_of(page) is None
    assert set(page.children) == {"section"}


def test_attach_twice_is_rejected():
    child = PageNode()
    PageNode(first=child)

    with pytest.raises(ValueError):
        PageNode(second=child)


def test_missing_child_raises_attribute_error():
    with pytest.raises(AttributeError):
        PageNode().missing


def test_root_of_walks_to_the_top():
    page = PageNode(a=PageNode(b=PageNode(c=PageNode())))
    assert root_of(page.a.b.c) is page
    assert root_of(page) is page


def test_get_context_returns_query_capable_root_context():
    driver = MagicMock()
    page = PageNode(context=driver, section=PageNode())

    assert get_context(page.section) is driver


def test_get_context_ignores_contexts_that_cannot_query():
    page = PageNode(context={"not": "a driver"}, section=PageNode())
    assert get_context(page.section) is None
    assert get_context(PageNode()) is None


def test_get_context_only_reads_the_root():
    driver = MagicMock()
    page = PageNode(section=PageNode(context=driver))
    assert get_context(page.section) is None


def test_describe_path_reports_root_as_page():
    page = PageNode(section=PageNode(button=PageNode()))

    assert describe_path(page.section.button) == "page.section.button"
    assert describe_path(page) == "page"


def test_describe_path_appends_page_object_key():
    page = PageNode(section=PageNode())

    assert describe_path(page.section, "button") == "page.section.button"
    assert describe_path(page, "title") == "page.title"


def test_key_of_unattached_node_is_none():
    assert key_of(PageNode()) is None
