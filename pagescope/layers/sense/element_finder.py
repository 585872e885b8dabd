"""
Element Finder - Resolve page object selectors to live elements.

Every lookup is a one-shot pipeline: build the selector, pick the
query context, query once, then enforce the match-count policy.
"""

from typing import Any
import logging

from pagescope.core.errors import ElementNotFoundError, ElementNotVisibleError, MultipleMatchesError
from pagescope.core.options import FindOptions
from pagescope.core.selector import build_selector
from pagescope.core.tree import describe_path, get_context
from pagescope.layers.sense.dom_query import MatchSet, document_root, find, query, query_within

logger = logging.getLogger(__name__)


def guard_multiple(result: MatchSet, selector: str, multiple: bool = False) -> None:
    """Raise MultipleMatchesError unless ``multiple`` allows a larger match set."""
    if not multiple and len(result) > 1:
        logger.debug(f"[ElementFinder] '{selector}' matched {len(result)} elements, multiple not allowed")
        raise MultipleMatchesError(selector, len(result))


def execute_query(node: Any, selector: str, options: FindOptions) -> MatchSet:
    """
    Run ``selector`` against the right search root for ``node``.

    Precedence:
    1. A test context on the root node, narrowed to ``test_container``
       (looked up from the context's document) when one is given
    2. The default driver registered with ``set_default_driver()``
    """
    context = get_context(node)

    if context is not None:
        if options.test_container is not None:
            return query_within(document_root(context), selector, options.test_container)
        return query(context, selector)

    return find(selector, options.test_container)


def find_element_with_assert(node: Any, target_selector: str, options: Any = None, **kwargs: Any) -> MatchSet:
    """
    Return the elements matched by a selector built from ``node`` and ``target_selector``.

    Args:
        node: Node of the page object tree
        target_selector: Selector of the element itself
        options: FindOptions or mapping; keyword arguments override it

    Raises:
        ElementNotFoundError: If nothing matches
        MultipleMatchesError: If several elements match and ``multiple`` is not set
    """
    options = FindOptions.coerce(options, **kwargs)
    selector = build_selector(node, target_selector, options)

    return simple_find_element_with_assert(node, selector, options)


def simple_find_element_with_assert(node: Any, selector: str, options: Any = None, **kwargs: Any) -> MatchSet:
    """Same as ``find_element_with_assert`` but uses ``selector`` as is."""
    options = FindOptions.coerce(options, **kwargs)
    result = execute_query(node, selector, options)

    if len(result) == 0:
        path = describe_path(node, options.page_object_key)
        logger.debug(f"[ElementFinder] '{selector}' not found for {path}")
        raise ElementNotFoundError(selector, path)

    guard_multiple(result, selector, options.multiple)

    return result


def simple_find_visible_element_with_assert(node: Any, selector: str, options: Any = None, **kwargs: Any) -> MatchSet:
    """Same as ``simple_find_element_with_assert``, also requiring a displayed match."""
    result = simple_find_element_with_assert(node, selector, options, **kwargs)

    if not result.is_visible():
        logger.debug(f"[ElementFinder] '{selector}' matched {len(result)} hidden element(s)")
        raise ElementNotVisibleError(selector)

    return result


def find_visible_element_with_assert(node: Any, target_selector: str, options: Any = None, **kwargs: Any) -> MatchSet:
    """
    Like ``find_element_with_assert``, then require at least one displayed match.

    Raises:
        ElementNotVisibleError: If elements match but none is displayed
    """
    options = FindOptions.coerce(options, **kwargs)
    selector = build_selector(node, target_selector, options)

    return simple_find_visible_element_with_assert(node, selector, options)


def find_element(node: Any, target_selector: str, options: Any = None, **kwargs: Any) -> MatchSet:
    """
    Return the elements matched by a selector, possibly none.

    Raises:
        MultipleMatchesError: If several elements match and ``multiple`` is not set
    """
    options = FindOptions.coerce(options, **kwargs)
    selector = build_selector(node, target_selector, options)
    result = execute_query(node, selector, options)

    guard_multiple(result, selector, options.multiple)

    return result
