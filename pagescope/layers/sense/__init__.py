"""Sense Layer - Querying the DOM and resolving page object elements."""

from pagescope.layers.sense.dom_query import MatchSet, find, query, set_default_driver
from pagescope.layers.sense.element_finder import (
    find_element,
    find_element_with_assert,
    find_visible_element_with_assert,
    simple_find_element_with_assert,
    simple_find_visible_element_with_assert,
)
from pagescope.layers.sense.helpers import every, map_elements, normalize_text

__all__ = [
    "MatchSet",
    "every",
    "find",
    "find_element",
    "find_element_with_assert",
    "find_visible_element_with_assert",
    "map_elements",
    "normalize_text",
    "query",
    "set_default_driver",
    "simple_find_element_with_assert",
    "simple_find_visible_element_with_assert",
]
