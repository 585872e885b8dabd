"""
pagescope - Scoped element lookup for page object tests.

Flattens "this element, inside this component, inside this page" into
a single jQuery-dialect selector and resolves it against a live
Selenium session with actionable errors on missing or ambiguous matches.
"""

__version__ = "0.1.0"

from pagescope.core.errors import (
    ElementNotFoundError,
    ElementNotVisibleError,
    ElementResolutionError,
    MultipleMatchesError,
    PageScopeError,
)
from pagescope.core.options import FindOptions
from pagescope.core.selector import build_selector
from pagescope.core.tree import PageNode
from pagescope.layers.sense import (
    MatchSet,
    find_element,
    find_element_with_assert,
    find_visible_element_with_assert,
    simple_find_element_with_assert,
)

__all__ = [
    "ElementNotFoundError",
    "ElementNotVisibleError",
    "ElementResolutionError",
    "FindOptions",
    "MatchSet",
    "MultipleMatchesError",
    "PageNode",
    "PageScopeError",
    "build_selector",
    "find_element",
    "find_element_with_assert",
    "find_visible_element_with_assert",
    "simple_find_element_with_assert",
    "__version__",
]
