"""Core module - Page tree navigation, options and selector building."""

from pagescope.core.options import FindOptions
from pagescope.core.selector import build_selector, calculate_filters, calculate_scope
from pagescope.core.tree import PageNode, describe_path, get_context

__all__ = [
    "FindOptions",
    "PageNode",
    "build_selector",
    "calculate_filters",
    "calculate_scope",
    "describe_path",
    "get_context",
]
