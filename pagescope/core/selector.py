"""
Selector Builder - Flattens a page object tree position into one selector.

Scopes are collected from the root down to the node, the explicit
target selector follows, and jQuery-style filters are glued to the end:

    page (scope: none)
      └─ list (scope: ".todo-list")
           └─ item (target: "li", contains: "Milk")

    ->  '.todo-list li:contains("Milk")'
"""

from typing import Any

from pagescope.core.options import FindOptions
from pagescope.core.tree import parent_of, resets_scope, scope_of


def scope_chain(node: Any) -> str:
    """
    Return the scope inherited by ``node``, ordered root first.

    The walk stops at the first node (starting from ``node`` itself)
    with ``reset_scope`` set; that node's own scope is still included.
    """
    scopes = []
    current = node

    while current is not None:
        own = (scope_of(current) or "").strip()
        if own:
            scopes.append(own)
        if resets_scope(current):
            break
        current = parent_of(current)

    scopes.reverse()
    return " ".join(scopes)


def calculate_scope(node: Any, target_scope: str = "") -> str:
    """Return the ancestor scope chain of ``node`` followed by ``target_scope``."""
    parts = (scope_chain(node), (target_scope or "").strip())
    return " ".join(part for part in parts if part)


def _quote(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def calculate_filters(options: FindOptions) -> str:
    """
    Build the pseudo-class suffix for ``options``.

    ``contains`` comes first, then either ``at`` or ``last``; ``at``
    wins when both are given.
    """
    filters = []

    if options.contains:
        filters.append(f':contains("{_quote(options.contains)}")')

    if options.at is not None:
        filters.append(f":eq({options.at})")
    elif options.last:
        filters.append(":last")

    return "".join(filters)


def build_selector(node: Any, target_selector: str = "", options: Any = None, **kwargs: Any) -> str:
    """
    Build a fully qualified selector for ``target_selector`` under ``node``.

    Args:
        node: Node of the page object tree
        target_selector: Selector of the element itself
        options: FindOptions or mapping; keyword arguments override it

    Returns:
        The composed selector string

    Example:
        >>> component = PageNode(scope=".component")
        >>> build_selector(component, ".my-element")
        '.component .my-element'
        >>> build_selector(PageNode(), ".my-element", at=0)
        '.my-element:eq(0)'
        >>> build_selector(PageNode(), ".my-element", contains="Example")
        '.my-element:contains("Example")'
        >>> build_selector(PageNode(), ".my-element", last=True)
        '.my-element:last'
    """
    options = FindOptions.coerce(options, **kwargs)

    if options.reset_scope:
        scope = options.scope or ""
    else:
        scope = calculate_scope(node, options.scope or "")

    fragment = f"{target_selector or ''}{calculate_filters(options)}"

    return " ".join(part for part in (scope.strip(), fragment) if part).strip()
