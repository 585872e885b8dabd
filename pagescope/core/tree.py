"""
Page Tree - Read-only navigation over page object nodes.

The selector and resolution code only ever reads a node through the
functions in this module, so any object exposing ``parent``, ``key``,
``scope``, ``reset_scope`` and (on the root) ``context`` attributes can
act as a node. ``PageNode`` is the minimal concrete implementation.
"""

from typing import Any, Dict, Optional


class PageNode:
    """
    A vertex in a page object tree.

    Example:
        >>> page = PageNode(section=PageNode(scope=".section", button=PageNode(scope=".button")))
        >>> page.section.button.key
        'button'
    """

    def __init__(
        self,
        scope: Optional[str] = None,
        reset_scope: bool = False,
        context: Any = None,
        **children: "PageNode",
    ):
        """
        Args:
            scope: Selector fragment this node contributes to its descendants
            reset_scope: Stop inheriting scope from ancestors at this node
            context: Query-capable test context (only read on the root)
            children: Child nodes, attached under their keyword names
        """
        self.scope = scope
        self.reset_scope = reset_scope
        self.context = context
        self.parent: Optional["PageNode"] = None
        self.key: Optional[str] = None
        self._children: Dict[str, "PageNode"] = {}

        for key, child in children.items():
            self.attach(key, child)

    def attach(self, key: str, child: "PageNode") -> "PageNode":
        """Attach ``child`` under ``key`` and return it."""
        if child.parent is not None:
            raise ValueError(f"Node '{child.key}' is already attached to a parent")

        child.parent = self
        child.key = key
        self._children[key] = child
        return child

    @property
    def children(self) -> Dict[str, "PageNode"]:
        return dict(self._children)

    def __getattr__(self, name: str) -> "PageNode":
        children = self.__dict__.get("_children", {})
        if name in children:
            return children[name]
        raise AttributeError(f"{type(self).__name__} has no child or attribute '{name}'")

    def __repr__(self) -> str:
        return f"PageNode(key={self.key!r}, scope={self.scope!r})"


def parent_of(node: Any) -> Optional[Any]:
    """Return the parent of ``node``, or None for a root."""
    return getattr(node, "parent", None)


def key_of(node: Any) -> Optional[str]:
    return getattr(node, "key", None)


def scope_of(node: Any) -> Optional[str]:
    return getattr(node, "scope", None)


def resets_scope(node: Any) -> bool:
    return bool(getattr(node, "reset_scope", False))


def root_of(node: Any) -> Any:
    """Walk parent links up to the root of ``node``'s tree."""
    root = node
    parent = parent_of(node)

    while parent is not None:
        root = parent
        parent = parent_of(parent)

    return root


def get_context(node: Any) -> Optional[Any]:
    """
    Return the test context attached to the root of ``node``'s tree.

    A context is any object with a callable ``find_elements`` (a
    WebDriver or a WebElement the test rendered into).

    Returns:
        The context, or None when the root carries no usable context
    """
    context = getattr(root_of(node), "context", None)

    if context is not None and callable(getattr(context, "find_elements", None)):
        return context
    return None


def describe_path(node: Any, key: Optional[str] = None) -> str:
    """
    Build the breadcrumb for ``node`` used in error messages.

    Keys are collected from the root down to ``node``; the root is
    always reported as ``page``. ``key`` is appended as the final
    segment when given.

    Example:
        >>> describe_path(page.section, "button")
        'page.section.button'
    """
    path = []
    current = node

    while current is not None:
        path.append(key_of(current))
        current = parent_of(current)

    path.reverse()
    path[0] = "page"

    if key:
        path.append(key)

    return ".".join(str(segment) for segment in path if segment is not None)
