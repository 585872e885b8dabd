"""
DOM Query - jQuery-dialect selector execution over Selenium.

Plain CSS goes to the browser untouched in a single ``find_elements``
call. The jQuery extensions produced by the selector builder
(``:contains()``, ``:eq()``, ``:first`` and ``:last``) are not CSS, so
they are peeled off each compound selector and applied in Python to
whatever the browser returned for the part of the selector before them.
"""

from typing import Any, Iterator, List, Optional, Tuple
import logging
import re

from selenium.common.exceptions import InvalidSelectorException, StaleElementReferenceException
from selenium.webdriver.common.by import By

from pagescope.core.errors import NoQueryContextError, SelectorSyntaxError

logger = logging.getLogger(__name__)

# Process-wide fallback used when a page tree carries no test context
_default_driver: Optional[Any] = None

_EXTENSION_RE = re.compile(
    r"""
    :(?:
        contains\(\s*(?:
            "(?P<double>(?:[^"\\]|\\.)*)"
          | '(?P<single>(?:[^'\\]|\\.)*)'
          | (?P<bare>[^)]*?)
        )\s*\)
      | eq\(\s*(?P<index>[+-]?\d+)\s*\)
      | (?P<position>first|last)(?![\w-])
    )
    """,
    re.VERBOSE,
)

# Returns arguments[0] sorted into document order, like jQuery.uniqueSort
_DOCUMENT_ORDER_JS = """
return arguments[0].slice().sort(function (a, b) {
    if (a === b) { return 0; }
    return (a.compareDocumentPosition(b) & Node.DOCUMENT_POSITION_FOLLOWING) ? -1 : 1;
});
"""

_POSITIONAL = ("eq", "first", "last")

Filter = Tuple[str, Any]
Step = Tuple[str, str]  # (combinator, compound selector)


class MatchSet:
    """
    Ordered collection of elements matched by a selector.

    Mirrors the small part of the jQuery object API that page objects
    rely on: ``length``, ``get()`` and a visibility check.
    """

    def __init__(self, elements: Optional[List[Any]] = None, selector: str = ""):
        self._elements = list(elements or [])
        self.selector = selector

    @property
    def length(self) -> int:
        return len(self._elements)

    def get(self, index: Optional[int] = None) -> Any:
        """Return all elements as a list, or the element at ``index``."""
        if index is None:
            return list(self._elements)
        return self._elements[index]

    def is_visible(self) -> bool:
        """True if at least one matched element is displayed."""
        return any(_is_displayed(element) for element in self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._elements)

    def __getitem__(self, index: int) -> Any:
        return self._elements[index]

    def __repr__(self) -> str:
        return f"MatchSet(selector={self.selector!r}, length={len(self._elements)})"


def set_default_driver(driver: Any) -> None:
    """Register the driver used by ``find()`` when no test context exists."""
    global _default_driver
    _default_driver = driver
    logger.info(f"[DOMQuery] Registered default driver: {type(driver).__name__}")


def get_default_driver() -> Optional[Any]:
    return _default_driver


def clear_default_driver() -> None:
    global _default_driver
    _default_driver = None


def document_root(context: Any) -> Any:
    """
    Return the document-level search root for a test context.

    A WebElement context reports its WebDriver as ``parent``; anything
    else is treated as its own document.
    """
    parent = getattr(context, "parent", None)
    if parent is not None and callable(getattr(parent, "find_elements", None)):
        return parent
    return context


def is_document(root: Any) -> bool:
    """True if ``root`` searches a whole document rather than one element's subtree."""
    return document_root(root) is root


def find(selector: str, test_container: Any = None) -> MatchSet:
    """
    Query the default driver.

    Raises:
        NoQueryContextError: If no default driver has been registered
    """
    driver = get_default_driver()
    if driver is None:
        raise NoQueryContextError(
            f"Cannot look up '{selector}': attach a context to the root page node "
            "or register a driver with set_default_driver()"
        )
    return query_within(driver, selector, test_container)


def query_within(root: Any, selector: str, container: Any = None) -> MatchSet:
    """
    Query ``selector`` inside ``container``.

    Args:
        root: Search root used to look up ``container`` when it is a selector
        selector: jQuery-dialect selector to match
        container: Element, selector string, or None to search ``root`` itself
    """
    if container is None:
        return query(root, selector)

    if isinstance(container, str):
        containers = query(root, container).get()
    else:
        containers = [container]

    elements: List[Any] = []
    for element in containers:
        _extend_unique(elements, query(element, selector))
    if len(containers) > 1:
        elements = _document_order(elements)

    logger.debug(f"[DOMQuery] '{selector}' in {len(containers)} container(s) matched {len(elements)} element(s)")
    return MatchSet(elements, selector)


def query(root: Any, selector: str) -> MatchSet:
    """
    Return every element under ``root`` matching ``selector``, in document order.

    An element root anchors each selector group at itself with ``:scope``,
    so every compound must match inside the element, as jQuery's context
    argument does.

    Args:
        root: WebDriver, WebElement, or anything with ``find_elements(by, value)``
        selector: CSS selector, optionally using jQuery extension pseudo-classes

    Raises:
        SelectorSyntaxError: If the browser rejects the selector, a filtered
            compound is followed by a sibling combinator, or simple selectors
            follow :eq/:first/:last within one compound
    """
    if not selector or not selector.strip():
        return MatchSet([], selector)

    groups = [_split_steps(group) for group in _split_groups(selector)]
    scoped = not is_document(root)
    if scoped:
        groups = [_anchor_at_scope(steps) for steps in groups]

    if not any(_has_extensions(compound) for steps in groups for _, compound in steps):
        css = ", ".join(_join_steps(steps) for steps in groups) if scoped else selector
        elements = _native(root, css)
    else:
        elements = []
        for steps in groups:
            _extend_unique(elements, _evaluate(root, steps))
        if len(groups) > 1:
            elements = _document_order(elements)

    logger.debug(f"[DOMQuery] '{selector}' matched {len(elements)} element(s)")
    return MatchSet(elements, selector)


def _evaluate(root: Any, steps: List[Step]) -> List[Any]:
    extended = [i for i, (_, compound) in enumerate(steps) if _has_extensions(compound)]
    if not extended:
        return _native(root, _join_steps(steps))

    split = extended[-1]
    combinator, compound = steps[split]
    native, filters = _extract_filters(compound)

    anchors = _evaluate(root, steps[:split] + [(combinator, native)])
    for kind, argument in filters:
        anchors = _apply_filter(anchors, kind, argument)

    tail = steps[split + 1:]
    if not tail:
        return anchors
    return _descend(anchors, tail)


def _descend(anchors: List[Any], tail: List[Step]) -> List[Any]:
    combinator = tail[0][0]
    if combinator in ("+", "~"):
        raise SelectorSyntaxError(
            f"Sibling combinator '{combinator}' cannot follow a :contains/:eq/:first/:last filter"
        )

    css = f":scope {_join_steps(tail)}"

    elements: List[Any] = []
    for anchor in anchors:
        _extend_unique(elements, _native(anchor, css))
    if len(anchors) > 1:
        elements = _document_order(elements)
    return elements


def _anchor_at_scope(steps: List[Step]) -> List[Step]:
    combinator, compound = steps[0]
    if not combinator and compound.startswith(":scope"):
        return steps
    return [("", ":scope"), (combinator or " ", compound)] + steps[1:]


def _document_order(elements: List[Any]) -> List[Any]:
    """Sort elements gathered from several lookups back into document order."""
    if len(elements) < 2:
        return elements

    driver = document_root(elements[0])
    execute_script = getattr(driver, "execute_script", None)
    if driver is elements[0] or not callable(execute_script):
        logger.debug(f"[DOMQuery] No driver reachable from {type(elements[0]).__name__}, keeping lookup order")
        return elements
    return list(execute_script(_DOCUMENT_ORDER_JS, elements))


def _native(root: Any, css: str) -> List[Any]:
    try:
        return list(root.find_elements(By.CSS_SELECTOR, css))
    except InvalidSelectorException as e:
        raise SelectorSyntaxError(f"Invalid selector '{css}': {e.msg}") from e


def _apply_filter(elements: List[Any], kind: str, argument: Any) -> List[Any]:
    if kind == "contains":
        return [element for element in elements if argument in _text_content(element)]
    if kind == "eq":
        index = argument if argument >= 0 else len(elements) + argument
        return [elements[index]] if 0 <= index < len(elements) else []
    if kind == "first":
        return elements[:1]
    return elements[-1:]


def _extract_filters(compound: str) -> Tuple[str, List[Filter]]:
    """
    Split a compound selector into its native CSS and its extension filters.

    The native part is matched by the browser before any filter runs, so it
    may not follow a positional filter: ``li:eq(0).done`` means "the first
    li, if it is .done", which a single CSS query cannot express.
    """
    flags = _top_level(compound)
    native = []
    filters: List[Filter] = []
    pos = 0

    while pos < len(compound):
        if compound[pos] == ":" and flags[pos]:
            match = _EXTENSION_RE.match(compound, pos)
            if match:
                filters.append(_to_filter(match))
                pos = match.end()
                continue
        if any(kind in _POSITIONAL for kind, _ in filters):
            raise SelectorSyntaxError(
                f"'{compound[pos:]}' cannot follow :eq/:first/:last in '{compound}'; "
                "move it before the positional filter"
            )
        native.append(compound[pos])
        pos += 1

    return "".join(native) or "*", filters


def _to_filter(match: "re.Match") -> Filter:
    if match.group("index") is not None:
        return "eq", int(match.group("index"))
    if match.group("position") is not None:
        return match.group("position"), None

    for name in ("double", "single"):
        if match.group(name) is not None:
            return "contains", re.sub(r"\\(.)", r"\1", match.group(name))
    return "contains", match.group("bare").strip()


def _has_extensions(compound: str) -> bool:
    flags = _top_level(compound)
    return any(
        ch == ":" and flags[pos] and _EXTENSION_RE.match(compound, pos)
        for pos, ch in enumerate(compound)
    )


def _top_level(text: str) -> List[bool]:
    """Flag each character that sits outside quotes, brackets and parentheses."""
    flags = []
    depth = 0
    quote = None
    escaped = False

    for ch in text:
        flags.append(depth == 0 and quote is None and not escaped)

        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(depth - 1, 0)

    return flags


def _split_groups(selector: str) -> List[str]:
    flags = _top_level(selector)
    groups = []
    start = 0

    for pos, ch in enumerate(selector):
        if ch == "," and flags[pos]:
            groups.append(selector[start:pos].strip())
            start = pos + 1

    groups.append(selector[start:].strip())
    return [group for group in groups if group]


def _split_steps(group: str) -> List[Step]:
    flags = _top_level(group)
    steps: List[Step] = []
    combinator = ""
    current: List[str] = []

    for ch, top in zip(group, flags):
        if top and ch.isspace():
            if current:
                steps.append((combinator, "".join(current)))
                current = []
                combinator = " "
        elif top and ch in ">+~":
            if current:
                steps.append((combinator, "".join(current)))
                current = []
            combinator = ch
        else:
            current.append(ch)

    if current:
        steps.append((combinator, "".join(current)))
    return steps


def _join_steps(steps: List[Step]) -> str:
    parts = []
    for combinator, compound in steps:
        if combinator.strip():
            parts.append(combinator)
        parts.append(compound)
    return " ".join(parts)


def _extend_unique(target: List[Any], elements: Any) -> None:
    for element in elements:
        if element not in target:
            target.append(element)


def _text_content(element: Any) -> str:
    try:
        return element.get_attribute("textContent") or ""
    except StaleElementReferenceException:
        return ""


def _is_displayed(element: Any) -> bool:
    try:
        return bool(element.is_displayed())
    except StaleElementReferenceException:
        return False
