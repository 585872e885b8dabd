"""
Errors - Failure taxonomy for selector building and element resolution.

Resolution failures derive from AssertionError so that test runners
report a missing or ambiguous element as a failed assertion rather
than as a crash.
"""

from typing import Optional


class PageScopeError(Exception):
    """Base class for all pagescope errors."""


class InvalidOptionsError(PageScopeError, ValueError):
    """Raised when find options fall outside their contract."""


class SelectorSyntaxError(PageScopeError, ValueError):
    """Raised when a selector cannot be evaluated."""


class NoQueryContextError(PageScopeError):
    """Raised when neither a test context nor a default driver is available."""


class ElementResolutionError(PageScopeError, AssertionError):
    """A selector did not resolve to an acceptable match set."""

    def __init__(self, message: str, selector: str):
        super().__init__(message)
        self.selector = selector


class ElementNotFoundError(ElementResolutionError):
    """Zero elements matched."""

    def __init__(self, selector: str, path: Optional[str] = None):
        self.path = path or "page"
        message = (
            "Element not found.\n"
            "\n"
            f"PageObject: '{self.path}'\n"
            f"  Selector: '{selector}'\n"
        )
        super().__init__(message, selector)


class MultipleMatchesError(ElementResolutionError):
    """More than one element matched and the caller did not opt into it."""

    def __init__(self, selector: str, count: int = 0):
        self.count = count
        message = (
            f'"{selector}" matched more than one element. '
            "If this is not an error use multiple=True"
        )
        super().__init__(message, selector)


class ElementNotVisibleError(ElementResolutionError):
    """Elements matched but none of them is displayed."""

    def __init__(self, selector: str):
        super().__init__(f'"{selector}" matched but the elements are not visible.', selector)
