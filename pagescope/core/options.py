"""
Find Options - The per-call option set for selector building and lookup.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

from pagescope.core.errors import InvalidOptionsError

# Option names as spelled by the JavaScript page object API
_ALIASES = {
    "resetScope": "reset_scope",
    "testContainer": "test_container",
    "pageObjectKey": "page_object_key",
}


@dataclass(frozen=True)
class FindOptions:
    """
    Options recognised by ``build_selector`` and the element finders.

    ``reset_scope`` here is the call-site override: it discards the
    whole ancestor scope chain. It is unrelated to ``PageNode.reset_scope``,
    which only truncates the chain at that node.
    """
    scope: Optional[str] = None  # Explicit scope appended to (or replacing) the chain
    reset_scope: bool = False
    contains: Optional[str] = None  # :contains("...") text filter
    at: Optional[int] = None  # :eq(n) index filter, 0-based
    last: bool = False  # :last filter, ignored when `at` is set
    multiple: bool = False  # Allow more than one match
    test_container: Any = None  # Element or selector to search within
    page_object_key: Optional[str] = None  # Trailing breadcrumb segment for errors

    def __post_init__(self):
        if self.at is not None:
            if isinstance(self.at, bool) or not isinstance(self.at, int) or self.at < 0:
                raise InvalidOptionsError(f"'at' must be a non-negative integer, got {self.at!r}")

        for name in ("scope", "contains", "page_object_key"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise InvalidOptionsError(f"'{name}' must be a string, got {value!r}")

        for name in ("reset_scope", "last", "multiple"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise InvalidOptionsError(f"'{name}' must be True or False, got {value!r}")

        container = self.test_container
        if container is not None and not isinstance(container, str):
            if not callable(getattr(container, "find_elements", None)):
                raise InvalidOptionsError(
                    f"'test_container' must be a selector or an element, got {type(container).__name__}"
                )

    @classmethod
    def coerce(cls, options: Any = None, **overrides: Any) -> "FindOptions":
        """
        Normalise ``options`` into a FindOptions instance.

        Args:
            options: None, a FindOptions, or a mapping of option names
                (snake_case or the camelCase names of the JS API)
            overrides: Individual options taking precedence over ``options``

        Raises:
            InvalidOptionsError: On unknown option names or invalid values
        """
        if options is None:
            base, values = None, {}
        elif isinstance(options, FindOptions):
            base, values = options, {}
        elif isinstance(options, Mapping):
            base, values = None, dict(options)
        else:
            raise InvalidOptionsError(f"Options must be a FindOptions or a mapping, got {type(options).__name__}")

        values.update(overrides)
        known = {f.name for f in fields(cls)}
        normalized = {}

        for key, value in values.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise InvalidOptionsError(f"Unknown option '{key}'")
            normalized[name] = value

        if base is not None:
            return replace(base, **normalized) if normalized else base
        return cls(**normalized)
