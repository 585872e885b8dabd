"""Small helpers for reading match sets."""

from typing import Any, Callable, Iterable, List
import re


def normalize_text(text: str) -> str:
    """
    Trim ``text`` and collapse its internal whitespace to single spaces.

    Browsers disagree on the newlines and indentation they report for
    rendered text, so comparisons should go through this first.
    """
    return re.sub(r"\s+", " ", (text or "").strip().replace("\n", " "))


def every(elements: Iterable[Any], predicate: Callable[[Any], Any]) -> bool:
    """True if ``predicate`` holds for each element (vacuously true when empty)."""
    return all(predicate(element) for element in elements)


def map_elements(elements: Iterable[Any], fn: Callable[[Any], Any]) -> List[Any]:
    return [fn(element) for element in elements]
