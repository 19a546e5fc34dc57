"""Selector resolution against inconsistent portal markup.

Two lookup modes:

1. Candidate lists. Selectors are tried most-specific first; the first
   candidate with a match wins. A candidate that matches nothing (an older
   or newer markup version) is not an error, it just falls through.

       select_first(doc, (".gpaScore", ".gpa", "#gpaValue"))

2. Structural paths. Where no stable class/id exists, "the Nth table, its
   Nth row" is the only anchor. This is brittle; select_path() retries a
   small set of known variants before giving up.

Whether "nothing matched" means absent (None/default) or malformed
(ElementNotFound) is the caller's decision; require() is the latter.

Portal JSF ids contain colons (form1:htmlNendo) and must go through by_id().
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import lru_cache

import soupsieve
from bs4 import Tag

from src.unipa.errors import ElementNotFound, SelectorCreationFailed

Candidates = str | Sequence[str]


@lru_cache(maxsize=512)
def compile_selector(selector: str) -> soupsieve.SoupSieve:
    """Compile a CSS selector once; invalid syntax becomes SelectorCreationFailed."""
    try:
        return soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as e:
        raise SelectorCreationFailed(selector, str(e)) from e


def _candidates(candidates: Candidates) -> Iterable[str]:
    if isinstance(candidates, str):
        return (candidates,)
    return candidates


def by_id(element_id: str) -> str:
    """Selector for an id that may contain CSS metacharacters (':' in JSF ids)."""
    return "#" + soupsieve.escape(element_id)


def select_one(scope: Tag, selector: str) -> Tag | None:
    return compile_selector(selector).select_one(scope)


def select_all(scope: Tag, selector: str) -> list[Tag]:
    return compile_selector(selector).select(scope)


def select_first(scope: Tag, candidates: Candidates) -> Tag | None:
    """First element matched by the first candidate that matches anything."""
    for selector in _candidates(candidates):
        element = select_one(scope, selector)
        if element is not None:
            return element
    return None


def select_all_first(scope: Tag, candidates: Candidates) -> list[Tag]:
    """All elements of the first candidate that matches anything, else []."""
    for selector in _candidates(candidates):
        elements = select_all(scope, selector)
        if elements:
            return elements
    return []


def exists(scope: Tag, candidates: Candidates) -> bool:
    return select_first(scope, candidates) is not None


def require(scope: Tag, candidates: Candidates, context: str) -> Tag:
    """Like select_first, but a missing anchor is a hard ElementNotFound."""
    element = select_first(scope, candidates)
    if element is None:
        raise ElementNotFound(", ".join(_candidates(candidates)), context)
    return element


def require_id(scope: Tag, element_id: str, context: str) -> Tag:
    """Required anchor addressed by raw id; errors report the id as written."""
    element = select_one(scope, by_id(element_id))
    if element is None:
        raise ElementNotFound(f"#{element_id}", context)
    return element


def find_by_id(scope: Tag, element_id: str) -> Tag | None:
    return select_one(scope, by_id(element_id))


def first_with_text(scope: Tag, candidates: Candidates) -> Tag | None:
    """First element across candidates whose text is not blank."""
    for selector in _candidates(candidates):
        for element in select_all(scope, selector):
            if element.get_text().strip():
                return element
    return None


def containing_text(scope: Tag, selector: str, needle: str) -> list[Tag]:
    """Elements matched by selector whose text contains needle."""
    return [el for el in select_all(scope, selector) if needle in el.get_text()]


def distinct(elements: Iterable[Tag]) -> list[Tag]:
    """Drop repeated elements, keeping first-seen order.

    Identity, not equality: bs4 compares tags by markup, so two separate
    tables with identical content are both kept.
    """
    seen: set[int] = set()
    unique: list[Tag] = []
    for element in elements:
        if id(element) not in seen:
            seen.add(id(element))
            unique.append(element)
    return unique


def attr(element: Tag | None, name: str, default: str = "") -> str:
    """Attribute value as a string; multi-valued attributes (class) are space-joined."""
    if element is None:
        return default
    value = element.get(name)
    if value is None:
        return default
    if isinstance(value, list):
        return " ".join(value)
    return value


def input_value(scope: Tag, name: str) -> str:
    """Value of input[name=...]; absence is "" because such fields render conditionally."""
    element = select_one(scope, f'input[name="{name}"]')
    return attr(element, "value")


def hidden_input_value(scope: Tag, name_fragment: str) -> str:
    """Value of the first hidden input whose name contains name_fragment, else ""."""
    element = select_one(scope, f'input[type="hidden"][name*="{name_fragment}"]')
    return attr(element, "value")


@dataclass(frozen=True)
class StructuralPath:
    """Positional anchor: the Nth table in scope, then its Nth row."""

    table_index: int
    row_index: int
    table_selector: str = "table"
    row_selector: str = "tr"


def select_path(scope: Tag, variants: Sequence[StructuralPath]) -> Tag | None:
    """Resolve the first structural path variant that exists in scope."""
    for path in variants:
        tables = select_all(scope, path.table_selector)
        if path.table_index >= len(tables):
            continue
        rows = select_all(tables[path.table_index], path.row_selector)
        if path.row_index < len(rows):
            return rows[path.row_index]
    return None
