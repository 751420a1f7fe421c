"""
Exclusion filters applied to quoted literals found in a script expression.

Order and membership of QUOTED_STRING_FILTERS are data: each filter receives
the surviving candidates plus the full expression text and returns the
subset it keeps.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from haml_localizer.core.patterns import (
    COMPONENT_MATCH,
    DATA_BIND_MATCH,
    INTERPOLATION,
    RENDER_PARTIAL_MATCH,
)

logger = logging.getLogger(__name__)

# Single characters and entities used as UI decoration, never as words
UI_GLYPHS = frozenset({
    "•", "x", "×", "+", "|", "‧", "*", "-",
    "(", ")", "{", "}", "[", "]",
    "&times;", "&nbsp;x",
})

DATE_FRAGMENTS = ("yy", "-mm-", "-dd-", "h:mm")
DATA_BIND_MARKERS = ("$data", "$parent")

FORMAT_DIRECTIVE_RE = re.compile(r"%\w")
WHITESPACE_RE = re.compile(r"\s")
# http://example.com is kept, link text can be a bare URL
ABSOLUTE_URL_RE = re.compile(r"^[a-z][a-z0-9+.\-]*://")
CONSTANT_RE = re.compile(r"^[A-Z][A-Z0-9]*(?:_[A-Z0-9]+)+$")
JOINED_TOKEN_RES = (
    re.compile(r"\b[a-z]+-[a-z]+\b"),   # css-class
    re.compile(r"\b[a-z]+_[a-z]+\b"),   # snake_case
    re.compile(r"\b[a-z]+/[a-z]+\b"),   # partial/path
)


@dataclass(frozen=True)
class QuoteFilter:
    name: str
    apply: Callable[[List[str], str], List[str]]


def filter_out_invalid_quoted_strings(candidates: List[str], full_text: str = "") -> List[str]:
    """Drop bare quote marks and loose-capture leftovers such as ', foo'."""
    return [
        text for text in candidates
        if text.strip() and text not in ("'", '"') and not text.startswith(",")
    ]


def filter_out_ui_glyphs(candidates: List[str], full_text: str = "") -> List[str]:
    return [text for text in candidates if text not in UI_GLYPHS]


def filter_out_partial_renders(candidates: List[str], full_text: str) -> List[str]:
    match = RENDER_PARTIAL_MATCH.search(full_text)
    if not match:
        return candidates
    partial_name = match.group(2)
    return [text for text in candidates if text != partial_name]


def filter_out_component_methods(candidates: List[str], full_text: str) -> List[str]:
    match = COMPONENT_MATCH.search(full_text)
    if not match:
        return candidates
    component_name = match.group(2)
    return [text for text in candidates if text != component_name]


def filter_out_data_bind_values(candidates: List[str], full_text: str) -> List[str]:
    match = DATA_BIND_MATCH.search(full_text)
    if not match:
        return candidates

    # Only one of the alternatives captured, depending on the spelling used
    data_bind_value = next((group for group in match.groups() if group is not None), None)
    if data_bind_value is None:
        return candidates

    logger.debug("[data-bind] Found data-bind value, skipping '%s'", data_bind_value)
    return [text for text in candidates if text != data_bind_value]


def is_programmatic(text: str) -> bool:
    """True for strings that look like code rather than prose."""
    # %Y, %B, %d... strftime directives
    if FORMAT_DIRECTIVE_RE.search(text):
        return True
    # js function call
    if "()" in text:
        return True
    # dropdown, logo.png, /home, #: one lower case word is an identifier or a path
    if not WHITESPACE_RE.search(text) and text == text.lower() and not ABSOLUTE_URL_RE.match(text):
        return True
    if CONSTANT_RE.match(text):
        return True
    if any(marker in text for marker in DATA_BIND_MARKERS):
        return True

    # Variable names inside #{...} are code and are allowed to be snake_case
    without_interpolation = INTERPOLATION.sub(" ", text)
    if any(regex.search(without_interpolation) for regex in JOINED_TOKEN_RES):
        return True

    return any(fragment in text for fragment in DATE_FRAGMENTS)


def filter_out_programmatic_strings(candidates: List[str], full_text: str = "") -> List[str]:
    return [text for text in candidates if not is_programmatic(text)]


QUOTED_STRING_FILTERS: Tuple[QuoteFilter, ...] = (
    QuoteFilter("invalid_quotes", filter_out_invalid_quoted_strings),
    QuoteFilter("ui_glyphs", filter_out_ui_glyphs),
    QuoteFilter("partial_renders", filter_out_partial_renders),
    QuoteFilter("component_names", filter_out_component_methods),
    QuoteFilter("data_bind_values", filter_out_data_bind_values),
    QuoteFilter("programmatic_strings", filter_out_programmatic_strings),
)


def apply_filters(
    candidates: Iterable[str],
    full_text: str,
    filters: Sequence[QuoteFilter] = QUOTED_STRING_FILTERS,
) -> List[str]:
    survivors = list(candidates)
    for quote_filter in filters:
        if not survivors:
            break
        survivors = quote_filter.apply(survivors, full_text)
    return survivors


def filter_out_non_words(values: Optional[Union[str, Sequence[str]]]) -> List[str]:
    """Remove UI elements from a string or list; always returns a list."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    return [text for text in values if text is not None and text not in UI_GLYPHS]
