"""
Line replacement.

TextReplacer swaps the matched text on a HAML line for a `t()` call and
makes the line evaluate it. Locating the text is done on the raw line with
a few structural skip rules (tag name, class/id shorthand, attribute
blocks, attribute keys) so a match inside the attributes is not mistaken
for the tag content; the splice itself is plain string slicing.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from haml_localizer.core.exceptions import NotDefinedLineType
from haml_localizer.core.interpolation import InterpolationHelper
from haml_localizer.core.key_namer import has_been_translated, name_key, translate_call
from haml_localizer.core.line_types import (
    LINE_TYPES_ADD_EVAL,
    LINE_TYPES_ALL,
    LineType,
    Placement,
    coerce_line_type,
)
from haml_localizer.core.patterns import BARE_INTERPOLATION, TRANSLATION_CALL
from haml_localizer.core.string_helpers import interpolated
from haml_localizer.utils.config import ExtractorSettings

TAG_REGEX = re.compile(r"%[\w:\-]+")
TAG_CLASSES_AND_ID_REGEX = re.compile(r"(?:[.#][\w\-]+)*")
LEADING_WHITESPACE = re.compile(r"\s*")
SCRIPT_MARKER = re.compile(r"^\s*(?:[!&]?=|~)")
WHITESPACE_REMOVAL = re.compile(r"[<>/]*")
ATTRIBUTE_BLOCK_PAIRS = {"(": ")", "{": "}"}


@dataclass
class ReplacerResult:
    modified_line: Optional[str]
    t_name: Optional[str]
    replaced_text: str
    changed: bool
    path: str = ""
    rekeyed: bool = False

    @property
    def info(self) -> Dict[str, Any]:
        return {
            "modified_line": self.modified_line,
            "t_name": self.t_name,
            "replaced_text": self.replaced_text,
            "path": self.path,
        }


def skip_balanced(text: str, pos: int) -> int:
    """Index just past a balanced (...) or {...} block starting at pos.

    Quoted strings inside the block are skipped whole. An unterminated block
    runs to the end of the text.
    """
    if pos >= len(text) or text[pos] not in ATTRIBUTE_BLOCK_PAIRS:
        return pos

    stack: List[str] = []
    quote: Optional[str] = None
    index = pos
    while index < len(text):
        char = text[index]
        if quote:
            if char == "\\":
                index += 2
                continue
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char in ATTRIBUTE_BLOCK_PAIRS:
            stack.append(ATTRIBUTE_BLOCK_PAIRS[char])
        elif stack and char == stack[-1]:
            stack.pop()
            if not stack:
                return index + 1
        index += 1
    return len(text)


def skip_tag_head(line: str) -> int:
    """Index after indentation, %tag and .class#id shorthand."""
    pos = LEADING_WHITESPACE.match(line).end()
    match = TAG_REGEX.match(line, pos)
    if match:
        pos = match.end()
    return TAG_CLASSES_AND_ID_REGEX.match(line, pos).end()


def skip_tag_attributes(line: str) -> int:
    """Index after the tag head and any attribute blocks following it."""
    pos = skip_tag_head(line)
    while pos < len(line) and line[pos] in ATTRIBUTE_BLOCK_PAIRS:
        end = skip_balanced(line, pos)
        if end == pos:
            break
        pos = end
    return pos


def attribute_key_patterns(attribute_name: str) -> List[str]:
    name = re.escape(attribute_name)
    return [
        r"\b%s:\s*" % name,                  # {title: 'x'}
        r"\b%s=" % name,                     # (title='x')
        r":%s\s*=>\s*" % name,               # {:title => 'x'}
        r"""["']%s["']:\s*""" % name,        # {"aria-label": 'x'}
        r"""["']%s["']\s*=>\s*""" % name,    # {"aria-label" => 'x'}
    ]


def seek_attribute(line: str, attribute_name: str, pos: int = 0) -> Optional[int]:
    """Index just after the attribute key on the line, if any spelling is present."""
    key_re = re.compile("|".join(attribute_key_patterns(attribute_name)))
    match = key_re.search(line, pos)
    return match.end() if match else None


def locate(line: str, text: str, start: int = 0) -> Optional[Tuple[int, int]]:
    """Span of text on the line from start, including the quotes around it if any."""
    if not text:
        return None
    match = re.compile(r"""(['"]|)%s\1""" % re.escape(text)).search(line, start)
    if not match:
        return None
    return match.start(), match.end()


class TextReplacer:
    def __init__(
        self,
        full_line: str,
        text_to_replace: str,
        line_type: Any,
        path: str = "",
        metadata: Optional[Mapping[str, Any]] = None,
        settings: Optional[ExtractorSettings] = None,
        placement: Optional[Placement] = None,
        attribute_name: Optional[str] = None,
    ):
        self.logger = logging.getLogger(__name__)
        try:
            self.line_type = coerce_line_type(line_type)
        except ValueError:
            self.line_type = None
        if self.line_type not in LINE_TYPES_ALL:
            raise NotDefinedLineType(f"line type {line_type} for {full_line} does not make sense!")

        self.orig_line = full_line
        self.text_to_replace = text_to_replace or ""
        self.path = path or ""
        self.metadata = dict(metadata or {})
        self.settings = settings or ExtractorSettings()
        self.placement = placement
        self.attribute_name = attribute_name
        self._result: Optional[ReplacerResult] = None

    def result(self) -> ReplacerResult:
        if self._result is None:
            self._result = self._build_result()
        return self._result

    @property
    def orig_interpolated(self) -> bool:
        return interpolated(self.orig_line)

    def t_name(self) -> str:
        return name_key(self.text_to_replace, self.orig_line, self.path, self.settings)

    def _build_result(self) -> ReplacerResult:
        text = self.text_to_replace
        unchanged = ReplacerResult(None, None, text, False, self.path)

        if not text:
            return unchanged

        if has_been_translated(text):
            # Partially translated strings are left for a human to finish,
            # unless the existing keys are being moved under file prefixes.
            if self.settings.add_filename_prefix:
                return self._rekey()
            return unchanged

        if BARE_INTERPOLATION.match(text.strip().strip("'\"")):
            return unchanged

        # nothing word-like to build a key from, e.g. "..."
        if not self.t_name():
            return unchanged

        modified = self.modified_line()
        if modified is None:
            self.logger.debug("Could not locate %r in %r", text, self.orig_line)
            return unchanged
        return ReplacerResult(modified, self.t_name(), text, True, self.path)

    def modified_line(self) -> Optional[str]:
        """The line with a t() call in place of the text, or None if the text is not on it."""
        t_name = self.t_name()
        if self.orig_interpolated:
            keyname = InterpolationHelper(self.text_to_replace, t_name, self.settings).keyname_with_vars()
        else:
            keyname = translate_call(t_name, self.settings)

        text = self.remove_quotes_from_interpolated_text(self.text_to_replace)
        span = locate(self.orig_line, text, self.scan_start())
        if span is None:
            return None

        start, end = span
        line = self.orig_line[:start] + keyname + self.orig_line[end:]
        return self.apply_ruby_evaling(line, keyname)

    def _rekey(self) -> ReplacerResult:
        match = TRANSLATION_CALL.search(self.text_to_replace)
        call_start = self.orig_line.find(self.text_to_replace)
        if call_start < 0:
            return ReplacerResult(None, None, self.text_to_replace, False, self.path)

        t_name = self.t_name()
        if not t_name:
            return ReplacerResult(None, None, self.text_to_replace, False, self.path)
        old_key = match.group(0)
        new_key = f"t('{t_name}'"
        replaced = self.text_to_replace.replace(old_key, new_key, 1)
        line = self.orig_line[:call_start] + replaced + self.orig_line[call_start + len(self.text_to_replace):]
        return ReplacerResult(line, t_name, self.text_to_replace, line != self.orig_line, self.path, rekeyed=True)

    def scan_start(self) -> int:
        """Where the search for the text begins on the original line."""
        if self.line_type is not LineType.TAG:
            return 0

        if self.placement is Placement.ATTRIBUTE and self.attribute_name:
            head = skip_tag_head(self.orig_line)
            key_end = seek_attribute(self.orig_line, self.attribute_name, head)
            return key_end if key_end is not None else head

        content_start = skip_tag_attributes(self.orig_line)
        # The parser already knows the inline value, anchor on it when it is still there
        value = self.metadata.get("value")
        if isinstance(value, str) and value:
            found = self.orig_line.find(value, content_start)
            if found >= 0:
                return found
        return content_start

    def remove_quotes_from_interpolated_text(self, text: str) -> str:
        # '"Job ##{@job.id} (#{@job.queue})"' -> 'Job ##{@job.id} (#{@job.queue})'
        if self.orig_interpolated:
            match = re.match(r'^"(.*)"$', text)
            if match:
                return match.group(1)
        return text

    def apply_ruby_evaling(self, line: str, keyname: str) -> str:
        """Adds the `=` which makes HAML evaluate the inserted call."""
        if self.line_type not in LINE_TYPES_ADD_EVAL:
            return line

        if self.line_type is LineType.TAG:
            if self.placement is Placement.ATTRIBUTE:
                # HTML style attributes need interpolation to stay valid: (alt="#{t('.x')}")
                html_form = f"{self.attribute_name}={keyname}"
                if self.attribute_name and html_form in line:
                    line = line.replace(html_form, f'{self.attribute_name}="#{{{keyname}}}"', 1)
                return line

            content_start = skip_tag_attributes(line)
            content_start = WHITESPACE_REMOVAL.match(line, content_start).end()
            if not SCRIPT_MARKER.match(line[content_start:]):
                line = line[:content_start] + "=" + line[content_start:]
            return line

        if self.line_type is LineType.SCRIPT and SCRIPT_MARKER.match(line):
            return line

        indent = LEADING_WHITESPACE.match(line).end()
        return f"{line[:indent]}= {line[indent:]}"


def replace_line(
    original_line: str,
    matched_text: str,
    line_type: Any,
    path: str = "",
    metadata: Optional[Mapping[str, Any]] = None,
    settings: Optional[ExtractorSettings] = None,
    placement: Optional[Placement] = None,
    attribute_name: Optional[str] = None,
) -> ReplacerResult:
    return TextReplacer(
        original_line, matched_text, line_type, path, metadata, settings, placement, attribute_name
    ).result()
