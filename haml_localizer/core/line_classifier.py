"""
Per-line-type text finding.

LineClassifier looks at one parsed HAML line and reports what could be
translated on it. An empty list means the line is left exactly as it was;
a result whose match is an empty string means the line was understood but
holds nothing to translate.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from haml_localizer.core.attribute_parser import parse_attribute_source
from haml_localizer.core.candidate_extractor import PASS_THROUGH, CandidateExtractor, MatchKind
from haml_localizer.core.exceptions import AttributeParseError
from haml_localizer.core.filters import filter_out_non_words
from haml_localizer.core.key_namer import has_been_translated
from haml_localizer.core.line_types import LineType, Placement, SourceLine
from haml_localizer.core.string_helpers import html_comment
from haml_localizer.utils.config import DEFAULT_TRANSLATABLE_ATTRIBUTES


@dataclass
class ExtractionResult:
    line_type: LineType
    match: Union[None, str, List[str]]
    placement: Optional[Placement] = None
    attribute_name: Optional[str] = None
    multiple: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def matches(self) -> List[str]:
        """Non-empty strings to replace, in order."""
        if self.match is None:
            return []
        values = self.match if isinstance(self.match, list) else [self.match]
        return [value for value in values if value]


def _string_value(value: Any) -> bool:
    return isinstance(value, str) and len(value) >= 2 and value[0] in ("'", '"')


class LineClassifier:
    """Routes a SourceLine to the finder for its line type."""

    def __init__(self, translatable_attributes: Optional[Sequence[str]] = None):
        self.logger = logging.getLogger(__name__)
        self.translatable_attributes = list(
            translatable_attributes or DEFAULT_TRANSLATABLE_ATTRIBUTES
        )
        self.handlers: Dict[LineType, Callable[[SourceLine], List[ExtractionResult]]] = {
            LineType.PLAIN: self._plain,
            LineType.TAG: self._tag,
            LineType.SCRIPT: self._script,
        }

    def classify(self, line: Optional[SourceLine]) -> List[ExtractionResult]:
        if line is None:
            return []
        handler = self.handlers.get(line.line_type)
        if handler is None:
            # silent scripts, comments, doctypes, filters... stay untouched
            return []
        return handler(line)

    def _plain(self, line: SourceLine) -> List[ExtractionResult]:
        text = line.text
        if html_comment(text):
            return []
        # Single characters such as '|' or '+' are UI elements, not text
        if len(text) <= 1:
            return []
        return [ExtractionResult(LineType.PLAIN, text, metadata=dict(line.fields))]

    def _tag(self, line: SourceLine) -> List[ExtractionResult]:
        results: List[ExtractionResult] = []
        metadata = dict(line.fields)

        for attribute_name in self.translatable_attributes:
            value = self.extract_attribute(line, attribute_name)
            if _string_value(value):
                results.append(ExtractionResult(
                    LineType.TAG,
                    value[1:-1],
                    placement=Placement.ATTRIBUTE,
                    attribute_name=attribute_name,
                    metadata=metadata,
                ))

        text = line.get("value")
        if not text:
            return results

        if line.has_script_content:
            # %element= expression
            results.append(self._script_result(LineType.TAG, text, metadata, Placement.CONTENT))
        elif len(text) > 1 and not html_comment(text) and filter_out_non_words(text):
            # Plain text inside a tag is forwarded as is; running the quote
            # rules over it would break on apostrophes.
            results.append(ExtractionResult(LineType.TAG, text, Placement.CONTENT, metadata=metadata))

        return results

    def _script(self, line: SourceLine) -> List[ExtractionResult]:
        return [self._script_result(LineType.SCRIPT, line.text, dict(line.fields))]

    def _script_result(
        self,
        line_type: LineType,
        text: str,
        metadata: Dict[str, Any],
        placement: Optional[Placement] = None,
    ) -> ExtractionResult:
        """Extractor result for a Ruby expression; "" when it holds nothing to translate."""
        if not CandidateExtractor.could_match(text):
            return ExtractionResult(line_type, "", placement, metadata=metadata)

        found = CandidateExtractor(text).find()
        if found.rule == PASS_THROUGH and not has_been_translated(text):
            # Every literal was a class name, the rest is code
            return ExtractionResult(line_type, "", placement, metadata=metadata)

        return ExtractionResult(
            line_type,
            found.value,
            placement,
            multiple=found.kind is MatchKind.MULTIPLE,
            metadata=metadata,
        )

    def extract_attribute(self, line: SourceLine, attribute_name: str) -> Optional[str]:
        """Attribute value as a quoted string, or the raw source from an attribute hash."""
        value = line.attributes.get(attribute_name)

        # Attributes HAML could not resolve statically are kept as source;
        # only literal hashes are read, anything else counts as absent.
        dynamic = line.dynamic_attributes
        if not value and dynamic is not None:
            for source in (dynamic.old, dynamic.new):
                if value or not source:
                    continue
                try:
                    value = parse_attribute_source(source).get(attribute_name)
                except AttributeParseError as e:
                    self.logger.debug("Skipping dynamic attributes %r: %s", source, e)

        if value:
            return f'"{value}"' if isinstance(value, str) else None

        name = re.escape(attribute_name)
        key_re = re.compile(
            r"""(?:\b%s['"]?\s*:|:%s\s*=>|['"]%s['"]\s*=>)\s*('(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|[^,}]+)""" % (name, name, name)
        )
        for attributes_hash in line.attributes_hashes:
            match = key_re.search(attributes_hash)
            if match:
                return match.group(1).strip()
        return None


def classify_line(line: SourceLine, translatable_attributes: Optional[Sequence[str]] = None) -> List[ExtractionResult]:
    return LineClassifier(translatable_attributes).classify(line)
