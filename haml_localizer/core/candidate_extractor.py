"""
Candidate extraction for script expressions.

CandidateExtractor returns the text worth translating inside one expression:
nothing, a single string, or an ordered list of strings. Plain strings which
match none of the rules come back unchanged and the caller decides what a
pass-through means.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Union

from haml_localizer.core.filters import QUOTED_STRING_FILTERS, apply_filters
from haml_localizer.core.patterns import (
    ARRAY_OF_STRINGS,
    PATTERN_RULES,
    PRECEDED_BY_CLASS_KEY,
    PRECEDED_BY_TRANSLATION_CALL,
    QUOTED_STRINGS,
    SIMPLE_FORM_FOR,
    SINGLE_CAPTURE_RULES,
)

# Attribute names which can reach the extractor on their own when the line
# parser splits an attribute hash; they are never text.
ATTRIBUTE_NAME_SENTINELS = frozenset({"title", "alt", "placeholder", "aria-label"})

# Rule name reported when the text matched nothing and comes back as is
PASS_THROUGH = "pass_through"


class MatchKind(Enum):
    NONE = "none"
    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class CandidateResult:
    kind: MatchKind
    texts: Tuple[str, ...] = ()
    rule: str = ""

    @classmethod
    def none(cls, rule: str = "") -> "CandidateResult":
        return cls(MatchKind.NONE, (), rule)

    @classmethod
    def single(cls, text: str, rule: str = "") -> "CandidateResult":
        return cls(MatchKind.SINGLE, (text,), rule)

    @classmethod
    def multiple(cls, texts: List[str], rule: str = "") -> "CandidateResult":
        return cls(MatchKind.MULTIPLE, tuple(texts), rule)

    @classmethod
    def from_list(cls, texts: List[str], rule: str = "") -> "CandidateResult":
        if not texts:
            return cls.none(rule)
        if len(texts) == 1:
            return cls.single(texts[0], rule)
        return cls.multiple(texts, rule)

    @property
    def is_none(self) -> bool:
        return self.kind is MatchKind.NONE

    @property
    def value(self) -> Union[None, str, List[str]]:
        """None, the single string, or a list, as callers historically saw it."""
        if self.kind is MatchKind.NONE:
            return None
        if self.kind is MatchKind.SINGLE:
            return self.texts[0]
        return list(self.texts)


class CandidateExtractor:
    """First-match-wins extraction over a single expression."""

    def __init__(self, text: str):
        self.logger = logging.getLogger(__name__)
        self.text = text or ""

    @staticmethod
    def could_match(text: str) -> bool:
        """Cheap pre-check before running the cascade.

        Matches `= 'foo'`, `= "foo"` and `= link_to 'bla'`, but not
        `= ruby_var = 2`.
        """
        if not text:
            return False
        stripped = text.lstrip()
        if stripped[:1] in ("'", '"'):
            return True
        return any(rule.search(text) for rule in PATTERN_RULES)

    def find(self) -> CandidateResult:
        text = self.text

        array_match = ARRAY_OF_STRINGS.search(text)
        if array_match:
            items = [item.strip().strip("'\"") for item in array_match.group(1).split(",")]
            items = [item for item in items if item]
            if not items:
                return CandidateResult.none("array_of_strings")
            return CandidateResult.multiple(items, "array_of_strings")

        if SIMPLE_FORM_FOR.search(text) or text.strip() in ATTRIBUTE_NAME_SENTINELS:
            return CandidateResult.none("skip")

        literals = self.quoted_literals()
        if literals:
            survivors = apply_filters(literals, text, QUOTED_STRING_FILTERS)
            if len(survivors) < len(literals):
                self.logger.debug(
                    "Filtered %d of %d quoted strings in %r",
                    len(literals) - len(survivors), len(literals), text,
                )
            return CandidateResult.from_list(survivors, "quoted_strings")

        # order of SINGLE_CAPTURE_RULES matters, first hit wins
        for rule in SINGLE_CAPTURE_RULES:
            match = rule.search(text)
            if match:
                return CandidateResult.single(match.group(1), rule.name)

        return CandidateResult.single(text, PASS_THROUGH)

    def quoted_literals(self) -> List[str]:
        """Quoted literals, unquoted, which are not already translated or class names."""
        literals: List[str] = []
        for match in QUOTED_STRINGS.finditer(self.text):
            preceding = self.text[:match.start()]
            if PRECEDED_BY_TRANSLATION_CALL.search(preceding):
                continue
            if PRECEDED_BY_CLASS_KEY.search(preceding):
                continue
            literals.append(match.group(0)[1:-1])
        return literals


def extract_candidates(text: str) -> CandidateResult:
    return CandidateExtractor(text).find()


def could_match(text: str) -> bool:
    return CandidateExtractor.could_match(text)
