"""
HAML Localizer - i18n extraction for HAML templates
===================================================

Finds human-readable text in HAML template lines, swaps it for `t()`
translation calls and collects the strings into a nested locale document:
- Ordered pattern rules for link_to, submit buttons, render and component helpers
- Filters for UI glyphs, data-bind expressions and programmatic identifiers
- Attribute hashes read by a sandboxed parser, never evaluated
- Key collisions reported when merging into an existing locale file
"""

__version__ = "1.0.0"

from .core import (
    CandidateResult,
    ExtractionResult,
    LinePipeline,
    LineType,
    Placement,
    ReplacerResult,
    SourceLine,
    TranslationStore,
    classify_line,
    could_match,
    extract_candidates,
    name_key,
    replace_line,
)
from .utils import ConfigManager, ExtractorSettings

__all__ = [
    'CandidateResult', 'ExtractionResult', 'ReplacerResult',
    'LineType', 'Placement', 'SourceLine',
    'extract_candidates', 'could_match', 'classify_line', 'name_key', 'replace_line',
    'TranslationStore', 'LinePipeline',
    'ConfigManager', 'ExtractorSettings',
]
