"""
Core module for HAML Localizer
==============================
"""

from .exceptions import (
    HamlLocalizerError, NotDefinedLineType, AttributeParseError, LocaleFileError, ConfigError
)
from .line_types import LineType, Placement, SourceLine, DynamicAttributes
from .candidate_extractor import CandidateExtractor, CandidateResult, MatchKind, extract_candidates, could_match
from .line_classifier import LineClassifier, ExtractionResult, classify_line
from .key_namer import name_key
from .text_replacer import TextReplacer, ReplacerResult, replace_line
from .translation_store import TranslationStore, MergeReport
from .pipeline import LinePipeline, FileResult

__all__ = [
    'HamlLocalizerError', 'NotDefinedLineType', 'AttributeParseError', 'LocaleFileError', 'ConfigError',
    'LineType', 'Placement', 'SourceLine', 'DynamicAttributes',
    'CandidateExtractor', 'CandidateResult', 'MatchKind', 'extract_candidates', 'could_match',
    'LineClassifier', 'ExtractionResult', 'classify_line',
    'name_key',
    'TextReplacer', 'ReplacerResult', 'replace_line',
    'TranslationStore', 'MergeReport',
    'LinePipeline', 'FileResult',
]
