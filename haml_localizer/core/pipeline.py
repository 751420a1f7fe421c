# -*- coding: utf-8 -*-
"""
Per-file Pipeline
=================

Runs classification and replacement over the parsed lines of one template
and feeds every new key into a shared TranslationStore:

    store = TranslationStore(settings)
    pipeline = LinePipeline(store, settings)
    result = pipeline.process_file("app/views/users/index.html.haml", lines)
    store.flush_to_disk()
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from haml_localizer.core.line_classifier import LineClassifier
from haml_localizer.core.line_types import LINE_TYPES_IGNORE, SourceLine
from haml_localizer.core.text_replacer import ReplacerResult, TextReplacer
from haml_localizer.core.translation_store import TranslationStore
from haml_localizer.utils.config import ExtractorSettings


@dataclass
class FileResult:
    path: str
    lines: List[str] = field(default_factory=list)
    replacements: List[ReplacerResult] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return any(replacement.changed for replacement in self.replacements)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class LinePipeline:
    """Classify, replace, record; one template at a time."""

    def __init__(self, store: Optional[TranslationStore] = None, settings: Optional[ExtractorSettings] = None):
        self.logger = logging.getLogger(__name__)
        self.settings = settings or (store.settings if store else ExtractorSettings())
        self.store = store or TranslationStore(self.settings)
        self.classifier = LineClassifier(self.settings.translatable_attributes)

    def process_line(self, path: str, line: SourceLine) -> List[ReplacerResult]:
        """Replacements for one line; the last changed one holds the final line."""
        if line.line_type in LINE_TYPES_IGNORE:
            return []

        current = line.raw_text
        results: List[ReplacerResult] = []
        for extraction in self.classifier.classify(line):
            for text in extraction.matches:
                replacement = TextReplacer(
                    current,
                    text,
                    extraction.line_type,
                    path,
                    metadata=extraction.metadata,
                    settings=self.settings,
                    placement=extraction.placement,
                    attribute_name=extraction.attribute_name,
                ).result()
                results.append(replacement)
                if replacement.changed:
                    current = replacement.modified_line
                    self.store.record_replacement(replacement)
        return results

    def process_file(self, path: str, lines: Iterable[SourceLine]) -> FileResult:
        result = FileResult(path)
        for line in lines:
            replacements = self.process_line(path, line)
            changed = [replacement for replacement in replacements if replacement.changed]
            result.lines.append(changed[-1].modified_line if changed else line.raw_text)
            result.replacements.extend(replacements)

        changed_count = sum(1 for replacement in result.replacements if replacement.changed)
        self.logger.info("%s: %d strings replaced", path, changed_count)
        return result
