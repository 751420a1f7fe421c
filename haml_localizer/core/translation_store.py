"""
Translation Store
=================

Accumulates extracted strings into one nested locale document:

    {"en": {"users": {"index": {"hello": "Hello"}}}}

and merges it into the YAML document already on disk. Keys are sorted at
every level and long values are not wrapped.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import yaml

from haml_localizer.core.exceptions import LocaleFileError
from haml_localizer.core.key_namer import relative_dirs, view_key_segments
from haml_localizer.core.string_helpers import normalize_interpolation
from haml_localizer.utils.config import ExtractorSettings
from haml_localizer.utils.encoding import read_text_safely

Document = Dict[str, Any]


@dataclass
class MergeReport:
    existing_count: int
    new_count: int
    final_count: int
    path: Optional[Path] = None

    @property
    def expected_count(self) -> int:
        return self.existing_count + self.new_count

    @property
    def has_collisions(self) -> bool:
        return self.final_count != self.expected_count


@dataclass
class Collision:
    key_path: Tuple[str, ...]
    previous: Any
    current: Any


def count_string_value_keys(document: Any) -> int:
    """Number of leaves; an empty mapping has none."""
    if not isinstance(document, dict):
        return 1
    return sum(count_string_value_keys(value) for value in document.values())


def sort_document(document: Any) -> Any:
    if not isinstance(document, dict):
        return document
    return {key: sort_document(document[key]) for key in sorted(document, key=str)}


def deep_merge(target: Document, other: Document) -> Document:
    """Merge other into target in place; leaves of other win."""
    for key, value in other.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            deep_merge(target[key], value)
        else:
            target[key] = copy.deepcopy(value)
    return target


def dump_document(document: Document, indent: int = 2) -> str:
    # width keeps long translations on one line
    return yaml.safe_dump(
        sort_document(document),
        sort_keys=True,
        allow_unicode=True,
        default_flow_style=False,
        indent=indent,
        width=400,
    )


def load_document(text: Optional[str]) -> Document:
    if text is None or not text.strip():
        return {}
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise LocaleFileError(f"Locale document is not valid YAML: {e}") from e
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise LocaleFileError("Locale document must be a mapping at the top level")
    return document


class TranslationStore:
    """Collects key/text pairs for a run, then merges and writes them once."""

    def __init__(self, settings: Optional[ExtractorSettings] = None):
        self.logger = logging.getLogger(__name__)
        self.settings = settings or ExtractorSettings()
        self.scope = self.settings.i18n_scope or "en"
        self.document: Document = {}
        self.collisions: List[Collision] = []

    def __len__(self) -> int:
        return count_string_value_keys(self.document)

    def record(self, key_path: Union[str, Sequence[str]], text: Any) -> bool:
        """Store text under key_path; returns False when an entry had to be overwritten."""
        if isinstance(key_path, str):
            key_path = key_path.split(".")
        key_path = tuple(str(key) for key in key_path)
        if not key_path:
            raise ValueError("key path must not be empty")

        node = self.document
        for depth, key in enumerate(key_path[:-1]):
            child = node.get(key)
            if child is not None and not isinstance(child, dict):
                self._collide(key_path[:depth + 1], child, text)
                child = None
            if child is None:
                child = node[key] = {}
            node = child

        leaf = key_path[-1]
        previous = node.get(leaf)
        clean = previous is None or previous == text
        if not clean:
            self._collide(key_path, previous, text)
        node[leaf] = text
        return clean

    def _collide(self, key_path: Tuple[str, ...], previous: Any, current: Any) -> None:
        self.collisions.append(Collision(key_path, previous, current))
        self.logger.warning(
            "Key collision at %s: %r replaced by %r", ".".join(key_path), previous, current
        )

    def key_path_for(self, path: str, t_name: str) -> List[str]:
        """[scope, view segments..., leaf] for a key produced by the replacer."""
        leaf = t_name.split(".")[-1] if self.settings.add_filename_prefix else t_name
        return [self.scope] + view_key_segments(path, self.settings) + [leaf]

    def record_replacement(self, result: Any) -> bool:
        """Record a ReplacerResult; unchanged or re-keyed results carry no new text."""
        if not result.changed or result.t_name is None or result.rekeyed:
            return True
        text = normalize_interpolation(result.replaced_text, self.settings.max_key_length)
        return self.record(self.key_path_for(result.path, result.t_name), text)

    def to_dict(self) -> Document:
        return copy.deepcopy(self.document)

    def default_locale_file(self, template_path: str = "") -> Path:
        if self.settings.locale_file:
            return Path(self.settings.locale_file)
        if self.settings.add_filename_prefix and template_path:
            dir_prefix = relative_dirs(template_path, self.settings.base_path)
            return Path("config", "locales", self.scope, *dir_prefix, f"{self.scope}.yml")
        return Path("config", "locales", f"{self.scope}.yml")

    def merge_into(self, existing: Document) -> Tuple[Document, MergeReport]:
        existing_count = count_string_value_keys(existing) if existing else 0
        new_count = count_string_value_keys(self.document) if self.document else 0

        merged = sort_document(deep_merge(copy.deepcopy(existing), self.document))
        report = MergeReport(existing_count, new_count, count_string_value_keys(merged) if merged else 0)

        # Expected when re-running over a partly localized file, but it can
        # also mean a key overwrote another one.
        if report.has_collisions:
            self.logger.warning("Original key count: %d", report.existing_count)
            self.logger.warning("New key count: %d", report.new_count)
            self.logger.warning("Final key count: %d", report.final_count)
            self.logger.debug("New keys:\n%s", dump_document(self.document, self.settings.indent))
            self.logger.warning(
                "Key count after merge (%d) is not equal to previous two hash keys (%d), "
                "a duplicate key overwrite would occur! Check for a file name equal to a "
                "sub-folder name in same directory...",
                report.final_count, report.expected_count,
            )
        return merged, report

    def flush_to_disk(self, path: Optional[Union[str, Path]] = None, template_path: str = "") -> MergeReport:
        target = Path(path) if path else self.default_locale_file(template_path)

        existing = load_document(read_text_safely(target))
        merged, report = self.merge_into(existing)
        report.path = target

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(dump_document(merged, self.settings.indent), encoding="utf-8")
        self.logger.info("Wrote %d keys to %s", report.final_count, target)
        return report
