"""
Line records handed to the extractor by the HAML line parser.

The parser itself lives outside this package; these types only describe
what it produces so the classifier and replacer can read it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class LineType(Enum):
    """HAML line kinds."""
    PLAIN = "plain"
    TAG = "tag"
    SCRIPT = "script"
    SILENT_SCRIPT = "silent_script"
    HAML_COMMENT = "haml_comment"
    COMMENT = "comment"
    DOCTYPE = "doctype"
    ROOT = "root"
    FILTER = "filter"


class Placement(Enum):
    """Where an extracted string sits inside a tag line."""
    CONTENT = "content"
    ATTRIBUTE = "attribute"


LINE_TYPES_ALL = frozenset(LineType)

# Line types which need an `=` once their text becomes a `t()` call
LINE_TYPES_ADD_EVAL = frozenset({LineType.PLAIN, LineType.TAG, LineType.SCRIPT})

LINE_TYPES_IGNORE = frozenset({
    LineType.SILENT_SCRIPT,
    LineType.HAML_COMMENT,
    LineType.COMMENT,
    LineType.DOCTYPE,
    LineType.ROOT,
    LineType.FILTER,
})


@dataclass(frozen=True)
class DynamicAttributes:
    """Attribute sources the parser could not resolve statically.

    `old` holds the `{...}` hash form, `new` the `(...)` HTML form.
    """
    old: Optional[str] = None
    new: Optional[str] = None


@dataclass(frozen=True)
class SourceLine:
    line_type: LineType
    raw_text: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    @property
    def text(self) -> str:
        return self.fields.get("text") or ""

    @property
    def attributes(self) -> Dict[str, Any]:
        return dict(self.fields.get("attributes") or {})

    @property
    def attributes_hashes(self) -> List[str]:
        return list(self.fields.get("attributes_hashes") or [])

    @property
    def dynamic_attributes(self) -> Optional[DynamicAttributes]:
        return self.fields.get("dynamic_attributes")

    @property
    def has_script_content(self) -> bool:
        """True for `%element= expression` tags."""
        return bool(self.fields.get("parse"))


def coerce_line_type(value: Any) -> LineType:
    """Accept a LineType or its string name; raise ValueError otherwise."""
    if isinstance(value, LineType):
        return value
    return LineType(str(value))
