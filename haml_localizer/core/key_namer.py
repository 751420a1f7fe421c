"""
Translation key naming.

Keys are slugs of the extracted text. Without filename prefixes they are
relative (`t('.hello')`) and Rails resolves them against the view; with
`add_filename_prefix` they are absolute and carry the template location
(`t('users.form.hello')`).
"""

import posixpath
import re
from typing import List, Optional

from haml_localizer.core.patterns import TRANSLATION_CALL
from haml_localizer.core.string_helpers import normalized_name
from haml_localizer.utils.config import ExtractorSettings

TEMPLATE_SUFFIX_RE = re.compile(r"(\.html)?\.haml$")


def has_been_translated(text: str) -> bool:
    return bool(text) and bool(TRANSLATION_CALL.search(text))


def _posix(path: str) -> str:
    return (path or "").replace("\\", "/")


def view_name(path: str) -> str:
    """app/views/users/_form.html.haml -> form"""
    name = posixpath.basename(_posix(path))
    name = TEMPLATE_SUFFIX_RE.sub("", name)
    return re.sub(r"^_", "", name)


def relative_dirs(path: str, base_path: str) -> List[str]:
    directory = posixpath.dirname(_posix(path))
    base = _posix(base_path)
    if base and directory.startswith(base):
        directory = directory[len(base):]
    return [part for part in directory.split("/") if part and part != "."]


def filename_prefix(path: str, base_path: str = "") -> str:
    """Dotted location prefix: users.form for app/views/users/_form.html.haml."""
    return ".".join(relative_dirs(path, base_path) + [view_name(path)])


def view_key_segments(path: str, settings: Optional[ExtractorSettings] = None) -> List[str]:
    """Key path segments for a template, in the nesting Rails uses for lazy lookup.

    app/views/users/index.html.haml -> [users, index]
    app/views/admin/users/index.html.haml -> [admin, users, index]
    anything outside a views/ directory -> [last directory, index]
    """
    settings = settings or ExtractorSettings()
    name = view_name(path)

    if settings.add_filename_prefix:
        return relative_dirs(path, settings.base_path) + [name]

    directories = [part for part in posixpath.dirname(_posix(path)).split("/") if part]
    if "views" in directories:
        index = directories.index("views")
        return directories[index + 1:] + [name]
    return directories[-1:] + [name]


def name_key(
    matched_text: str,
    original_line: str,
    path: str = "",
    settings: Optional[ExtractorSettings] = None,
) -> str:
    """The key name (without `t()`) for a matched string on a line."""
    settings = settings or ExtractorSettings()
    max_length = settings.max_key_length

    match = TRANSLATION_CALL.search(matched_text or "")
    if match:
        # reuse the key already in place, without any scope it had
        name = normalized_name(match.group(1).split(".")[-1], max_length)
    else:
        name = normalized_name(matched_text, max_length)
        if not name:
            name = normalized_name(original_line, max_length)

    if not name:
        return ""

    if settings.add_filename_prefix:
        prefix = filename_prefix(path, settings.base_path)
        name = f"{prefix}.{name.lstrip('_')}" if prefix else name
    return name


def translate_call(name: str, settings: Optional[ExtractorSettings] = None, arguments: str = "") -> str:
    """t('.name') or, for absolute keys, t('name')."""
    settings = settings or ExtractorSettings()
    dot = "" if settings.add_filename_prefix else "."
    suffix = f", {arguments}" if arguments else ""
    return f"t('{dot}{name}'{suffix})"
