"""
Small string predicates and normalizers shared by the finder, replacer and store.
"""

import re

from haml_localizer.core.patterns import INTERPOLATION

DEFAULT_MAX_KEY_LENGTH = 40

HTML_COMMENT_RE = re.compile(r"^\s*<!--.*(-->)?\s*$", re.DOTALL)
NON_WORD_RUN_RE = re.compile(r"\W+")
UNDERSCORE_RUN_RE = re.compile(r"_+")


def html_comment(text: str) -> bool:
    return bool(text) and bool(HTML_COMMENT_RE.match(text))


def interpolated(text: str) -> bool:
    return bool(text) and "#{" in text


def normalized_name(text: str, max_length: int = DEFAULT_MAX_KEY_LENGTH) -> str:
    """Identifier-safe slug: 'Hello, #{user}!' -> 'hello_user'."""
    if not text:
        return ""
    name = text.replace("#{", " ").replace("}", " ")
    name = NON_WORD_RUN_RE.sub("_", name.strip().lower())
    name = UNDERSCORE_RUN_RE.sub("_", name).strip("_")
    if max_length and len(name) > max_length:
        name = name[:max_length].rstrip("_")
    return name


def normalize_interpolation(text: str, max_length: int = DEFAULT_MAX_KEY_LENGTH) -> str:
    """Rewrite Ruby `#{expr}` interpolation into i18n `%{name}` placeholders."""
    if not interpolated(text):
        return text

    names = interpolation_names(text, max_length)
    iterator = iter(names)
    return INTERPOLATION.sub(lambda _match: "%{" + next(iterator) + "}", text)


def interpolation_names(text: str, max_length: int = DEFAULT_MAX_KEY_LENGTH) -> list:
    """One variable name per `#{...}` in order; the same expression shares a name."""
    names = []
    seen = {}
    for index, expression in enumerate(INTERPOLATION.findall(text), start=1):
        expression = expression.strip()
        if expression in seen:
            names.append(seen[expression])
            continue
        name = normalized_name(expression, max_length) or f"value{index}"
        if name[0].isdigit() or name in seen.values():
            name = f"value{index}"
        seen[expression] = name
        names.append(name)
    return names
