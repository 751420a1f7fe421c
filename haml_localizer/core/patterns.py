"""
Pattern rules used to find translatable text inside HAML script expressions.

PATTERN_RULES is evaluated in order and the first rule that matches wins, so
the position of a rule in the tuple is part of its meaning: block forms of
`link_to` must come before the generic two-argument form, which must come
before the nearly unconstrained no-quotes fallback.
"""

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple


SINGLE = "single"
LIST = "list"


@dataclass(frozen=True)
class PatternRule:
    name: str
    regex: Pattern
    capture: str = SINGLE

    def search(self, text: str) -> Optional["re.Match"]:
        return self.regex.search(text)


LINK_TO_BLOCK_FORM_DOUBLE_Q = re.compile(r'link_to\s*\(?"(.*?)"\)?.*\sdo\s*$')
LINK_TO_BLOCK_FORM_SINGLE_Q = re.compile(r"link_to\s*\(?'(.*?)'\)?.*\sdo\s*$")
LINK_TO_REGEX_DOUBLE_Q = re.compile(r'link_to\s*\(?\s*"(.*?)"\s*,\s*(.*)\)?')
LINK_TO_REGEX_SINGLE_Q = re.compile(r"link_to\s*\(?\s*'(.*?)'\s*,\s*(.*)\)?")
LINK_TO_NO_QUOTES = re.compile(r"""link_to\s*\(?([^'"]*?)\)?.*""")

FORM_SUBMIT_BUTTON_SINGLE_Q = re.compile(r"[a-z]\.submit\s?'(.*?)'.*$")
FORM_SUBMIT_BUTTON_DOUBLE_Q = re.compile(r'[a-z]\.submit\s?"(.*?)".*$')

ARRAY_OF_STRINGS = re.compile(r"^\s?\[(.*)\]")

# Quoted strings with either quote style. A backslash-escaped quote does not
# close the string: "this \"escaped\" quote" is one match. Matches keep
# their surrounding quotes.
QUOTED_STRINGS = re.compile(r"""('[^\\']*(\\'[^\\']*)*'|"[^\\"]*(\\"[^\\"]*)*")""")

PATTERN_RULES: Tuple[PatternRule, ...] = (
    PatternRule("link_to_block_double_quote", LINK_TO_BLOCK_FORM_DOUBLE_Q),
    PatternRule("link_to_block_single_quote", LINK_TO_BLOCK_FORM_SINGLE_Q),
    PatternRule("link_to_double_quote", LINK_TO_REGEX_DOUBLE_Q),
    PatternRule("link_to_single_quote", LINK_TO_REGEX_SINGLE_Q),
    PatternRule("link_to_no_quotes", LINK_TO_NO_QUOTES),
    PatternRule("submit_single_quote", FORM_SUBMIT_BUTTON_SINGLE_Q),
    PatternRule("submit_double_quote", FORM_SUBMIT_BUTTON_DOUBLE_Q),
    PatternRule("array_of_strings", ARRAY_OF_STRINGS, LIST),
    PatternRule("quoted_strings", QUOTED_STRINGS, LIST),
)

# Rules tried one by one once the quoted-literal path found nothing
SINGLE_CAPTURE_RULES: Tuple[PatternRule, ...] = tuple(
    rule for rule in PATTERN_RULES if rule.capture == SINGLE
)

# Nested form builders never carry text of their own
SIMPLE_FORM_FOR = re.compile(r"simple_nested_form_for(.*)")

RENDER_PARTIAL_MATCH = re.compile(r"""render[\s(]+(layout:\s*)?['"](.*?)['"]""")
COMPONENT_MATCH = re.compile(
    r"""(knockout_component|react_component)\s*\(?\s*['"](.*?)['"]"""
)

DATA_BIND_MATCH = re.compile(
    r"""
    ['"]data-bind['"]\s*:\s*'(.*?)'|    # {'data-bind': '...'}
    ['"]data-bind['"]\s*:\s*"(.*?)"|
    ['"]data-bind['"]\s*=>\s*'(.*?)'|   # {'data-bind' => '...'}
    ['"]data-bind['"]\s*=>\s*"(.*?)"|
    data-bind\s*=\s*'(.*?)'|            # (data-bind='...')
    data-bind\s*=\s*"(.*?)"|
    \bbind\s*:\s*'(.*?)'|               # data: {bind: '...'}
    \bbind\s*:\s*"(.*?)"
    """,
    re.VERBOSE,
)

# t('.key') / t("key"), the key capture never includes the leading dot
TRANSLATION_CALL = re.compile(r"""\bt\(\s*['"]\.?(.*?)['"]""")

# A literal directly inside a t( call
PRECEDED_BY_TRANSLATION_CALL = re.compile(r"\bt\(\s*$")

# A literal that is the value of a class key in any of the hash spellings
PRECEDED_BY_CLASS_KEY = re.compile(
    r"""(?:\bclass\s*:|:class\s*=>|['"]class['"]\s*(?::|=>)|\bclass\s*=)\s*$"""
)

INTERPOLATION = re.compile(r"#\{(.*?)\}")
BARE_INTERPOLATION = re.compile(r"^#\{[^}]+\}$")


def rule_index(name: str) -> int:
    for index, rule in enumerate(PATTERN_RULES):
        if rule.name == name:
            return index
    raise KeyError(name)
