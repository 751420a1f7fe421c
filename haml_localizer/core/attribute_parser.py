"""
Literal-only parser for HAML dynamic attribute sources.

HAML keeps attributes it could not resolve at parse time as Ruby source,
either a hash (`{title: 'Hi', :alt => "x"}`) or an HTML style list
(`(title="Hi" checked)`). Only literal values are understood here; any
method call, variable or operator makes the whole source unparseable and
AttributeParseError is raised. Nothing is ever evaluated.
"""

from typing import Any, Dict

import pyparsing as pp

from haml_localizer.core.exceptions import AttributeParseError

_IDENT = r"[A-Za-z_][\w\-]*"


def _build_hash_grammar() -> pp.ParserElement:
    lbrace, rbrace = pp.Suppress("{"), pp.Suppress("}")
    lbrack, rbrack = pp.Suppress("["), pp.Suppress("]")
    comma = pp.Suppress(",")
    arrow = pp.Suppress("=>")

    quoted = pp.QuotedString('"', esc_char="\\") | pp.QuotedString("'", esc_char="\\")
    symbol = pp.Regex(r":" + _IDENT).set_parse_action(lambda t: t[0][1:])
    number = pp.Regex(r"-?\d+(\.\d+)?").set_parse_action(
        lambda t: float(t[0]) if "." in t[0] else int(t[0])
    )
    true = pp.Keyword("true").set_parse_action(lambda: [True])
    false = pp.Keyword("false").set_parse_action(lambda: [False])
    nil = pp.Keyword("nil").set_parse_action(lambda: [None])

    value = pp.Forward()
    array = (lbrack + pp.Optional(value + pp.ZeroOrMore(comma + value)) + pp.Optional(comma) + rbrack)
    array.set_parse_action(lambda t: [list(t)])

    # title: 'x' and "aria-label": 'x'
    label = pp.Regex(_IDENT + r":(?!:)").set_parse_action(lambda t: t[0][:-1])
    quoted_label = quoted + pp.Suppress(":")
    # :title => 'x' and "aria-label" => 'x'
    rocket_key = symbol | quoted

    pair = ((label | quoted_label) + value) | (rocket_key + arrow + value)
    pair.set_parse_action(lambda t: [(t[0], t[1])])

    ruby_hash = lbrace + pp.Optional(pair + pp.ZeroOrMore(comma + pair)) + pp.Optional(comma) + rbrace
    ruby_hash.set_parse_action(lambda t: [dict(list(t))])

    value <<= quoted | number | true | false | nil | symbol | array | ruby_hash
    return ruby_hash


def _build_html_grammar() -> pp.ParserElement:
    quoted = pp.QuotedString('"', esc_char="\\") | pp.QuotedString("'", esc_char="\\")
    name = pp.Regex(r"[A-Za-z_][\w:\-]*")

    valued = name + pp.Suppress("=") + quoted
    valued.set_parse_action(lambda t: [(t[0], t[1])])
    bare = name.copy().set_parse_action(lambda t: [(t[0], True)])

    html_list = pp.Suppress("(") + pp.ZeroOrMore(valued | bare) + pp.Suppress(")")
    html_list.set_parse_action(lambda t: [dict(list(t))])
    return html_list


HASH_GRAMMAR = _build_hash_grammar()
HTML_GRAMMAR = _build_html_grammar()


def parse_attribute_source(source: str) -> Dict[str, Any]:
    """Parse a literal attribute hash or HTML attribute list into a dict."""
    if not source or not source.strip():
        raise AttributeParseError("empty attribute source")

    text = source.strip()
    if text.startswith("{"):
        grammar = HASH_GRAMMAR
    elif text.startswith("("):
        grammar = HTML_GRAMMAR
    else:
        raise AttributeParseError(f"not an attribute hash: {text!r}")

    try:
        parsed = grammar.parse_string(text, parse_all=True)
    except pp.ParseBaseException as exc:
        raise AttributeParseError(f"cannot parse attributes {text!r}: {exc}") from exc
    return parsed[0]
