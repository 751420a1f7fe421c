import pytest

from haml_localizer.core.attribute_parser import parse_attribute_source
from haml_localizer.core.exceptions import AttributeParseError, HamlLocalizerError


def test_ruby_hash_key_spellings():
    source = """{title: 'Hi', :alt => "Logo", "aria-label": 'Close', 'data-id' => 3}"""
    assert parse_attribute_source(source) == {
        "title": "Hi",
        "alt": "Logo",
        "aria-label": "Close",
        "data-id": 3,
    }


def test_nested_values():
    source = "{data: {toggle: 'dropdown'}, list: [1, 'a'], hidden: true, value: nil, kind: :primary}"
    assert parse_attribute_source(source) == {
        "data": {"toggle": "dropdown"},
        "list": [1, "a"],
        "hidden": True,
        "value": None,
        "kind": "primary",
    }


def test_escaped_quotes():
    assert parse_attribute_source(r"""{title: 'It\'s here'}""") == {"title": "It's here"}


def test_html_style_attributes():
    assert parse_attribute_source('(title="Hi" checked)') == {"title": "Hi", "checked": True}


def test_empty_hash():
    assert parse_attribute_source("{}") == {}


@pytest.mark.parametrize("source", [
    "{title: @user.name}",
    "{title: t('.title')}",
    "{title: 'a' + 'b'}",
    "(title=@title)",
    "title: 'x'",
    "",
    "   ",
    None,
])
def test_non_literal_sources_raise(source):
    with pytest.raises(AttributeParseError):
        parse_attribute_source(source)


def test_parse_error_is_a_package_error():
    with pytest.raises(HamlLocalizerError):
        parse_attribute_source("{system('rm -rf /')}")
