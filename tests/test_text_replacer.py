import pytest

from haml_localizer.core.exceptions import NotDefinedLineType
from haml_localizer.core.line_types import LineType, Placement
from haml_localizer.core.text_replacer import (
    TextReplacer,
    locate,
    replace_line,
    skip_balanced,
    skip_tag_attributes,
)
from haml_localizer.utils.config import ExtractorSettings

PATH = "app/views/users/index.html.haml"


@pytest.mark.parametrize("line,text,expected", [
    ("  Hello world", "Hello world", "  = t('.hello_world')"),
    ("Hello #{@user.name}", "Hello #{@user.name}", "= t('.hello_user_name', user_name: (@user.name))"),
])
def test_plain_lines(line, text, expected):
    result = replace_line(line, text, LineType.PLAIN, PATH)
    assert result.changed
    assert result.modified_line == expected


@pytest.mark.parametrize("line,text,value,expected", [
    ("%p Hello world", "Hello world", "Hello world", "%p= t('.hello_world')"),
    ('%a.btn{href: "#"} Click me', "Click me", "Click me", "%a.btn{href: \"#\"}= t('.click_me')"),
    ("%span.title Title", "Title", "Title", "%span.title= t('.title')"),
    ("%p< Hello there", "Hello there", "Hello there", "%p<= t('.hello_there')"),
    ("%p= 'Hello'", "Hello", "'Hello'", "%p= t('.hello')"),
    ("%p= link_to 'Edit', edit_path", "Edit", "link_to 'Edit', edit_path", "%p= link_to t('.edit'), edit_path"),
])
def test_tag_content(line, text, value, expected):
    result = replace_line(line, text, LineType.TAG, PATH, metadata={"value": value}, placement=Placement.CONTENT)
    assert result.modified_line == expected


def test_tag_attribute_in_hash():
    result = replace_line(
        "%img{alt: 'Company logo'}", "Company logo", LineType.TAG, PATH,
        placement=Placement.ATTRIBUTE, attribute_name="alt",
    )
    assert result.modified_line == "%img{alt: t('.company_logo')}"
    assert result.t_name == "company_logo"


def test_tag_attribute_in_html_list():
    result = replace_line(
        '%img(alt="Company logo")', "Company logo", LineType.TAG, PATH,
        placement=Placement.ATTRIBUTE, attribute_name="alt",
    )
    assert result.modified_line == "%img(alt=\"#{t('.company_logo')}\")"


def test_attribute_and_content_with_same_text():
    line = "%a{title: 'Home'} Home"
    first = replace_line(line, "Home", LineType.TAG, PATH, placement=Placement.ATTRIBUTE, attribute_name="title")
    assert first.modified_line == "%a{title: t('.home')} Home"

    second = replace_line(
        first.modified_line, "Home", LineType.TAG, PATH, metadata={"value": "Home"}, placement=Placement.CONTENT,
    )
    assert second.modified_line == "%a{title: t('.home')}= t('.home')"


def test_script_line_keeps_its_marker():
    result = replace_line("= link_to 'Edit profile', edit_path", "Edit profile", LineType.SCRIPT, PATH)
    assert result.modified_line == "= link_to t('.edit_profile'), edit_path"


@pytest.mark.parametrize("line,text", [
    ("= t('.hello')", "t('.hello')"),
    ("= name", "#{name}"),
    ("Hello", "Goodbye"),
    ("%p", ""),
])
def test_unchanged(line, text):
    result = replace_line(line, text, LineType.SCRIPT, PATH)
    assert not result.changed
    assert result.modified_line is None
    assert result.t_name is None


@pytest.mark.parametrize("settings", [None, ExtractorSettings(add_filename_prefix=True, base_path="app/views/")])
def test_text_without_words_is_left_alone(settings):
    result = replace_line("  ...", "...", LineType.PLAIN, PATH, settings=settings)
    assert not result.changed
    assert result.modified_line is None


def test_translated_call_is_rekeyed_with_prefix():
    settings = ExtractorSettings(add_filename_prefix=True, base_path="app/views/")
    result = replace_line("= t('.hello')", "t('.hello')", LineType.SCRIPT, PATH, settings=settings)
    assert result.rekeyed
    assert result.modified_line == "= t('users.index.hello')"


def test_prefixed_key():
    settings = ExtractorSettings(add_filename_prefix=True, base_path="app/views/")
    result = replace_line("%h1 Users", "Users", LineType.TAG, PATH, {"value": "Users"}, settings, Placement.CONTENT)
    assert result.modified_line == "%h1= t('users.index.users')"
    assert result.t_name == "users.index.users"


def test_line_type_names_are_accepted():
    assert replace_line("Hi there", "Hi there", "plain", PATH).modified_line == "= t('.hi_there')"


def test_undefined_line_type():
    with pytest.raises(NotDefinedLineType):
        TextReplacer("%p Hi", "Hi", "bogus")


def test_result_info():
    info = replace_line("Hi there", "Hi there", LineType.PLAIN, PATH).info
    assert info == {
        "modified_line": "= t('.hi_there')",
        "t_name": "hi_there",
        "replaced_text": "Hi there",
        "path": PATH,
    }


def test_skip_helpers():
    line = "%a.btn#go{href: '}'}(title=\"x)\") Go"
    assert line[skip_tag_attributes(line):] == " Go"
    assert skip_balanced("{a: {b: 1}} rest", 0) == len("{a: {b: 1}}")
    assert skip_balanced("no block", 0) == 0


def test_locate_includes_quotes():
    assert locate("= 'Hi'", "Hi") == (2, 6)
    assert locate("Hi", "Hi") == (0, 2)
    assert locate("Hi", "Bye") is None
