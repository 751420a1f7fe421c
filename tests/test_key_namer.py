import pytest

from haml_localizer.core.key_namer import (
    filename_prefix,
    has_been_translated,
    name_key,
    translate_call,
    view_key_segments,
    view_name,
)
from haml_localizer.core.string_helpers import interpolation_names, normalize_interpolation, normalized_name
from haml_localizer.utils.config import ExtractorSettings

PREFIXED = ExtractorSettings(add_filename_prefix=True, base_path="app/views/")


@pytest.mark.parametrize("text,expected", [
    ("Hello world", "hello_world"),
    ("Hello, #{user.name}!", "hello_user_name"),
    ("  Don't   stop  ", "don_t_stop"),
    ("Ünïcode", "ünïcode"),
])
def test_normalized_name(text, expected):
    assert normalized_name(text) == expected


def test_normalized_name_is_truncated():
    name = normalized_name("word " * 20, max_length=12)
    assert len(name) <= 12
    assert not name.endswith("_")


def test_interpolation_normalization():
    assert normalize_interpolation("Hi #{user.name}, #{count} new") == "Hi %{user_name}, %{count} new"
    assert normalize_interpolation("No vars") == "No vars"
    # same expression, same placeholder
    assert normalize_interpolation("#{a} and #{a}") == "%{a} and %{a}"
    assert interpolation_names("#{1 + 1}") == ["value1"]


@pytest.mark.parametrize("path,expected", [
    ("app/views/users/_form.html.haml", "form"),
    ("app/views/users/index.haml", "index"),
    ("C:\\app\\views\\home\\show.html.haml", "show"),
])
def test_view_name(path, expected):
    assert view_name(path) == expected


def test_view_key_segments():
    assert view_key_segments("app/views/users/index.html.haml") == ["users", "index"]
    assert view_key_segments("app/views/admin/users/_row.html.haml") == ["admin", "users", "row"]
    assert view_key_segments("engines/blog/show.html.haml") == ["blog", "show"]
    assert view_key_segments("app/views/admin/users/_row.html.haml", PREFIXED) == ["admin", "users", "row"]


def test_filename_prefix():
    assert filename_prefix("app/views/users/_form.html.haml", "app/views/") == "users.form"


def test_name_key_relative():
    assert name_key("Hello world", "%p Hello world") == "hello_world"
    assert translate_call("hello_world") == "t('.hello_world')"


def test_name_key_falls_back_to_line():
    assert name_key("!!", "%p Welcome !!") == "p_welcome"


def test_name_key_without_words_is_empty():
    assert name_key("...", "...") == ""
    assert name_key("--", "  --", "app/views/users/_form.html.haml", PREFIXED) == ""


def test_name_key_with_prefix():
    path = "app/views/users/_form.html.haml"
    assert name_key("Save user", "= f.submit 'Save user'", path, PREFIXED) == "users.form.save_user"
    assert translate_call("users.form.save_user", PREFIXED) == "t('users.form.save_user')"


def test_name_key_reuses_existing_key():
    path = "app/views/users/_form.html.haml"
    assert name_key("t('.save')", "= t('.save')", path) == "save"
    assert name_key("t('.save')", "= t('.save')", path, PREFIXED) == "users.form.save"


def test_translate_call_arguments():
    assert translate_call("hi_name", arguments="name: (name)") == "t('.hi_name', name: (name))"


def test_has_been_translated():
    assert has_been_translated("t('.hello')")
    assert has_been_translated("Click #{t('.here')}")
    assert not has_been_translated("Don't stop")
    assert not has_been_translated("")
