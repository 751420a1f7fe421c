import logging
from pathlib import Path

import pytest
import yaml

from haml_localizer.core.exceptions import LocaleFileError
from haml_localizer.core.text_replacer import ReplacerResult
from haml_localizer.core.translation_store import (
    TranslationStore,
    count_string_value_keys,
    deep_merge,
    dump_document,
    load_document,
)
from haml_localizer.utils.config import ExtractorSettings

PATH = "app/views/users/index.html.haml"


def test_record_builds_nested_document():
    store = TranslationStore()
    assert store.record(["en", "users", "index", "hello"], "Hello")
    assert store.record("en.users.index.bye", "Bye")
    assert store.to_dict() == {"en": {"users": {"index": {"hello": "Hello", "bye": "Bye"}}}}
    assert len(store) == 2


def test_record_collision_is_logged(caplog):
    store = TranslationStore()
    store.record("en.users.index.save", "Save")
    assert store.record("en.users.index.save", "Save")

    with caplog.at_level(logging.WARNING):
        assert not store.record("en.users.index.save", "Save changes")
    assert "en.users.index.save" in caplog.text
    assert len(store.collisions) == 1
    assert store.document["en"]["users"]["index"]["save"] == "Save changes"


def test_record_leaf_branch_clash():
    store = TranslationStore()
    store.record("en.users.form", "Form")
    store.record("en.users.form.title", "Title")
    assert store.collisions[0].key_path == ("en", "users", "form")
    assert store.document == {"en": {"users": {"form": {"title": "Title"}}}}


def test_record_replacement():
    store = TranslationStore()
    result = ReplacerResult("= t('.hi_name', name: (name))", "hi_name", "Hi #{name}", True, PATH)
    store.record_replacement(result)
    assert store.document == {"en": {"users": {"index": {"hi_name": "Hi %{name}"}}}}


def test_record_replacement_skips_unchanged_and_rekeyed():
    store = TranslationStore()
    store.record_replacement(ReplacerResult(None, None, "Hi", False, PATH))
    store.record_replacement(ReplacerResult("= t('users.index.hi')", "users.index.hi", "t('.hi')", True, PATH, rekeyed=True))
    assert store.document == {}


def test_record_replacement_with_prefix():
    settings = ExtractorSettings(add_filename_prefix=True, base_path="app/views/", i18n_scope="de")
    store = TranslationStore(settings)
    store.record_replacement(ReplacerResult("%h1= t('users.index.users')", "users.index.users", "Users", True, PATH))
    assert store.document == {"de": {"users": {"index": {"users": "Users"}}}}


def test_disjoint_merge_keeps_everything():
    store = TranslationStore()
    store.record("en.users.index.new", "New")
    existing = {"en": {"users": {"index": {"old": "Old"}}, "home": {"title": "Home"}}}

    merged, report = store.merge_into(existing)
    assert report.existing_count == 2
    assert report.new_count == 1
    assert report.final_count == 3
    assert not report.has_collisions
    assert merged["en"]["users"]["index"] == {"new": "New", "old": "Old"}
    # the input is left alone
    assert "new" not in existing["en"]["users"]["index"]


def test_overlapping_merge_warns(caplog):
    store = TranslationStore()
    store.record("en.users.index.title", "Users")
    existing = {"en": {"users": {"index": {"title": "All users"}}}}

    with caplog.at_level(logging.WARNING, logger="haml_localizer.core.translation_store"):
        merged, report = store.merge_into(existing)
    assert report.has_collisions
    assert report.expected_count == 2
    assert report.final_count == 1
    assert merged["en"]["users"]["index"]["title"] == "Users"
    assert "duplicate key overwrite" in caplog.text


def test_flush_to_missing_file(tmp_path: Path):
    target = tmp_path / "config" / "locales" / "en.yml"
    store = TranslationStore()
    store.record("en.users.index.zeta", "Z")
    store.record("en.users.index.alpha", "A")

    report = store.flush_to_disk(target)
    assert report.path == target
    assert report.final_count == 2

    text = target.read_text(encoding="utf-8")
    assert text.index("alpha") < text.index("zeta")
    assert text.startswith("en:\n  users:\n    index:\n")
    assert yaml.safe_load(text) == {"en": {"users": {"index": {"alpha": "A", "zeta": "Z"}}}}


def test_flush_uses_configured_indent(tmp_path: Path):
    target = tmp_path / "en.yml"
    store = TranslationStore(ExtractorSettings(indent=4))
    store.record("en.home.title", "Home")
    store.flush_to_disk(target)

    assert target.read_text(encoding="utf-8") == "en:\n    home:\n        title: Home\n"


def test_flush_merges_with_existing_yaml_file(tmp_path: Path):
    target = tmp_path / "en.yml"
    target.write_text("en:\n  home:\n    title: Home\n", encoding="utf-8")

    store = TranslationStore()
    store.record("en.users.index.title", "Users")
    report = store.flush_to_disk(str(target))

    assert report.existing_count == 1
    assert not report.has_collisions
    assert yaml.safe_load(target.read_text(encoding="utf-8")) == {
        "en": {"home": {"title": "Home"}, "users": {"index": {"title": "Users"}}}
    }


@pytest.mark.parametrize("content", ["\n", "---\n", "~\n"])
def test_flush_treats_empty_file_as_empty_document(tmp_path: Path, content):
    target = tmp_path / "en.yml"
    target.write_text(content, encoding="utf-8")
    store = TranslationStore()
    store.record("en.a", "A")
    assert store.flush_to_disk(target).existing_count == 0


@pytest.mark.parametrize("content", ["en: [unclosed\n", "- one\n- two\n"])
def test_unreadable_locale_file_is_not_overwritten(tmp_path: Path, content):
    target = tmp_path / "en.yml"
    target.write_text(content, encoding="utf-8")
    store = TranslationStore()
    store.record("en.a", "A")

    with pytest.raises(LocaleFileError):
        store.flush_to_disk(target)
    assert target.read_text(encoding="utf-8") == content


def test_default_locale_file():
    assert TranslationStore().default_locale_file() == Path("config/locales/en.yml")

    settings = ExtractorSettings(add_filename_prefix=True, base_path="app/views/", i18n_scope="fr")
    store = TranslationStore(settings)
    assert store.default_locale_file(PATH) == Path("config/locales/fr/users/fr.yml")

    explicit = TranslationStore(ExtractorSettings(locale_file="locales/app.yml"))
    assert explicit.default_locale_file(PATH) == Path("locales/app.yml")


def test_dump_and_load():
    long_text = ("lorem ipsum " * 25).strip()
    document = {"en": {"b": "Bé", "a": {"long": long_text, "vars": "Hi %{name}"}}}
    text = dump_document(document)
    assert "Bé" in text
    # long values stay on one line
    assert any(line.strip() == f"long: {long_text}" for line in text.splitlines())
    assert text.index("a:") < text.index("b:")
    assert load_document(text) == document
    assert load_document(None) == {}
    assert load_document("   ") == {}
    with pytest.raises(LocaleFileError):
        load_document("[1, 2]")


def test_helpers():
    assert count_string_value_keys({"a": {"b": "x", "c": {"d": "y"}}}) == 2
    assert count_string_value_keys({}) == 0
    target = {"a": {"b": "x"}}
    assert deep_merge(target, {"a": {"c": "y"}}) == {"a": {"b": "x", "c": "y"}}
