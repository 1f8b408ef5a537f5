"""Tests for the language resolver helpers."""

import pytest

from modules.i18n import (
    Language,
    get_lang_path,
    language_of,
    strip_language,
    with_language,
)

SAMPLE_PATHS = [
    "",
    "/",
    "/home",
    "/news/abc",
    "/en",
    "/id/",
    "/en/member/dashboard",
    "/id/en/news",
    "/en/en/x",
    "/xx/foo",
    "//double//slashes/",
    "/u/en",
    "/EN/home",
]


class TestLanguageOf:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/en/home", Language.EN),
            ("/id", Language.ID),
            ("/id/", Language.ID),
            ("/xx/foo", None),
            ("/EN/home", None),  # Case-sensitive
            ("/english", None),
            ("/home", None),
            ("", None),
            ("en/home", None),
        ],
    )
    def test_first_segment(self, path, expected):
        assert language_of(path) == expected


class TestStripLanguage:
    def test_strips_prefix(self):
        assert strip_language("/id/news/abc") == "/news/abc"

    def test_bare_language_strips_to_root(self):
        assert strip_language("/en") == "/"
        assert strip_language("/en/") == "/"

    def test_collapses_doubled_prefixes(self):
        assert strip_language("/en/en/x") == "/x"
        assert strip_language("/id/en/news") == "/news"

    def test_unrecognized_prefix_kept(self):
        assert strip_language("/xx/foo") == "/xx/foo"

    @pytest.mark.parametrize("path", SAMPLE_PATHS)
    def test_idempotent(self, path):
        once = strip_language(path)
        assert strip_language(once) == once


class TestWithLanguage:
    def test_prefixes_residual(self):
        assert with_language(Language.ID, "/news/abc") == "/id/news/abc"

    @pytest.mark.parametrize("residual", ["", "/", "/en", "/id/"])
    def test_empty_residual_goes_home(self, residual):
        assert with_language(Language.EN, residual) == "/en/home"

    def test_replaces_existing_language(self):
        assert with_language(Language.ID, "/en/member/dashboard") == "/id/member/dashboard"

    def test_collapses_repeated_slashes(self):
        assert with_language(Language.EN, "//news//abc") == "/en/news/abc"

    def test_adds_leading_slash(self):
        assert with_language(Language.EN, "news") == "/en/news"

    @pytest.mark.parametrize("lang", list(Language))
    @pytest.mark.parametrize("path", SAMPLE_PATHS)
    def test_prefix_property(self, lang, path):
        """Stripping a canonical path never leaves a language segment behind."""
        canonical = with_language(lang, path)
        assert language_of(canonical) == lang
        assert language_of(strip_language(canonical)) is None

    def test_get_lang_path_is_with_language(self):
        assert get_lang_path(Language.ID, "/faq") == with_language(Language.ID, "/faq")
