from __future__ import annotations

import re

import pytest

from sane_permalinks.services.slugify import sanitize_param, slugify, transliterate

SLUG_RE = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")

SAMPLES = [
    "Ín der Öder pf'ügén … víé-le Hüöänér!\"!_:;§$%»",
    "hello_world",
    "  --Hello,   World!--  ",
    "Straße am Ærøskøbing-Hafen",
    "Café 2024: a review",
    "Łódź / Kraków",
    "100% pure",
    "already-a-slug",
]


class TestTransliterate:
    def test_folds_accents(self) -> None:
        assert transliterate("Ín Öder víé") == "In Oder vie"

    def test_uses_table_for_letters_without_decomposition(self) -> None:
        assert transliterate("Straße") == "Strasse"
        assert transliterate("Ærø") == "AEro"
        assert transliterate("Łódź") == "Lodz"

    def test_table_keeps_case(self) -> None:
        assert transliterate("ẞ Þór Œuvre") == "SS THor OEuvre"
        assert transliterate("ß þ œ") == "ss th oe"

    def test_drops_characters_without_ascii_equivalent(self) -> None:
        assert transliterate("日本語§»") == ""


class TestSanitizeParam:
    def test_standard_escaping(self) -> None:
        result = sanitize_param("Ín der Öder pf'ügén … víé-le Hüöänér!\"!_:;§$%»")

        assert result == "in-der-oder-pf-ugen-vie-le-huoaner"

    def test_none_passes_through(self) -> None:
        assert sanitize_param(None) is None

    def test_underscore_becomes_hyphen(self) -> None:
        assert sanitize_param("hello_world") == "hello-world"

    def test_collapses_and_strips_separators(self) -> None:
        assert sanitize_param("  --Hello,   World!--  ") == "hello-world"

    def test_keeps_digits(self) -> None:
        assert sanitize_param("Café 2024: a review") == "cafe-2024-a-review"

    def test_nothing_usable_gives_empty_string(self) -> None:
        assert sanitize_param("!!! §§ 日本語") == ""
        assert sanitize_param("") == ""

    @pytest.mark.parametrize("text", SAMPLES)
    def test_output_is_a_clean_slug(self, text: str) -> None:
        result = sanitize_param(text)

        assert SLUG_RE.fullmatch(result)
        assert "--" not in result
        assert not result.startswith("-")
        assert not result.endswith("-")

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, text: str) -> None:
        once = sanitize_param(text)

        assert sanitize_param(once) == once


class TestSlugify:
    def test_returns_slug(self) -> None:
        assert slugify("Bolo de Cenoura") == "bolo-de-cenoura"

    def test_falls_back_when_empty(self) -> None:
        assert slugify(None) == "record"
        assert slugify("!!!", fallback="untitled") == "untitled"
