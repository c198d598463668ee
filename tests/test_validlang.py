"""Tests for the boolean validation boundary."""

import pytest

from validlang import is_valid, well_formed_bcp47


class TestIsValid:
    @pytest.mark.parametrize(
        "tag",
        [
            "cs",
            "cs_CZ",
            "zh-cmn-Hans-CN",
            "sl-rozaj-biske",
            "es-419",
            "en-US-u-islamcal",
            "x-whatever",
            "i-enochian",
            "art-lojban",
            "qaa-Qaaa-QM-x-southern",
        ],
    )
    def test_valid(self, tag):
        assert is_valid(tag) is True

    @pytest.mark.parametrize(
        "tag", ["de-419-DE", "a-DE", "ar-a-aaa-b-bbb-a-ccc", "", "en-", "-en", "en US"]
    )
    def test_invalid(self, tag):
        assert is_valid(tag) is False

    def test_none_is_invalid(self):
        assert is_valid(None) is False


class TestWellFormed:
    def test_returns_fields(self):
        result = well_formed_bcp47("sl-IT-nedis")
        assert result["kind"] == "LangTag"
        assert result["language"] == "sl"
        assert result["region"] == "IT"
        assert result["variants"] == ["nedis"]
        assert result["script"] is None

    def test_grandfathered(self):
        assert well_formed_bcp47("zh-xiang") == {
            "kind": "GrandfatheredRegular",
            "tag": "zh-xiang",
        }

    def test_malformed(self):
        assert well_formed_bcp47("a-DE") is None
