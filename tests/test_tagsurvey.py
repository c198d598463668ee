"""Tests for the tag survey CLI."""

import json
import lzma

from tagsurvey import TagSurvey, extract_html_tags, main, read_tags

HTML = """<!DOCTYPE html>
<html lang="en-US">
<head>
<meta http-equiv="Content-Language" content="en, fr-CA">
<link rel="alternate" hreflang="de-DE" href="/de/">
</head>
<body>
<p xml:lang="x-klingon">nuqneH</p>
<span lang="">empty</span>
<a hreflang="English (US)" href="/en/">English</a>
</body>
</html>
"""


def _sections(out):
    """Map '# name' headers to the JSON object on the following line."""
    lines = out.splitlines()
    sections = {}
    for i, line in enumerate(lines):
        if line.startswith("# ") and not line.startswith("# total"):
            sections[line[2:]] = json.loads(lines[i + 1])
    return sections


class TestReadTags:
    def test_plain_file(self, tmp_path):
        f = tmp_path / "tags.txt"
        f.write_text("# comment\nen-US\n\n  de  \n")
        assert list(read_tags(str(f))) == ["en-US", "de"]

    def test_xz_file(self, tmp_path):
        f = tmp_path / "tags.txt.xz"
        with lzma.open(f, "wt", encoding="utf8") as out:
            out.write("fr\nx-foo\n")
        assert list(read_tags(str(f))) == ["fr", "x-foo"]


class TestExtractHtml:
    def test_finds_declared_tags(self):
        assert extract_html_tags(HTML) == [
            "en-US",
            "en",
            "fr-CA",
            "de-DE",
            "x-klingon",
            "English (US)",
        ]

    def test_no_tags(self):
        assert extract_html_tags("<html><body>hi</body></html>") == []


class TestTagSurvey:
    def test_counts(self):
        survey = TagSurvey()
        survey.update(
            ["en-US", "en_gb", "zh-Hant-TW", "x-foo", "i-klingon", "de-x-bar", "a-DE", "a-DE"]
        )
        assert survey.total == 8
        assert survey.kinds == {
            "LangTag": 4,
            "PrivateUse": 1,
            "GrandfatheredIrregular": 1,
        }
        assert survey.language == {"en": 2, "zh": 1, "de": 1}
        assert survey.region == {"US": 1, "GB": 1, "TW": 1}
        assert survey.script == {"Hant": 1}
        assert survey.private == {"x-foo": 1, "x-bar": 1}
        assert survey.invalid == {"a-DE": 2}

    def test_add_returns_tag(self):
        survey = TagSurvey()
        assert str(survey.add("EN-us")) == "en-US"
        assert survey.add("nope-") is None

    def test_extlang_counted_under_primary_language(self):
        survey = TagSurvey()
        survey.add("zh-yue-HK")
        assert survey.language == {"zh": 1}


class TestMain:
    def test_text_input(self, tmp_path, capsys):
        f = tmp_path / "tags.txt"
        f.write_text("en-US\nen-GB\nbad-tag-\n")
        assert main([str(f)]) == 0
        out = capsys.readouterr().out
        assert out.splitlines()[0] == "# total 3 invalid 1"
        sections = _sections(out)
        assert sections["language"] == {"en": 2}
        assert sections["invalid"] == {"bad-tag-": 1}

    def test_html_input(self, tmp_path, capsys):
        f = tmp_path / "page.html"
        f.write_text(HTML)
        assert main(["-H", str(f)]) == 0
        sections = _sections(capsys.readouterr().out)
        assert sections["kinds"] == {"LangTag": 4, "PrivateUse": 1}
        assert sections["invalid"] == {"English (US)": 1}

    def test_outfile(self, tmp_path):
        f = tmp_path / "tags.txt"
        f.write_text("sl-rozaj\n")
        outname = tmp_path / "out.txt"
        assert main(["-o", str(outname), str(f)]) == 0
        sections = _sections(outname.read_text())
        assert sections["kinds"] == {"LangTag": 1}

    def test_verbose(self, tmp_path, capsys):
        f = tmp_path / "tags.txt"
        f.write_text("EN-us\na-DE\n")
        main(["-v", str(f)])
        out = capsys.readouterr().out
        assert "EN-us -> en-US" in out
        assert "a-DE -> INVALID" in out

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.txt")]) == 1
        assert "Failed to read" in capsys.readouterr().err
