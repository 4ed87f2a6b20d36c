"""
Tests for the syntax highlighter.
"""

import html
import re

import pytest
from hypothesis import given, strategies as st, settings

from http_workbench.exceptions import RenderError, UnknownLanguageError
from http_workbench.services import highlighter as highlighter_module
from http_workbench.services.highlighter import SyntaxHighlighter, format_chunk


TAG_PATTERN = re.compile(r"<[^>]+>")
SPAN_PATTERN = re.compile(r'<span style="([^"]*)">')


def strip_markup(markup: str) -> str:
    """Remove tags and unescape entities, leaving the original text."""
    return html.unescape(TAG_PATTERN.sub("", markup))


@pytest.fixture(scope="module")
def highlighter():
    return SyntaxHighlighter()


class TestLanguageResolution:

    @pytest.mark.parametrize("language", ["json", "JSON", "js", "javascript", "py", "python", "html", "xml", "yaml", ".json"])
    def test_known_languages_resolve(self, highlighter, language: str):
        assert highlighter.resolve(language)

    def test_extension_and_alias_resolve_to_same_grammar(self, highlighter):
        assert highlighter.resolve("js") == highlighter.resolve("javascript")

    def test_unknown_language_raises(self, highlighter):
        with pytest.raises(UnknownLanguageError) as exc_info:
            highlighter.render('{"a":1}', "no-such-language")
        assert exc_info.value.error_code == "UNKNOWN_LANGUAGE"
        assert "no-such-language" in exc_info.value.detail


class TestRender:

    def test_json_is_wrapped_in_markup(self, highlighter):
        markup = highlighter.render('{"a":1}', "json")

        assert markup
        assert "<span" in markup
        assert re.search(r">[^<]*a[^<]*</span>", markup)
        assert re.search(r">[^<]*1[^<]*</span>", markup)

    def test_only_foreground_colour_is_emitted(self, highlighter):
        markup = highlighter.render('{"a": [1, true, null, "x"]}\n', "json")

        styles = SPAN_PATTERN.findall(markup)
        assert styles
        for style in styles:
            assert re.fullmatch(r"color:#[0-9a-fA-F]{3,6};", style)
        assert "background" not in markup

    @pytest.mark.parametrize("code", [
        '{"a": 1}\n',
        '\n\n{"a": 1}\n\n',
        '{\n  "a": [\n    1,\n    2\n  ]\n}',
        '{"a": 1}\r\n{"b": 2}\r\n',
        '\r\n[\r  1,\n  2\r\n]',
        "",
    ])
    def test_line_boundaries_are_preserved(self, highlighter, code: str):
        markup = highlighter.render(code, "json")
        assert strip_markup(markup) == code
        assert markup.count("\n") == code.count("\n")

    def test_html_in_input_is_escaped(self, highlighter):
        markup = highlighter.render("<script>alert('x')</script>", "html")
        assert "<script>" not in markup
        assert strip_markup(markup) == "<script>alert('x')</script>"

    def test_spans_do_not_cross_lines(self, highlighter):
        markup = highlighter.render('x = """first\nsecond"""\n', "python")
        for line in markup.split("\n"):
            assert line.count("<span") == line.count("</span>")

    @given(code=st.text(
        alphabet=st.characters(blacklist_categories=("Cs",)),
        max_size=200,
    ))
    @settings(max_examples=50, deadline=None)
    def test_text_survives_rendering(self, highlighter, code: str):
        """
        Property: For any input, stripping the markup from the rendered
        output gives back the input.
        """
        markup = highlighter.render(code, "python")
        assert strip_markup(markup) == code

    def test_tokenizer_failure_raises_render_error(self, highlighter, monkeypatch):
        class BrokenLexer:
            def get_tokens_unprocessed(self, code):
                raise RuntimeError("lexer exploded")

        monkeypatch.setattr(highlighter_module, "get_lexer_by_name", lambda *args, **kwargs: BrokenLexer())

        with pytest.raises(RenderError) as exc_info:
            highlighter.render("{}", "json")
        assert "lexer exploded" in exc_info.value.detail


class TestSharedState:

    def test_grammars_and_theme_are_read_only(self, highlighter):
        with pytest.raises(TypeError):
            highlighter.grammars["brainfreeze"] = "json"
        with pytest.raises(TypeError):
            highlighter.theme[next(iter(highlighter.theme))] = "#000000"

    def test_format_chunk_without_colour_is_plain_text(self):
        assert format_chunk(None, "a < b\n") == "a &lt; b\n"

    def test_format_chunk_closes_span_before_newline(self):
        assert format_chunk("#ffffff", "a\nb") == (
            '<span style="color:#ffffff;">a</span>\n<span style="color:#ffffff;">b</span>'
        )

    def test_format_chunk_closes_span_before_crlf_and_cr(self):
        assert format_chunk("#ffffff", "a\r\nb\rc") == (
            '<span style="color:#ffffff;">a</span>\r\n'
            '<span style="color:#ffffff;">b</span>\r'
            '<span style="color:#ffffff;">c</span>'
        )

    def test_leading_byte_order_mark_is_kept(self, highlighter):
        code = '\ufeff{"a": 1}\r\n'
        assert strip_markup(highlighter.render(code, "json")) == code
