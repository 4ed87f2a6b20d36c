"""
Syntax highlighting service for response bodies and code blocks.

Text is tokenized with a Pygments lexer and every token is wrapped in a
``<span>`` carrying its foreground colour from a single fixed theme.
"""

import html
import re
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from loguru import logger
from pygments.lexers import get_all_lexers, get_lexer_by_name
from pygments.styles import get_style_by_name
from pygments.token import _TokenType
from pygments.util import ClassNotFound

from ..exceptions import RenderError, UnknownLanguageError


THEME_NAME = "monokai"

LINE_BREAK_PATTERN = re.compile(r"(\r\n|\r|\n)")


def build_grammar_index() -> Mapping[str, str]:
    """
    Map language tokens to lexer aliases.

    Every lexer alias maps to itself. Simple filename patterns such as
    ``*.js`` add their extension (``js``) unless an alias already claims it.
    """
    index: dict[str, str] = {}
    lexers = [
        (aliases[0], aliases, filenames)
        for _, aliases, filenames, _ in get_all_lexers()
        if aliases
    ]

    for alias, aliases, _ in lexers:
        for name in aliases:
            index.setdefault(name.lower(), alias)

    for alias, _, filenames in lexers:
        for pattern in filenames:
            if not pattern.startswith("*."):
                continue
            extension = pattern[2:]
            if extension and not any(c in extension for c in "*?["):
                index.setdefault(extension.lower(), alias)

    return MappingProxyType(index)


def build_theme(theme_name: str = THEME_NAME) -> Mapping[_TokenType, str | None]:
    """Map every token type of a Pygments style to its foreground colour, or None."""
    style = get_style_by_name(theme_name)
    colors = {
        token_type: f"#{style_def['color']}" if style_def["color"] else None
        for token_type, style_def in style
    }
    return MappingProxyType(colors)


class SyntaxHighlighter:
    """
    Renders text as HTML with coloured spans.

    The grammar index and the theme are built once here and never modified,
    so one instance can serve concurrent renders. Build it at startup.
    """

    def __init__(self, theme_name: str = THEME_NAME):
        self.theme_name = theme_name
        self.grammars = build_grammar_index()
        self.theme = build_theme(theme_name)
        logger.debug("Loaded {} grammars and theme {}", len(self.grammars), theme_name)

    def resolve(self, language: str) -> str:
        """
        Find the lexer alias for a language token such as "json" or "js".

        Raises:
            UnknownLanguageError: If no grammar matches
        """
        alias = self.grammars.get(language.strip().lower().lstrip("."))
        if alias is None:
            raise UnknownLanguageError(language)
        return alias

    def color_for(self, token_type: _TokenType) -> str | None:
        """Colour of a token type, inherited from the nearest styled parent."""
        while token_type not in self.theme and token_type.parent is not None:
            token_type = token_type.parent
        return self.theme.get(token_type)

    def render(self, code: str, language: str) -> str:
        """
        Highlight code as an HTML fragment.

        Line breaks in the input are kept byte for byte (LF, CRLF and CR),
        including leading and trailing ones. Only foreground colours are emitted.

        Args:
            code: The text to highlight
            language: File-extension-style language token

        Returns:
            HTML markup

        Raises:
            UnknownLanguageError: If no grammar matches the language
            RenderError: If tokenizing fails
        """
        alias = self.resolve(language)
        try:
            lexer = get_lexer_by_name(alias)
            # get_tokens would rewrite CRLF and CR to LF and drop a leading BOM
            chunks = list(self._merge(
                (self.color_for(token_type), value)
                for _, token_type, value in lexer.get_tokens_unprocessed(code)
            ))
        except ClassNotFound as e:
            raise UnknownLanguageError(language) from e
        except Exception as e:
            raise RenderError(f"Failed to highlight {language}: {e}") from e

        return "".join(format_chunk(color, text) for color, text in chunks)

    @staticmethod
    def _merge(tokens: Iterable[tuple[str | None, str]]) -> Iterator[tuple[str | None, str]]:
        """Join neighbouring tokens that share a colour."""
        current_color, parts = None, []
        for color, value in tokens:
            if not value:
                continue
            if parts and color != current_color:
                yield current_color, "".join(parts)
                parts = []
            current_color = color
            parts.append(value)
        if parts:
            yield current_color, "".join(parts)


def format_chunk(color: str | None, text: str) -> str:
    """
    Escape text and wrap it in a coloured span.

    Spans are closed before each line break (LF, CRLF or CR) so every line
    is self-contained. Pygments' HtmlFormatter is not used because it also
    emits font weight and style, and only the foreground colour is wanted.
    """
    if color is None:
        return html.escape(text)
    return "".join(
        part if LINE_BREAK_PATTERN.fullmatch(part)
        else f'<span style="color:{color};">{html.escape(part)}</span>'
        for part in LINE_BREAK_PATTERN.split(text)
        if part
    )
