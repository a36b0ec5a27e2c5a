"""Text markup parser.

Directives start with ``@`` followed by a name, an optional argument in
braces and a body in braces::

    @bold{bold text} plain text
    @italic{italic text @bold{italic and bold}}
    @size{30}{large text} @font{Merriweather}{serif text}

The directive set is exactly what the engine-side parser understands, so
parsed text can always be handed to ``dume_parse_markup``.

User-provided strings are interpolated with variables: ``%city_name`` is
replaced by whatever the resolver returns for ``city_name``. Resolved values
are literal text and are never parsed as markup.

Offsets in ``MarkupSyntaxError`` are byte offsets into the UTF-8 encoding of
the markup.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from dume.api.errors import MarkupSyntaxError
from dume.api.types import FontStyle, TextStyle, Weight
from dume.text.rich_text import RichText, TextSpan, merge_spans

MarkupResolver = Callable[[str], bytes | str | None]

_TOKEN_RE = re.compile(rb"@|\{|\}|[^@{}]+")
_VARIABLE_RE = re.compile(r"%(\w+)")

logger = logging.getLogger("dume.text.markup")


class _Kind(Enum):
    AT = "'@'"
    LBRACE = "'{'"
    RBRACE = "'}'"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class _Token:
    kind: _Kind
    text: str
    offset: int


# Directive name -> whether it takes an argument before its body.
_DIRECTIVES: dict[str, bool] = {
    "bold": False,
    "italic": False,
    "size": True,
    "font": True,
}


def _tokenize(data: bytes) -> list[_Token]:
    tokens: list[_Token] = []
    for match in _TOKEN_RE.finditer(data):
        raw = match.group()
        if raw == b"@":
            kind = _Kind.AT
        elif raw == b"{":
            kind = _Kind.LBRACE
        elif raw == b"}":
            kind = _Kind.RBRACE
        else:
            kind = _Kind.TEXT
        # Delimiters are ASCII, so text tokens always hold whole code points.
        tokens.append(_Token(kind, raw.decode("utf-8"), match.start()))
    return tokens


class _VariableCache:
    """Resolve each distinct variable name at most once per parse."""

    def __init__(self, resolver: MarkupResolver | None) -> None:
        self._resolver = resolver
        self._values: dict[str, str] = {}

    def get(self, name: str) -> str:
        cached = self._values.get(name)
        if cached is not None:
            return cached
        raw = self._resolver(name) if self._resolver is not None else None
        if raw is None:
            value = ""
        elif isinstance(raw, (bytes, bytearray, memoryview)):
            value = bytes(raw).decode("utf-8", errors="replace")
        else:
            value = str(raw)
        if not value:
            logger.debug("markup_variable_empty name=%s", name)
        self._values[name] = value
        return value


class _Parser:
    def __init__(self, data: bytes, resolver: MarkupResolver | None) -> None:
        self._tokens = _tokenize(data)
        self._end = len(data)
        self._cursor = 0
        self._spans: list[TextSpan] = []
        self.variables = _VariableCache(resolver)

    def parse(self, style: TextStyle) -> tuple[TextSpan, ...]:
        self._content(style, opener=None)
        return merge_spans(self._spans)

    def _peek(self) -> _Token | None:
        if self._cursor < len(self._tokens):
            return self._tokens[self._cursor]
        return None

    def _next(self) -> _Token | None:
        token = self._peek()
        if token is not None:
            self._cursor += 1
        return token

    def _offset(self, token: _Token | None) -> int:
        return self._end if token is None else token.offset

    def _content(self, style: TextStyle, *, opener: _Token | None) -> None:
        while True:
            token = self._peek()
            if token is None:
                if opener is not None:
                    raise MarkupSyntaxError("unterminated directive body", opener.offset)
                return
            if token.kind is _Kind.TEXT:
                self._cursor += 1
                self._spans.append(TextSpan(self._interpolate(token.text), style))
            elif token.kind is _Kind.AT:
                self._directive(style)
            elif token.kind is _Kind.RBRACE:
                if opener is None:
                    raise MarkupSyntaxError("unmatched '}'", token.offset)
                self._cursor += 1
                return
            else:
                raise MarkupSyntaxError("expected text or '@', found '{'", token.offset)

    def _directive(self, style: TextStyle) -> None:
        at = self._tokens[self._cursor]
        self._cursor += 1
        name_token = self._next()
        if name_token is None or name_token.kind is not _Kind.TEXT:
            raise MarkupSyntaxError("expected directive name after '@'", at.offset)
        name = name_token.text.strip()
        if name not in _DIRECTIVES:
            raise MarkupSyntaxError(f"unknown directive '{name}'", at.offset)

        argument = ""
        argument_offset = name_token.offset
        if _DIRECTIVES[name]:
            argument, argument_offset = self._argument(name)

        child_style = _apply_directive(name, argument, argument_offset, style)
        opener = self._next()
        if opener is None or opener.kind is not _Kind.LBRACE:
            raise MarkupSyntaxError(f"expected '{{' after '@{name}'", self._offset(opener))
        self._content(child_style, opener=opener)

    def _argument(self, name: str) -> tuple[str, int]:
        opener = self._next()
        if opener is None or opener.kind is not _Kind.LBRACE:
            raise MarkupSyntaxError(f"expected argument for '@{name}'", self._offset(opener))
        value = self._next()
        if value is None:
            raise MarkupSyntaxError("unterminated argument", opener.offset)
        if value.kind is not _Kind.TEXT:
            raise MarkupSyntaxError(
                f"expected text inside argument, found {value.kind.value}", value.offset
            )
        closer = self._next()
        if closer is None or closer.kind is not _Kind.RBRACE:
            raise MarkupSyntaxError("unterminated argument", opener.offset)
        return value.text.strip(), value.offset

    def _interpolate(self, text: str) -> str:
        if "%" not in text:
            return text
        return _VARIABLE_RE.sub(lambda match: self.variables.get(match.group(1)), text)


def _apply_directive(name: str, argument: str, offset: int, style: TextStyle) -> TextStyle:
    if name == "bold":
        return replace(style, weight=Weight.BOLD)
    if name == "italic":
        return replace(style, style=FontStyle.ITALIC)
    if name == "font":
        if not argument:
            raise MarkupSyntaxError("empty font family", offset)
        if "%" in argument:
            # The engine expands variables inside arguments too.
            raise MarkupSyntaxError("font family must not contain '%'", offset)
        return replace(style, family=argument)
    if name == "size":
        try:
            size = float(argument)
        except ValueError:
            raise MarkupSyntaxError(f"invalid size {argument!r}", offset) from None
        if not math.isfinite(size) or size <= 0:
            raise MarkupSyntaxError(f"invalid size {argument!r}", offset)
        return replace(style, size=size)
    raise MarkupSyntaxError(f"unknown directive '{name}'", offset)


def parse_markup(
    markup: str,
    default_style: TextStyle | None = None,
    resolver: MarkupResolver | None = None,
) -> RichText:
    """Parse ``markup`` into rich text without touching the engine."""
    style = default_style if default_style is not None else TextStyle()
    parser = _Parser(markup.encode("utf-8"), resolver)
    spans = parser.parse(style)
    return RichText(spans=spans, default_style=style)


__all__ = ["MarkupResolver", "parse_markup"]
