"""Structured rich text produced by the markup parser."""

from __future__ import annotations

from dataclasses import dataclass

from dume.api.types import FontStyle, TextStyle, Weight

_MARKUP_SPECIALS = frozenset("@{}%")

# Directives emitted towards the engine parser, outermost first.
ENGINE_DIRECTIVES = ("font", "size", "italic", "bold")


@dataclass(frozen=True, slots=True)
class TextSpan:
    """Run of literal text sharing one style."""

    text: str
    style: TextStyle


@dataclass(frozen=True, slots=True)
class RichText:
    spans: tuple[TextSpan, ...]
    default_style: TextStyle

    @property
    def plain_text(self) -> str:
        return "".join(span.text for span in self.spans)

    def to_engine_markup(self) -> tuple[str, dict[str, str]]:
        """Render canonical markup for the engine parser.

        Text containing markup metacharacters is passed as a variable so the
        engine never re-interprets resolved values. Returns the markup and the
        variable table it references.
        """
        parts: list[str] = []
        variables: dict[str, str] = {}
        for span in self.spans:
            if any(ch in _MARKUP_SPECIALS for ch in span.text):
                name = f"v{len(variables)}"
                variables[name] = span.text
                body = f"%{name}"
            else:
                body = span.text
            parts.append(_wrap(body, span.style, self.default_style))
        return "".join(parts), variables


def _wrap(body: str, style: TextStyle, base: TextStyle) -> str:
    # Innermost first, so the outermost directive is the font family.
    if style.weight != base.weight and style.weight >= Weight.BOLD:
        body = f"@bold{{{body}}}"
    if style.style != base.style and style.style == FontStyle.ITALIC:
        body = f"@italic{{{body}}}"
    if style.size != base.size:
        # Shortest repr round-trips exactly through the engine's float parser.
        body = f"@size{{{float(style.size)!r}}}{{{body}}}"
    if style.family != base.family:
        body = f"@font{{{style.family}}}{{{body}}}"
    return body


def merge_spans(spans: list[TextSpan]) -> tuple[TextSpan, ...]:
    """Drop empty text and join adjacent text runs with equal style."""
    merged: list[TextSpan] = []
    for span in spans:
        if not span.text:
            continue
        if merged and merged[-1].style == span.style:
            merged[-1] = TextSpan(merged[-1].text + span.text, span.style)
            continue
        merged.append(span)
    return tuple(merged)


__all__ = ["ENGINE_DIRECTIVES", "RichText", "TextSpan", "merge_spans"]
