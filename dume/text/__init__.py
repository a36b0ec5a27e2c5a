"""Rich-text markup parsing."""

from dume.text.markup import MarkupResolver, parse_markup
from dume.text.rich_text import RichText, TextSpan

__all__ = [
    "MarkupResolver",
    "RichText",
    "TextSpan",
    "parse_markup",
]
