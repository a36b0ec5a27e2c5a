from __future__ import annotations

import re

from dume.api.types import Color, TextStyle
from dume.text.markup import parse_markup
from dume.text.rich_text import ENGINE_DIRECTIVES, TextSpan, merge_spans


def test_merge_spans_joins_equal_styles_and_drops_empty_runs() -> None:
    style = TextStyle()
    other = TextStyle(size=20.0)

    merged = merge_spans(
        [TextSpan("a", style), TextSpan("", other), TextSpan("b", style), TextSpan("c", other)]
    )

    assert merged == (TextSpan("ab", style), TextSpan("c", other))


def test_engine_markup_wraps_styled_runs() -> None:
    rich = parse_markup("plain @bold{@italic{hot}} @size{30}{big}")

    markup, variables = rich.to_engine_markup()

    assert markup == "plain @italic{@bold{hot}} @size{30.0}{big}"
    assert variables == {}


def test_engine_markup_uses_only_directives_the_engine_parses() -> None:
    rich = parse_markup(
        "@font{Serif}{a @size{14}{b @bold{c @italic{d}}}} %name",
        TextStyle(family="Sans"),
        resolver=lambda name: "@icon{sun}",
    )

    markup, variables = rich.to_engine_markup()

    assert set(re.findall(r"@(\w+)", markup)) <= set(ENGINE_DIRECTIVES)
    assert variables == {"v0": " @icon{sun}"}


def test_engine_markup_keeps_sizes_exact() -> None:
    rich = parse_markup("@size{10.123456}{x}")

    markup, _ = rich.to_engine_markup()

    assert markup == "@size{10.123456}{x}"
    assert float(re.search(r"@size\{([^}]*)\}", markup).group(1)) == rich.spans[0].style.size


def test_engine_markup_passes_metacharacters_as_variables() -> None:
    rich = parse_markup("Total: %amount", resolver=lambda name: "100% @bold{free}")

    markup, variables = rich.to_engine_markup()

    assert markup == "%v0"
    assert variables == {"v0": "Total: 100% @bold{free}"}


def test_engine_markup_keeps_default_style_unwrapped() -> None:
    base = TextStyle(family="Merriweather", size=16.0, color=Color(0, 0, 0))
    rich = parse_markup("hello", base)

    assert rich.to_engine_markup() == ("hello", {})
