from __future__ import annotations

import pytest

from dume.api.errors import (
    InvalidState,
    MarkupSyntaxError,
    NotFound,
    ResourceExhausted,
    UseAfterFree,
)
from dume.api.types import Color, TextLayout, TextStyle, Vec2
from dume.canvas.canvas import Canvas


def test_init_passes_size_and_window(engine, window) -> None:
    canvas = Canvas(engine, 800, 600, window)

    assert engine.calls[0] == ("init", (800, 600, window))
    assert (canvas.width, canvas.height) == (800, 600)
    canvas.close()


def test_init_failure_raises(engine, window) -> None:
    engine.fail_init = True

    with pytest.raises(ResourceExhausted):
        Canvas(engine, 800, 600, window)


def test_invalid_size_rejected(engine, window) -> None:
    with pytest.raises(ValueError):
        Canvas(engine, 0, 600, window)
    assert engine.calls == []


def test_render_with_no_draws_is_valid(engine, canvas) -> None:
    canvas.render()
    canvas.render()

    assert engine.names()[-2:] == ["render", "render"]
    assert canvas.frame_index == 2


def test_resize_updates_dimensions(engine, canvas) -> None:
    canvas.resize(1024, 768)

    assert engine.calls_named("resize")[-1][1:] == (1024, 768)
    assert canvas.size == Vec2(1024.0, 768.0)


def test_draw_sprite_by_name(engine, canvas) -> None:
    handle = canvas.create_sprite_from_encoded("smiley", b"png")

    canvas.draw_sprite("smiley", Vec2(30.0, 30.0), 600.0)

    ((_, pos, width, sprite),) = engine.calls_named("draw_sprite")
    assert (pos, width) == (Vec2(30.0, 30.0), 600.0)
    assert sprite == handle.unwrap(canvas.token)


def test_draw_unknown_sprite_raises_not_found_and_canvas_stays_usable(engine, canvas) -> None:
    with pytest.raises(NotFound):
        canvas.draw_sprite("missing", Vec2(), 10.0)

    canvas.render()
    assert engine.calls_named("draw_sprite") == []


def test_sprite_size(canvas) -> None:
    canvas.create_sprite_from_rgba("tile", bytes(4 * 6 * 4), 4, 6)

    assert canvas.sprite_size("tile") == Vec2(4.0, 6.0)


def test_sprite_from_another_canvas_rejected(engine, window, canvas) -> None:
    other = Canvas(engine, 100, 100, window)
    foreign = other.create_sprite_from_encoded("icon", b"png")

    with pytest.raises(UseAfterFree):
        canvas.draw_sprite(foreign, Vec2(), 10.0)
    other.close()


def test_load_font(engine, canvas, tmp_path) -> None:
    font = tmp_path / "font.ttf"
    font.write_bytes(b"\x00\x01\x00\x00")

    canvas.load_font_file(font)

    assert engine.calls_named("load_font")[-1][1] == b"\x00\x01\x00\x00"
    with pytest.raises(ValueError):
        canvas.load_font(b"")


def test_path_fill_forwards_through_canvas(engine, canvas) -> None:
    canvas.solid_color(Color(10, 20, 30))
    canvas.begin_path()
    canvas.rect(Vec2(0.0, 0.0), Vec2(5.0, 5.0))

    assert canvas.fill() is True
    assert engine.names()[-2:] == ["solid_color", "fill"]


def test_stroke_without_path_raises_nothing_and_calls_nothing(engine, canvas) -> None:
    before = len(engine.calls)

    assert canvas.stroke() is False
    assert len(engine.calls) == before


def test_path_op_before_begin_path_raises(canvas) -> None:
    with pytest.raises(InvalidState):
        canvas.line_to(Vec2(1.0, 1.0))


def test_parse_markup_uses_canvas_default_style(engine, window) -> None:
    style = TextStyle(family="Merriweather", size=18.0)
    canvas = Canvas(engine, 100, 100, window, default_style=style)

    text = canvas.parse_markup("Hello @bold{world}")

    markup, default_style, values = engine.markups[-1]
    assert markup == b"Hello @bold{world}"
    assert default_style == style
    assert values == {}
    assert text.rich_text is not None
    assert text.rich_text.plain_text == "Hello world"
    canvas.close()


def test_parse_markup_resolves_variables_before_engine(engine, canvas) -> None:
    canvas.parse_markup("Welcome to %city", {"city": "@Paris"}.get)

    markup, _, values = engine.markups[-1]
    assert markup == b"%v0"
    assert values == {b"v0": "Welcome to @Paris".encode()}


def test_markup_the_engine_cannot_parse_never_reaches_it(engine, canvas) -> None:
    with pytest.raises(MarkupSyntaxError):
        canvas.parse_markup("@color{rgb(255,0,0)}{red} @icon{sun}")

    assert engine.markups == []


def test_engine_receives_exact_sizes(engine, canvas) -> None:
    canvas.parse_markup("@size{10.123456}{x}")

    markup, _, _ = engine.markups[-1]
    assert markup == b"@size{10.123456}{x}"


def test_text_consumed_by_create_paragraph(engine, canvas) -> None:
    text = canvas.parse_markup("hello")
    canvas.create_paragraph(text, TextLayout())

    with pytest.raises(InvalidState):
        canvas.create_paragraph(text, TextLayout())
    assert len(engine.calls_named("create_paragraph")) == 1


def test_create_paragraph_requires_layout(canvas) -> None:
    text = canvas.parse_markup("hello")

    with pytest.raises(TypeError):
        canvas.create_paragraph(text, {"maxDimensions": {"x": 1, "y": 1}})  # type: ignore[arg-type]
    assert not text.consumed


def test_free_text(engine, canvas) -> None:
    text = canvas.parse_markup("unused")

    canvas.free_text(text)

    assert engine.calls_named("text_free") == [(text._raw,)]
    canvas.close()
    assert len(engine.calls_named("text_free")) == 1


def test_draw_paragraph(engine, canvas) -> None:
    paragraph = canvas.create_paragraph(canvas.parse_markup("hi"), TextLayout())

    canvas.draw_paragraph(paragraph, Vec2(5.0, 6.0))

    ((_, pos, raw),) = engine.calls_named("draw_paragraph")
    assert pos == Vec2(5.0, 6.0)
    assert raw == paragraph.unwrap(canvas.token)


def test_transform_mirror_and_engine_stay_in_step(engine, canvas) -> None:
    canvas.translate(Vec2(10.0, 0.0))
    canvas.scale(2.0)
    canvas.set_scissor_rect(Vec2(0.0, 0.0), Vec2(50.0, 50.0))

    assert canvas.transform.to_screen(Vec2(1.0, 1.0)) == Vec2(12.0, 2.0)
    assert canvas.transform.scissor is not None
    assert engine.names()[-3:] == ["translate", "scale", "scissor_rect"]

    canvas.reset_transform()
    canvas.clear_scissor()
    assert canvas.transform.scissor is None
    assert engine.names()[-2:] == ["reset_transform", "clear_scissor"]


def test_invalid_scale_does_not_reach_engine(engine, canvas) -> None:
    with pytest.raises(ValueError):
        canvas.scale(0.0)
    assert engine.calls_named("scale") == []


def test_failed_engine_transform_leaves_mirror_unchanged(engine, canvas, monkeypatch) -> None:
    def _reject(*args):
        raise RuntimeError("engine rejected the call")

    monkeypatch.setattr(engine, "translate", _reject)
    monkeypatch.setattr(engine, "scissor_rect", _reject)

    with pytest.raises(RuntimeError):
        canvas.translate(Vec2(10.0, 0.0))
    with pytest.raises(RuntimeError):
        canvas.set_scissor_rect(Vec2(0.0, 0.0), Vec2(5.0, 5.0))

    assert canvas.transform.to_screen(Vec2(1.0, 1.0)) == Vec2(1.0, 1.0)
    assert canvas.transform.scissor is None


def test_close_frees_live_objects_then_context_once(engine, window) -> None:
    canvas = Canvas(engine, 100, 100, window)
    canvas.parse_markup("pending")
    canvas.create_paragraph(canvas.parse_markup("laid out"), TextLayout())

    canvas.close()
    canvas.close()

    tail = engine.names()[-3:]
    assert tail == ["text_free", "paragraph_free", "free"]
    assert engine.names().count("free") == 1
    assert canvas.closed


@pytest.mark.parametrize(
    "operation",
    [
        lambda cv: cv.render(),
        lambda cv: cv.resize(10, 10),
        lambda cv: cv.width,
        lambda cv: cv.begin_path(),
        lambda cv: cv.solid_color(Color(0, 0, 0)),
        lambda cv: cv.parse_markup("x"),
        lambda cv: cv.translate(Vec2()),
        lambda cv: cv.create_sprite_from_encoded("a", b"b"),
        lambda cv: cv.draw_sprite("a", Vec2(), 1.0),
        lambda cv: cv.load_font(b"font"),
    ],
)
def test_operations_after_close_raise_use_after_free(engine, window, operation) -> None:
    canvas = Canvas(engine, 100, 100, window)
    canvas.close()

    with pytest.raises(UseAfterFree):
        operation(canvas)


def test_context_manager_closes(engine, window) -> None:
    with Canvas(engine, 100, 100, window) as canvas:
        canvas.render()

    assert canvas.closed
    assert engine.names()[-1] == "free"
