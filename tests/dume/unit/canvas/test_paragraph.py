from __future__ import annotations

import pytest

from dume.api.errors import InvalidState, UseAfterFree
from dume.api.types import TextLayout, Vec2


@pytest.fixture
def paragraph(canvas):
    text = canvas.parse_markup("Hello @bold{world}")
    return canvas.create_paragraph(text, TextLayout(max_dimensions=Vec2(200.0, 100.0)))


def test_extents_queried_at_creation(engine, paragraph) -> None:
    assert paragraph.width == 120.0
    assert paragraph.height == 24.0
    assert paragraph.size == Vec2(120.0, 24.0)


def test_resize_reflows_and_refreshes_extents(engine, paragraph) -> None:
    engine.paragraph_extent = (80.0, 48.0)

    paragraph.resize(100.0, 100.0)

    ((_, _, new_max),) = engine.calls_named("paragraph_resize")
    assert new_max == Vec2(100.0, 100.0)
    assert paragraph.layout.max_dimensions == Vec2(100.0, 100.0)
    assert (paragraph.width, paragraph.height) == (80.0, 48.0)
    assert engine.names().count("parse_markup") == 1


def test_resize_to_same_dimensions_skips_engine(engine, paragraph) -> None:
    paragraph.resize(200.0, 100.0)

    assert engine.calls_named("paragraph_resize") == []


def test_resize_rejects_negative_dimensions(paragraph) -> None:
    with pytest.raises(ValueError):
        paragraph.resize(-1.0, 10.0)


def test_free_is_idempotent(engine, paragraph) -> None:
    paragraph.free()
    paragraph.free()

    assert len(engine.calls_named("paragraph_free")) == 1
    assert paragraph.freed
    with pytest.raises(InvalidState):
        _ = paragraph.width


def test_freed_paragraph_not_freed_again_on_close(engine, canvas, paragraph) -> None:
    paragraph.free()
    canvas.close()

    assert len(engine.calls_named("paragraph_free")) == 1


def test_paragraph_unusable_after_close(canvas, paragraph) -> None:
    canvas.close()

    with pytest.raises(UseAfterFree):
        paragraph.resize(10.0, 10.0)
