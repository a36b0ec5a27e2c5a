from __future__ import annotations

from dume.runtime.json_codec import dumps_bytes, dumps_text


class _Opaque:
    def __repr__(self) -> str:
        return "<opaque>"


def test_dumps_text_handles_non_string_keys_and_unknown_values() -> None:
    text = dumps_text({1: _Opaque()}, sort_keys=True)

    assert text == '{"1":"<opaque>"}'


def test_dumps_bytes_pretty() -> None:
    assert dumps_bytes({"a": 1}, pretty=True) == b'{\n  "a": 1\n}'
