from __future__ import annotations

import logging

import pytest

from dume.runtime.errors import query_optional


def test_query_result_is_returned() -> None:
    logger = logging.getLogger("dume.test.queries")

    assert query_optional(logger, "display_query_failed", lambda: 0x5500, None) == 0x5500


def test_tolerated_failure_returns_fallback_and_logs_traceback(caplog) -> None:
    logger = logging.getLogger("dume.test.queries")

    def _unsupported() -> int:
        raise OSError("no display connection")

    with caplog.at_level(logging.DEBUG, logger="dume.test.queries"):
        value = query_optional(logger, "display_query_failed", _unsupported, None)

    assert value is None
    (record,) = caplog.records
    assert record.getMessage() == "display_query_failed"
    assert record.exc_info is not None
    assert isinstance(record.exc_info[1], OSError)


def test_other_failures_propagate() -> None:
    logger = logging.getLogger("dume.test.queries")

    def _bug() -> int:
        raise KeyError("missing")

    with pytest.raises(KeyError):
        query_optional(logger, "display_query_failed", _bug, None)
