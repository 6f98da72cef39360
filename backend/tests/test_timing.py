import logging

import pytest

from labelscan.utils.timing import Span, _format_duration, time_span


def test_format_duration():
    assert _format_duration(750) == "750ms"
    assert _format_duration(12500) == "12.5s"


def test_time_span_yields_span_and_logs_fields(caplog):
    with caplog.at_level(logging.INFO, logger="labelscan.utils.timing"):
        with time_span("ocr.extract", engine="fake") as span:
            assert isinstance(span, Span)
            span.add(words=3)
    message = caplog.records[-1].getMessage()
    assert message.startswith("[TIMING] ocr.extract elapsed_ms=")
    assert "engine=fake" in message
    assert "words=3" in message


def test_time_span_logs_when_block_raises(caplog):
    with caplog.at_level(logging.INFO, logger="labelscan.utils.timing"):
        with pytest.raises(ValueError):
            with time_span("analysis.total"):
                raise ValueError("boom")
    assert any("[TIMING] analysis.total" in r.getMessage() for r in caplog.records)
