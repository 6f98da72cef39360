"""Timing spans for analysis and OCR steps."""

import time
from contextlib import contextmanager
from typing import Iterator

from labelscan.logging import get_logger

logger = get_logger(__name__)

# Prefix for all timing logs so they are easy to grep
_TIMING_PREFIX = "[TIMING]"


def _format_duration(ms: int) -> str:
    """12500 -> '12.5s', 750 -> '750ms'."""
    if ms >= 1000:
        return f"{ms / 1000:.1f}s"
    return f"{ms}ms"


class Span:
    def __init__(self, name: str) -> None:
        self.name = name
        self.started = time.perf_counter()
        self.fields: dict[str, object] = {}

    @property
    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self.started) * 1000)

    def add(self, **fields: object) -> None:
        """Attach fields discovered inside the block (e.g. result counts) to the end log line."""
        self.fields.update(fields)


@contextmanager
def time_span(name: str, **extra: object) -> Iterator[Span]:
    span = Span(name)
    span.add(**extra)
    try:
        yield span
    finally:
        elapsed = span.elapsed_ms
        parts = [f"elapsed_ms={elapsed}", f"({_format_duration(elapsed)})"] + [
            f"{k}={v}" for k, v in span.fields.items()
        ]
        logger.info("%s %s %s", _TIMING_PREFIX, name, " ".join(parts))
