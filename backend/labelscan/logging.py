import logging
import sys
from typing import Optional


LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)


def configure_logging(level: Optional[str] = None) -> None:
    root = logging.getLogger()
    if root.handlers:
        return
    if level is None:
        from labelscan.config import settings

        level = settings.log_level
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "labelscan")
