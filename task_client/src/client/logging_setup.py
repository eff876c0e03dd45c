from __future__ import annotations

import logging
import sys
from typing import Union


class _LibraryNoiseFilter(logging.Filter):
    """
    Keep client logs, but only let the HTTP stack through at WARNING+.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(("httpx", "httpcore")):
            return record.levelno >= logging.WARNING
        return True


# PUBLIC_INTERFACE
def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure root logging with a single stderr handler.

    Call this once, early, from the application embedding the client.
    Unknown level names fall back to INFO.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        level = resolved if isinstance(resolved, int) else logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(fmt)
    handler.addFilter(_LibraryNoiseFilter())
    root.addHandler(handler)
