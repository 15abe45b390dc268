"""Centralized logging configuration for tierup.

Usage in any module:
    from tierup.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.info("Catalogs loaded")
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from ..config.settings import LOG_FILE

_CONFIGURED = False

LOG_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class SafeStreamHandler(logging.StreamHandler):
    """StreamHandler that survives consoles which cannot encode a message."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            stream = self.stream
            encoding = getattr(stream, "encoding", None) or "utf-8"
            try:
                stream.write(msg + self.terminator)
            except UnicodeEncodeError:
                stream.write(
                    msg.encode(encoding, errors="backslashreplace").decode(encoding)
                    + self.terminator
                )
            self.flush()
        except Exception:
            self.handleError(record)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
) -> None:
    """Attach console + file handlers to the ``tierup`` logger.

    Only the first call has an effect.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return
    _CONFIGURED = True

    root = logging.getLogger("tierup")
    root.setLevel(logging.DEBUG)

    fmt = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # stdout is reserved for command output (--json)
    console = SafeStreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(fmt)
    root.addHandler(console)

    target = log_file or LOG_FILE
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(target, encoding="utf-8", delay=True)
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)
    except OSError:
        # Read-only installs (e.g. hosted Streamlit) run without a log file.
        pass


def set_console_level(level: int) -> None:
    """Change the console verbosity after setup (CLI ``--verbose``)."""
    setup_logging()
    for handler in logging.getLogger("tierup").handlers:
        if isinstance(handler, SafeStreamHandler):
            handler.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger, configuring the ``tierup`` tree on first use."""
    setup_logging()
    return logging.getLogger(name)
