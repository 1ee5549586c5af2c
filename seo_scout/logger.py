# === FILE: seo_scout/logger.py ===
"""Project-wide logging configuration for **SEO Scout**.

Highlights
----------
* Unified format for console and optional file output (with rotation).
* Single, importable instance :data:`logger`, simply::

      from seo_scout.logger import logger
      logger.info("Crawl started")
* Re‑configurable at runtime via :func:`configure` or an explicit
  :class:`LogConfig` handed around by the CLI.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

# --------------------------------------------------------------------------- #
# Constants & basic types                                                     #
# --------------------------------------------------------------------------- #

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "SEOScout"

_LevelT = Union[int, str]


# --------------------------------------------------------------------------- #
# Helper builders                                                             #
# --------------------------------------------------------------------------- #


def _console_handler(fmt: str) -> logging.StreamHandler:
    # stdout is reserved for JSON/CSV output
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _file_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #


def configure(
    *,
    level: _LevelT = "WARNING",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Point the ``SEOScout`` logger at stderr and, optionally, a rotating file.

    Parameters
    ----------
    level
        Threshold for the project logger, name or number.
    log_file
        Rotating log file; *None* keeps output on the console.
    log_format
        :class:`logging.Formatter` pattern shared by both handlers.
    replace_handlers
        Drop previously installed handlers first (the CLI reconfigures once
        per invocation).
    """
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        lg.handlers.clear()

    lg.addHandler(_console_handler(log_format))

    if log_file is not None:
        lg.addHandler(_file_handler(log_file, log_format))

    lg.propagate = False
    return lg


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the project logger or one of its children (``SEOScout.<name>``)."""
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


@dataclass(slots=True, frozen=True)
class LogConfig:
    """Explicit logging settings passed from the CLI down to the crawler."""

    level: _LevelT = "WARNING"
    log_file: str | Path | None = None
    log_format: str = _DEFAULT_FORMAT

    @classmethod
    def from_verbose(cls, verbose: bool, **kwargs) -> LogConfig:
        """Map the ``--verbose`` switch onto a DEBUG level."""
        if verbose:
            kwargs["level"] = "DEBUG"
        return cls(**kwargs)

    def apply(self) -> logging.Logger:
        return configure(level=self.level, log_file=self.log_file, log_format=self.log_format)


# --------------------------------------------------------------------------- #
# Ready‑to‑use instance                                                       #
# --------------------------------------------------------------------------- #

logger: logging.Logger = configure()

__all__ = ["logger", "configure", "get_logger", "LogConfig"]
