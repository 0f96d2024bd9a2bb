"""Logging configuration for Sorter Weighing.

Provides console output (INFO+, or DEBUG+ in verbose mode) and an
optional DEBUG-level log file. Implements FR-040.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO


def _setup_logging_base(
    log_path: Path | None,
    console_level: int,
    stream: TextIO | None = None,
) -> None:
    """Configure root logging with a given console level.

    Sets up a StreamHandler on stdout at ``console_level`` and, when
    ``log_path`` is given, a FileHandler at DEBUG level. Clears existing
    handlers first to prevent duplicate entries on repeated calls.

    Args:
        log_path: Path to the log file, or None for console only.
        console_level: Minimum level for console output.
        stream: Console stream; None means sys.stdout.
    """
    # Clear any existing handlers to prevent duplicates
    logging.root.handlers.clear()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))

    logging.root.setLevel(logging.DEBUG)
    logging.root.addHandler(console_handler)

    if log_path is None:
        return

    try:
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        logging.root.addHandler(file_handler)
    except OSError as e:
        # Log write failure to console but continue
        logging.warning(f"Failed to create log file at {log_path}: {e}")


def setup_logging(
    log_path: Path | None = None, stream: TextIO | None = None
) -> None:
    """
    Configure logging: console (INFO) and optional file (DEBUG).

    Args:
        log_path: Path to the log file, or None for console only.
        stream: Console stream; None means sys.stdout.

    Returns:
        None
    """
    _setup_logging_base(log_path, logging.INFO, stream)


def setup_verbose_logging(
    log_path: Path | None = None, stream: TextIO | None = None
) -> None:
    """
    Configure verbose logging: console (DEBUG) and optional file (DEBUG).

    Same as setup_logging() but every pipeline stage is echoed to the
    console.

    Args:
        log_path: Path to the log file, or None for console only.
        stream: Console stream; None means sys.stdout.

    Returns:
        None
    """
    _setup_logging_base(log_path, logging.DEBUG, stream)
