"""Process-wide logging: console plus a rotating log file."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path


def configure_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    *,
    console: bool = True,
) -> logging.Logger:
    """Route all records to stderr (unless console=False) and, if given, a rotating file."""
    handlers: list[logging.Handler] = [logging.StreamHandler()] if console else []
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_path, maxBytes=2 * 1024 * 1024, backupCount=3,  # 2 MB × 3 files
                encoding="utf-8",
            )
        )
    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        handlers=handlers,
        force=True,
    )
    return logging.getLogger("picklebracket")
