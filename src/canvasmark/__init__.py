"""CanvasMark - document core for a markdown editor with embedded drawings.

Pagination markers, structural diagnostics, drawing block placeholders and
the authoritative document state the editing surface mutates.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

__version__ = "0.1.0"


def setup_logging(
    log_dir: Path | None = None,
    level: str | None = None,
    *,
    log_to_file: bool = True,
) -> Path | None:
    """Configure logging to the console and, optionally, a rotating file.

    Arguments left as None are read from ``get_settings().app``.

    Args:
        log_dir: Directory for ``canvasmark.log``.
        level: Console log level name.
        log_to_file: Add the rotating file handler.

    Returns:
        Path of the log file, or None when only console logging is set up.
    """
    from canvasmark.config import get_settings

    app_config = get_settings().app
    if log_dir is None:
        log_dir = app_config.log_dir
    if level is None:
        level = app_config.log_level

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    log_file: Path | None = None
    if log_to_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "canvasmark.log"

        # File handler - detailed logging with rotation (10MB, keep 5 backups)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level.upper())
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        logging.info("Logging configured. Log file: %s", log_file.absolute())
    return log_file
