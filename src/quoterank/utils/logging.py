# utils/logging.py
import logging
import logging.config
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

LOGGER_NAME = "quoterank"

def setup_logging(
    log_dir: Optional[str] = None,
    console: bool = True,
    level: str = "INFO",
    quiet_console: bool = False,
    console_level: Optional[str] = None,
) -> Tuple[logging.Logger, logging.Logger]:
    """
    Configure the ``quoterank`` logger tree.

    Args:
        log_dir: Directory for the run's log file; ``None`` logs to console only
        console: Whether to enable console logging
        level: Level of the ``quoterank`` logger
        quiet_console: If True, only errors reach the console
        console_level: Separate level for console (defaults to level)

    Returns:
        ``(logger, summary_logger)``; the summary logger carries the one-line
        run totals and always reaches the console unless it is disabled.
    """
    handlers = {}
    log_path = None
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = str(Path(log_dir) / f"{LOGGER_NAME}_{ts}.log")
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "plain",
            "filename": log_path,
            "encoding": "utf-8",
            "mode": "w",
            "level": "DEBUG",
        }

    if console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "level": "ERROR" if quiet_console else (console_level or level).upper(),
        }

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {
                "format": "{asctime} {levelname:<7} {name} - {message}",
                "style": "{",
            },
            "console": {
                "format": "{levelname:<7} {message}",
                "style": "{",
            },
        },
        "handlers": handlers,
        "loggers": {
            LOGGER_NAME: {
                "level": level.upper(),
                "handlers": list(handlers),
                "propagate": False,
            },
        },
        "root": {"handlers": []},
    }

    logging.config.dictConfig(config)
    logging.captureWarnings(True)

    logger = logging.getLogger(LOGGER_NAME)

    summary_logger = logging.getLogger(f"{LOGGER_NAME}.summary")
    summary_logger.setLevel(logging.INFO)
    summary_logger.propagate = False
    for h in list(summary_logger.handlers):
        summary_logger.removeHandler(h)
        h.close()

    if log_path:
        fh_summary = logging.FileHandler(log_path, encoding="utf-8", mode="a")
        fh_summary.setLevel(logging.INFO)
        fh_summary.setFormatter(logging.Formatter("{asctime} SUMMARY - {message}", style="{"))
        summary_logger.addHandler(fh_summary)
    if console:
        sh_summary = logging.StreamHandler()
        sh_summary.setLevel(logging.INFO)
        sh_summary.setFormatter(logging.Formatter("{levelname:<7} {message}", style="{"))
        summary_logger.addHandler(sh_summary)

    if log_path:
        logger.info("Logging initialised. File: %s", log_path)
    return logger, summary_logger
