# idfc_helper/utilities/config_logging.py
from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path
from typing import Any, Dict, Optional

LOG_DIR_ENV = "IDFC_HELPER_LOG_DIR"
LOG_LEVEL_ENV = "IDFC_HELPER_LOG_LEVEL"


def build_logging_config(
    log_dir: Optional[Path] = None, console_level: Optional[str] = None
) -> Dict[str, Any]:
    """Return a dictConfig mapping: terse console output plus a rotating debug log."""
    log_dir = Path(log_dir or os.environ.get(LOG_DIR_ENV, "logs"))
    console_level = (console_level or os.environ.get(LOG_LEVEL_ENV, "INFO")).upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
            "verbose": {
                "format": "%(asctime)s %(levelname)s %(name)s "
                "[%(process)d:%(threadName)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": console_level,
                "formatter": "simple",
                "stream": "ext://sys.stderr",
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "verbose",
                "filename": str(log_dir / "idfc_helper.log"),
                "maxBytes": 5_000_000,
                "backupCount": 5,
                "encoding": "utf-8",
            },
        },
        "loggers": {
            # root logger
            "": {
                "level": "DEBUG",
                "handlers": ["console", "file"],
            },
            # openpyxl warns about every unsupported style/extension in bank exports
            "openpyxl": {"level": "ERROR", "propagate": True},
            "pdfminer": {"level": "WARNING", "propagate": True},
        },
    }


def configure_logging(verbose: bool = False, log_dir: Optional[Path] = None) -> None:
    """Apply the logging config, creating the log directory first."""
    config = build_logging_config(log_dir, "DEBUG" if verbose else None)
    Path(config["handlers"]["file"]["filename"]).parent.mkdir(
        parents=True, exist_ok=True
    )
    logging.config.dictConfig(config)
