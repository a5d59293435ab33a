"""
Logging setup for the Central de Prazos API.

Everything goes to stdout and to a rotating logs/prazos.log (LOG_DIR to move it).
Deadline actions written through backend.utils.action_log use the
"prazos.actions" logger and end up in the same handlers.
"""
import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_DIR = Path(os.getenv("LOG_DIR", Path(__file__).resolve().parent.parent.parent / "logs"))
LOG_FILE_NAME = "prazos.log"
MAX_BYTES = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 5

CONSOLE_HANDLER_NAME = "prazos.console"
FILE_HANDLER_NAME = "prazos.file"

FORMAT_CONSOLE = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
FORMAT_FILE = "%(asctime)s | %(levelname)-7s | %(name)s | %(filename)s:%(lineno)d | %(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"

QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "apscheduler", "aiomysql")


def _has_handler(logger: logging.Logger, name: str) -> bool:
    return any(h.get_name() == name for h in logger.handlers)


def setup_logging(level: str = "INFO", log_dir: Optional[Path] = None) -> None:
    """
    Attach the prazos console and file handlers to the root logger.
    Calling it again only updates the level.
    """
    level_value = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level_value)

    if not _has_handler(root, CONSOLE_HANDLER_NAME):
        console = logging.StreamHandler(sys.stdout)
        console.set_name(CONSOLE_HANDLER_NAME)
        console.setFormatter(logging.Formatter(FORMAT_CONSOLE, datefmt=DATE_FMT))
        root.addHandler(console)

    if not _has_handler(root, FILE_HANDLER_NAME):
        directory = Path(log_dir) if log_dir is not None else LOG_DIR
        log_file = directory / LOG_FILE_NAME
        try:
            directory.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=MAX_BYTES,
                backupCount=BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError:
            root.warning("Could not open log file %s; file logging disabled", log_file)
        else:
            file_handler.set_name(FILE_HANDLER_NAME)
            file_handler.setFormatter(logging.Formatter(FORMAT_FILE, datefmt=DATE_FMT))
            root.addHandler(file_handler)

    for handler in root.handlers:
        if handler.get_name() in (CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME):
            handler.setLevel(level_value)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
