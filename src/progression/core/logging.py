"""Logging utilities and the in-process host logger"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..host.services import HostLogger

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")


class JsonlHandler(logging.Handler):
    """Handler that outputs structured logs in JSONL format"""

    def __init__(self, filepath: str):
        super().__init__()
        self.filepath = Path(filepath)
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record as JSON line"""
        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.format(record)

        with open(self.filepath, "a", encoding="utf-8") as f:
            f.write(json.dumps(log_entry) + "\n")


def setup_logging(
    name: str = "progression",
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Setup console logging and, if log_file is given, a JSONL log"""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        jsonl_handler = JsonlHandler(str(log_file))
        jsonl_handler.setLevel(level)
        logger.addHandler(jsonl_handler)

    return logger


class LoggingHostLogger(HostLogger):
    """HostLogger backed by a standard library logger"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("progression.host")

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def success(self, message: str) -> None:
        self.logger.log(SUCCESS, message)
