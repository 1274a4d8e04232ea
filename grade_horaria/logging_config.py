import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "grade_horaria"
LOG_FILE = "grade_horaria.log"

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# requests -> urllib3 logs every backend connection
QUIET_LOGGERS = ("urllib3",)


def setup_logging(log_dir: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """
    Console + rotating file (LOG_DIR/grade_horaria.log) on the package logger,
    so every "grade_horaria.*" module logger ends up in both.
    Defaults come from LOG_DIR / LOG_LEVEL. Safe to call more than once.
    """
    log_dir = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if logger.handlers:
        return logger

    log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(fmt=FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)

    file_handler = RotatingFileHandler(
        log_dir / LOG_FILE,
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    logger.addHandler(console)
    logger.addHandler(file_handler)
    return logger
