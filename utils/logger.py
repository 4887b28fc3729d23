# utils/logger.py
import logging
import sys
from config.paths import LOG_PATH

# Ensure directory exists
LOG_PATH.parent.mkdir(parents=True, exist_ok=True)

logger = logging.getLogger("lesson_scheduler")
logger.setLevel(logging.INFO)

# Package loggers created with logging.getLogger(__name__)
PACKAGE_LOGGERS = ("api", "core", "scheduler", "utils")

# Prevent duplicate handlers if imported multiple times
if not logger.handlers:
    # File handler
    file_handler = logging.FileHandler(LOG_PATH, encoding="utf-8")
    file_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)

    # Stream handler (stdout -> docker logs)
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_formatter = logging.Formatter("[%(levelname)s] %(message)s")
    stream_handler.setFormatter(stream_formatter)

    # Add both handlers to the application logger and the package loggers
    for name in ("lesson_scheduler",) + PACKAGE_LOGGERS:
        target = logging.getLogger(name)
        target.setLevel(logging.INFO)
        target.addHandler(file_handler)
        target.addHandler(stream_handler)
