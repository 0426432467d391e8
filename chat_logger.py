"""
chat_logger.py - Logging setup for the catalog chat service

Sets up Python logging with:
- File handler: logs/YYYY-MM-DD/chat.txt (one folder per day)
- Console handler: stdout
- Log level from the LOG_LEVEL env variable
- Helpers that keep user text and access tokens out of the logs verbatim
"""

import logging
from datetime import datetime
from pathlib import Path

from config.settings import LOG_LEVEL

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class MillisecondFormatter(logging.Formatter):
    """Formatter whose timestamps end in .mmm."""

    def formatTime(self, record, datefmt=None):
        if not datefmt:
            return super().formatTime(record, datefmt)
        s = datetime.fromtimestamp(record.created).strftime(datefmt)
        ms = int((record.created - int(record.created)) * 1000)
        return f"{s}.{ms:03d}"


def sanitize_log_string(text: str, max_length: int = 100) -> str:
    """
    Make user-supplied text safe to log.

    Control characters become spaces (no forged log lines) and long text is
    cut at *max_length* characters.
    """
    if not text:
        return text
    text = "".join(char if ord(char) >= 32 else " " for char in text)
    if len(text) > max_length:
        text = text[:max_length] + "..."
    return text


def mask_token(token: str) -> str:
    """Keep the last 4 characters of a secret, hide the rest."""
    if not token:
        return token
    if len(token) <= 4:
        return "***"
    return "***" + token[-4:]


def setup_logger(name: str = "catalog_chat", log_level: str = "INFO") -> logging.Logger:
    """
    Configure and return a logger with file and console handlers.

    Args:
        name: Logger name
        log_level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Already configured
    if logger.handlers:
        return logger

    formatter = MillisecondFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    # ─── File Handler (folder per day) ───
    today = datetime.now().strftime("%Y-%m-%d")
    log_dir = Path("logs") / today
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_dir / "chat.txt", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # ─── Console Handler ───
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: str = "catalog_chat") -> logging.Logger:
    """Get the named logger, configuring it on first use."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        setup_logger(name, LOG_LEVEL)
    return logger
