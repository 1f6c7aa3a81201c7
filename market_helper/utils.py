"""
Utility functions for text processing and logging.
"""
import logging
import re
from datetime import datetime, timezone
from typing import List, Optional


def init_logger(
    name: str = "market_helper",
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    log_file: Optional[str] = "market_helper.log"
) -> logging.Logger:
    """Initialize logger with console and optional file handlers."""
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return logger

    console_level_num = getattr(logging, console_level.upper(), logging.INFO)
    ch = logging.StreamHandler()
    ch.setLevel(console_level_num)

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_file:  # Create file handler only if log_file is provided
        file_level_num = getattr(logging, file_level.upper(), logging.DEBUG)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level_num)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger


def now_iso() -> str:
    """Return current UTC timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()


def split_lines(s: Optional[str]) -> List[str]:
    """Split text on line breaks, keeping only non-empty trimmed lines."""
    if not s:
        return []
    lines = []
    for line in re.split(r"\r?\n", s):
        line = line.strip()
        if line:
            lines.append(line)
    return lines


def unique_append(items: List[str], value: str) -> bool:
    """
    Append value to items unless it is empty or already present.

    Returns True when the value was added.
    """
    if not value or value in items:
        return False
    items.append(value)
    return True
