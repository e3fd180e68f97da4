"""
File operation utilities.

This module provides utilities for reading and writing the text files
behind the durable storage slots and the exported CSV artifacts.
"""

import logging
import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)


def read_text(filepath: Path) -> Optional[str]:
    """
    Read a UTF-8 text file.

    Args:
        filepath: Path to the file

    Returns:
        File contents, or None if the file does not exist

    Raises:
        OSError: If the file exists but cannot be read
    """
    if not filepath.exists():
        logger.debug(f"File not found: {filepath}")
        return None

    with open(filepath, 'r', encoding='utf-8') as f:
        text = f.read()

    logger.debug(f"Read file: {filepath}")
    return text


def write_text_atomic(text: str, filepath: Path):
    """
    Replace a text file's contents in one step.

    The text is written to a temporary file in the same directory and
    moved over the target, so readers never see a half-written file.

    Raises:
        OSError: If the file cannot be written
    """
    filepath.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        dir=str(filepath.parent),
        prefix=f".{filepath.name}.",
        suffix=".tmp"
    )
    try:
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
        os.replace(tmp_name, filepath)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.debug(f"Wrote file: {filepath}")


def save_text(text: str, filepath: Path) -> bool:
    """
    Save text to a file.

    Args:
        text: Text to save
        filepath: Path to save the file

    Returns:
        True if save successful, False otherwise

    Examples:
        >>> save_text("Date,Time", Path("output/exports/test.csv"))
        True
    """
    try:
        write_text_atomic(text, filepath)
        return True

    except OSError as e:
        logger.error(f"Failed to save file {filepath}: {e}", exc_info=True)
        return False


def generate_filename(prefix: str, extension: str, today: Optional[date] = None) -> str:
    """
    Generate a date-stamped filename.

    Args:
        prefix: Filename prefix
        extension: File extension (without dot)
        today: Date to stamp (defaults to the current local date, not the
            UTC date)

    Returns:
        Filename with date stamp (e.g., "prefix_2024-03-01.ext")

    Examples:
        >>> generate_filename("learning_walks", "csv", date(2024, 3, 1))
        'learning_walks_2024-03-01.csv'
    """
    stamp = (today or date.today()).strftime("%Y-%m-%d")
    return f"{prefix}_{stamp}.{extension}"
