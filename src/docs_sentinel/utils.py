import os
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


def atomic_write(path: Path, content: str) -> None:
    """
    Writes content to a file atomically by writing to a temporary file
    and then renaming it to the target path.
    """
    temp_path = path.with_suffix(path.suffix + ".tmp")
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except OSError:
        if temp_path.exists():
            try:
                temp_path.unlink()
            except OSError as e:
                logger.debug(f"Failed to cleanup temp file {temp_path}: {e}")
        raise


def parse_iso_date(value: Union[str, date, None]) -> Optional[date]:
    """Parse a YYYY-MM-DD string (or pass a date through). None if invalid."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def days_between(earlier: date, later: date) -> int:
    return (later - earlier).days
