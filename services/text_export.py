from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Union
import logging

from domain.models import InventoryItem, StudentRecord
from shared.constants import DEFAULT_ENCODING
from shared.exceptions import StorageIOError

logger = logging.getLogger(__name__)


def _fmt_number(value) -> str:
    # 85.0 -> "85", 72.5 -> "72.5"
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_student(record: StudentRecord) -> str:
    return (
        f"ID: {record.id}, Name: {record.full_name}, "
        f"Score: {_fmt_number(record.score)}, Grade: {record.grade}"
    )


def format_inventory_item(item: InventoryItem) -> str:
    return (
        f"ID: {item.id}, Name: {item.name}, Quantity: {item.quantity}, "
        f"Added: {item.date_added:%Y-%m-%d %H:%M:%S}"
    )


def write_report(
    path: Union[str, Path],
    title: str,
    entities: Iterable,
    formatter: Callable[[object], str],
    encoding: str = DEFAULT_ENCODING,
) -> int:
    """Write a human-readable report to path, replacing prior content. Returns line count."""
    path = Path(path)
    lines = [f"=== {title} ==="]
    lines.extend(formatter(entity) for entity in entities)

    try:
        data = ("\n".join(lines) + "\n").encode(encoding)
    except (UnicodeError, LookupError) as e:
        raise StorageIOError(str(path), "encode", original_exception=e)

    try:
        path.write_bytes(data)
    except OSError as e:
        raise StorageIOError(str(path), "write", original_exception=e)

    logger.info(f"Wrote {len(lines) - 1} lines to {path}")
    return len(lines) - 1
