"""
Bulk import of delimited text records into an entity store.

Each non-blank line holds one record, fields in a fixed order
(``S001,John Doe,85``). Import is all-or-nothing: the first invalid line
aborts the whole batch with its typed error and line number, and nothing
from that batch reaches the store.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Type, Union
import csv
import io
import logging

from domain.models.schema import build_entity, field_specs
from repositories.entity_store import EntityStore
from shared.constants import DEFAULT_CSV_DELIMITER, DEFAULT_ENCODING
from shared.exceptions import (
    InvalidFormatError,
    InvalidValueError,
    MissingFieldError,
    StorageIOError,
)
from shared.types import E

logger = logging.getLogger(__name__)


def parse_delimited(
    lines: Iterable[str],
    entity_type: Type[E],
    field_names: Optional[Sequence[str]] = None,
    delimiter: str = DEFAULT_CSV_DELIMITER,
    defaults: Optional[Mapping[str, Any]] = None
) -> List[E]:
    """
    Parse delimited lines into validated entities.

    Args:
        lines: Text lines, one record each; blank lines are skipped
        entity_type: Entity class to build
        field_names: Column order; defaults to the entity's field order
        delimiter: Column separator
        defaults: Values for fields that are not columns (e.g. a timestamp)

    Returns:
        Entities in line order

    Raises:
        MissingFieldError: Too few columns or an empty required column
        InvalidFormatError: A line is not a valid delimited record or a column does not parse
        InvalidValueError: A column is out of range, or the delimiter is not one character
    """
    names = list(field_names or [spec.name for spec in field_specs(entity_type)])
    try:
        reader = csv.reader(lines, delimiter=delimiter)
    except TypeError as e:
        raise InvalidValueError("delimiter", delimiter, "must be a single character") from e

    entities: List[E] = []
    while True:
        try:
            row = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            raise InvalidFormatError(
                "record", str(e), "delimited record", context=f"Line {reader.line_num}"
            ) from e

        if not any(part.strip() for part in row):
            continue

        context = f"Line {reader.line_num}"
        if len(row) < len(names):
            raise MissingFieldError(context=context, message="Missing fields")

        raw = dict(defaults or {})
        raw.update(zip(names, (part.strip() for part in row)))
        entities.append(build_entity(entity_type, raw, context))

    return entities


def import_file(
    store: EntityStore,
    path: Union[str, Path],
    field_names: Optional[Sequence[str]] = None,
    delimiter: str = DEFAULT_CSV_DELIMITER,
    encoding: str = DEFAULT_ENCODING,
    defaults: Optional[Mapping[str, Any]] = None
) -> int:
    """
    Import a delimited file into a store, all or nothing.

    Returns:
        Number of entities added

    Raises:
        StorageIOError: If the file is missing or unreadable
        InvalidFormatError: If the file is not valid text in the given encoding
        DuplicateKeyError: If a key repeats within the file or exists in the store
        MissingFieldError, InvalidFormatError, InvalidValueError: First bad line
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise StorageIOError(str(path), "read", original_exception=e)

    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as e:
        line = data[:e.start].count(b"\n") + 1
        raise InvalidFormatError(
            "text", e.object[e.start:e.end], f"{encoding} text", context=f"Line {line}"
        ) from e
    except LookupError as e:
        raise StorageIOError(str(path), "decode", original_exception=e)

    lines = io.StringIO(text, newline="").readlines()

    entities = parse_delimited(lines, store.entity_type, field_names, delimiter, defaults)
    added = store.add_many(entities)
    logger.info(f"Imported {added} {store.name} entities from {path}")
    return added
