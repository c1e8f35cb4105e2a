"""
JSON snapshot persistence for entity stores.

A snapshot is one self-describing JSON document holding every entity of a
store in insertion order:

    {
      "format": "entity-store.snapshot",
      "version": 1,
      "entity_type": "InventoryItem",
      "count": 1,
      "records": [
        {"id": 1, "name": "Rice Bag", "quantity": 50, "date_added": "2024-01-02T10:00:00"}
      ]
    }

Integers are JSON numbers, decimals are strings (no float round trip),
timestamps are ISO-8601 strings and text is written as UTF-8.
"""

from __future__ import annotations
from contextlib import suppress
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Type, Union
import json
import logging
import os

from domain.models.schema import build_entity, field_specs
from repositories.entity_store import EntityStore
from shared.constants import (
    DEFAULT_ENCODING,
    DEFAULT_JSON_INDENT,
    SNAPSHOT_FORMAT,
    SNAPSHOT_TMP_SUFFIX,
    SNAPSHOT_VERSION,
)
from shared.exceptions import (
    DataValidationError,
    ErrorKind,
    SnapshotParseError,
    StorageIOError,
)
from shared.types import E, FieldKind, FieldSpec

logger = logging.getLogger(__name__)

Resource = Union[str, Path]


def _encode_value(spec: FieldSpec, value: Any) -> Any:
    if value is None:
        return None
    if spec.kind is FieldKind.DECIMAL:
        return str(value)
    if spec.kind is FieldKind.TIMESTAMP:
        return value.isoformat()
    return value


class JsonSnapshotAdapter(Generic[E]):
    """Saves and restores the full contents of an EntityStore as JSON."""

    def __init__(
        self,
        entity_type: Type[E],
        encoding: str = DEFAULT_ENCODING,
        indent: int = DEFAULT_JSON_INDENT
    ):
        self.entity_type = entity_type
        self.encoding = encoding
        self.indent = indent
        self._specs = field_specs(entity_type)
        self._field_names = [spec.name for spec in self._specs]

    @property
    def entity_type_name(self) -> str:
        return self.entity_type.__name__

    # -------------------------- encoding --------------------------
    def to_record(self, entity: E) -> Dict[str, Any]:
        """Field name/value pairs of one entity in declaration order."""
        return {spec.name: _encode_value(spec, getattr(entity, spec.name)) for spec in self._specs}

    def serialize(self, entities: Iterable[E]) -> str:
        """Render a complete snapshot document."""
        records = [self.to_record(entity) for entity in entities]
        document = {
            "format": SNAPSHOT_FORMAT,
            "version": SNAPSHOT_VERSION,
            "entity_type": self.entity_type_name,
            "count": len(records),
            "records": records,
        }
        return json.dumps(document, ensure_ascii=False, indent=self.indent) + "\n"

    # -------------------------- decoding --------------------------
    def deserialize(self, text: str, resource: str = "<memory>") -> List[E]:
        """
        Parse a complete snapshot document.

        Returns:
            Entities in snapshot order

        Raises:
            SnapshotParseError: On any structural or field-level problem
        """
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise SnapshotParseError(
                resource, f"invalid JSON ({e.msg} at line {e.lineno})", original_exception=e
            )

        records = self._check_header(document, resource)

        entities: List[E] = []
        seen = set()
        for index, raw in enumerate(records):
            entity = self._decode_record(raw, index, resource)
            if entity.key in seen:
                raise SnapshotParseError(
                    resource,
                    f"duplicate key {entity.key!r}",
                    record_index=index,
                    cause=ErrorKind.DUPLICATE_KEY,
                )
            seen.add(entity.key)
            entities.append(entity)

        return entities

    def _check_header(self, document: Any, resource: str) -> List[Any]:
        if not isinstance(document, dict):
            raise SnapshotParseError(resource, "snapshot must be a JSON object")

        if document.get("format") != SNAPSHOT_FORMAT:
            raise SnapshotParseError(resource, f"unknown format {document.get('format')!r}")

        if document.get("version") != SNAPSHOT_VERSION:
            raise SnapshotParseError(resource, f"unsupported version {document.get('version')!r}")

        if document.get("entity_type") != self.entity_type_name:
            raise SnapshotParseError(
                resource,
                f"holds {document.get('entity_type')!r}, expected {self.entity_type_name!r}",
            )

        records = document.get("records")
        if not isinstance(records, list):
            raise SnapshotParseError(resource, "'records' must be a list")

        count = document.get("count")
        if count is not None and count != len(records):
            raise SnapshotParseError(
                resource, f"header announces {count} records, found {len(records)}"
            )

        return records

    def _decode_record(self, raw: Any, index: int, resource: str) -> E:
        if not isinstance(raw, dict):
            raise SnapshotParseError(resource, "record must be a JSON object", record_index=index)

        unexpected = [name for name in raw if name not in self._field_names]
        if unexpected:
            raise SnapshotParseError(
                resource, f"unexpected fields {unexpected}", record_index=index
            )

        try:
            return build_entity(self.entity_type, raw)
        except DataValidationError as e:
            raise SnapshotParseError(
                resource, e.message, record_index=index, cause=e.kind, original_exception=e
            )

    # -------------------------- resources --------------------------
    def save(self, store: EntityStore, resource: Resource) -> None:
        """
        Write the whole store to a resource, replacing prior content.

        The document is rendered in memory, written to a temporary sibling
        file and moved over the target, so readers never see a partial
        snapshot.

        Raises:
            StorageIOError: If the content cannot be encoded or the resource
                cannot be written; the target is left as it was
        """
        path = Path(resource)
        try:
            data = self.serialize(store.list_all()).encode(self.encoding)
        except (UnicodeError, LookupError) as e:
            raise StorageIOError(str(path), "encode", original_exception=e)

        tmp_path = path.with_name(path.name + SNAPSHOT_TMP_SUFFIX)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
        except OSError as e:
            with suppress(OSError):
                tmp_path.unlink()
            raise StorageIOError(str(path), "write", original_exception=e)

        logger.info(f"Saved {store.count()} {self.entity_type_name} entities to {path}")

    def load(self, resource: Resource) -> List[E]:
        """
        Read every entity from a resource.

        A missing resource is an empty snapshot, not an error.

        Raises:
            SnapshotParseError: If the content cannot be parsed in full
            StorageIOError: If the resource exists but cannot be read
        """
        path = Path(resource)
        if not path.exists():
            logger.info(f"No snapshot at {path}, starting with an empty {self.entity_type_name} set")
            return []

        try:
            text = path.read_text(encoding=self.encoding)
        except UnicodeDecodeError as e:
            raise SnapshotParseError(str(path), f"not valid {self.encoding} text", original_exception=e)
        except LookupError as e:
            raise StorageIOError(str(path), "decode", original_exception=e)
        except OSError as e:
            raise StorageIOError(str(path), "read", original_exception=e)

        entities = self.deserialize(text, str(path))
        logger.info(f"Loaded {len(entities)} {self.entity_type_name} entities from {path}")
        return entities

    def restore(self, store: EntityStore, resource: Resource) -> int:
        """
        Replace the contents of a store with a snapshot.

        The store is only touched once the whole snapshot has been parsed.

        Returns:
            Number of entities loaded
        """
        return store.replace_all(self.load(resource))
