"""
Repository Service - Result-returning boundary around one entity store.

This application service is what a user interface talks to. It owns one
EntityStore and the JsonSnapshotAdapter bound to its snapshot resource,
runs raw input through the validation rules and converts every typed
failure into an OperationResult, so callers branch on ``result.success``
and ``result.kind`` instead of catching exceptions.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Callable, Generic, List, Mapping, Optional, Sequence, Type, Union
import logging

from config import BaseConfig, get_config
from domain.models import Account, InventoryItem, StudentRecord, Transaction
from domain.models.schema import build_entity, normalize_key
from repositories.entity_store import EntityStore
from repositories.json_snapshot import JsonSnapshotAdapter
from services import batch_import, text_export
from shared.exceptions import EntityStoreError, handle_exception
from shared.types import E, K, OperationResult

logger = logging.getLogger(__name__)


class RepositoryService(Generic[K, E]):
    """
    Boundary operations over one explicitly owned store.

    Lifecycle: ``open()`` restores the snapshot, ``close()`` optionally saves
    it and empties the store. The service is also a context manager doing
    both.
    """

    def __init__(
        self,
        store: EntityStore,
        adapter: JsonSnapshotAdapter,
        resource: Union[str, Path],
        save_on_close: bool = False,
        csv_delimiter: str = ",",
        report_path: Union[str, Path, None] = None,
    ):
        self.store = store
        self.adapter = adapter
        self.resource = Path(resource)
        self.report_path = Path(report_path) if report_path is not None else None
        self.save_on_close = save_on_close
        self.csv_delimiter = csv_delimiter
        self.is_open = False

    # -------------------------- lifecycle --------------------------
    def _restore(self) -> int:
        count = self.adapter.restore(self.store, self.resource)
        self.is_open = True
        return count

    def open(self) -> OperationResult[int]:
        """Load the snapshot into the store; the service stays closed on failure."""
        return self._run("open", self._restore)

    def close(self) -> OperationResult[None]:
        """
        Save if configured to, then release the store contents.

        A service whose snapshot was never opened does not save: writing
        would replace a snapshot it failed to read.
        """
        result: OperationResult[None] = OperationResult.ok()
        if self.save_on_close:
            if self.is_open:
                result = self.save()
            else:
                logger.warning(f"{self.store.name} service was not opened, keeping {self.resource} as is")
        self.store.clear()
        self.is_open = False
        return result

    def __enter__(self) -> RepositoryService[K, E]:
        """Open the snapshot; a typed failure is raised, not returned."""
        try:
            self._restore()
        except EntityStoreError as e:
            handle_exception(e, logger, context={"operation": "open", "store": self.store.name}, reraise=True)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------- operations --------------------------
    def _run(self, operation: str, func: Callable[[], Any], **context) -> OperationResult:
        try:
            return OperationResult.ok(func())
        except EntityStoreError as e:
            handle_exception(e, logger, context={"operation": operation, "store": self.store.name, **context})
            return OperationResult.failure(e)

    def _key(self, key: Any) -> K:
        return normalize_key(self.store.entity_type, key)

    def add(self, entity: E) -> OperationResult[None]:
        """Add an already-built entity."""
        return self._run("add", lambda: self.store.add(entity), key=getattr(entity, "key", None))

    def add_from_raw(self, raw: Mapping[str, Any], context: str = None) -> OperationResult[E]:
        """Validate raw field values, build the entity and add it."""
        def _add() -> E:
            entity = build_entity(self.store.entity_type, raw, context)
            self.store.add(entity)
            return entity

        return self._run("add_from_raw", _add)

    def get_by_id(self, key: Any) -> OperationResult[Optional[E]]:
        """Lookup by typed or raw key; a missing key is a successful result holding None."""
        return self._run("get_by_id", lambda: self.store.get_by_id(self._key(key)), key=key)

    def list_all(self) -> OperationResult[List[E]]:
        return OperationResult.ok(self.store.list_all())

    def update_quantity(self, key: Any, new_quantity: Any) -> OperationResult[E]:
        return self._run(
            "update_quantity", lambda: self.store.update_quantity(self._key(key), new_quantity), key=key
        )

    def update_field(self, key: Any, field: str, new_value: Any) -> OperationResult[E]:
        return self._run(
            "update_field",
            lambda: self.store.update_field(self._key(key), field, new_value),
            key=key,
            field=field,
        )

    def remove(self, key: Any) -> OperationResult[None]:
        return self._run("remove", lambda: self.store.remove(self._key(key)), key=key)

    def save(self) -> OperationResult[None]:
        return self._run("save", lambda: self.adapter.save(self.store, self.resource))

    def load(self) -> OperationResult[int]:
        """Replace the store contents with the snapshot; untouched on failure."""
        return self._run("load", lambda: self.adapter.restore(self.store, self.resource))

    def import_file(
        self,
        path: Union[str, Path],
        field_names: Optional[Sequence[str]] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> OperationResult[int]:
        """Bulk import a delimited file, all or nothing."""
        return self._run(
            "import_file",
            lambda: batch_import.import_file(
                self.store,
                path,
                field_names=field_names,
                delimiter=self.csv_delimiter,
                encoding=self.adapter.encoding,
                defaults=defaults,
            ),
            path=str(path),
        )

    def export_report(
        self,
        title: str,
        formatter: Optional[Callable[[E], str]] = None,
        path: Union[str, Path, None] = None,
    ) -> OperationResult[int]:
        """
        Write a text report with one line per entity.

        Args:
            title: Report header
            formatter: Line renderer; defaults to the one for the entity type
            path: Target file; defaults to the configured report file
        """
        formatter = formatter or _FORMATTERS.get(self.store.entity_type)
        if formatter is None:
            raise ValueError(f"No report formatter for {self.store.name}; pass formatter")
        target = path if path is not None else self.report_path
        if target is None:
            raise ValueError("No report path configured; pass path")

        return self._run(
            "export_report",
            lambda: text_export.write_report(
                target, title, self.store.list_all(), formatter, encoding=self.adapter.encoding
            ),
            path=str(target),
        )


_FORMATTERS = {
    InventoryItem: text_export.format_inventory_item,
    StudentRecord: text_export.format_student,
}


def _default_file(entity_type: Type[Any], config: BaseConfig) -> str:
    files = {
        InventoryItem: config.storage.inventory_file,
        StudentRecord: config.storage.students_file,
        Account: config.storage.accounts_file,
        Transaction: config.storage.transactions_file,
    }
    if entity_type not in files:
        raise ValueError(f"No default snapshot file for {entity_type.__name__}; pass resource")
    return files[entity_type]


def create_service(
    entity_type: Type[E],
    resource: Union[str, Path, None] = None,
    config: BaseConfig = None,
    save_on_close: bool = False,
) -> RepositoryService[Any, E]:
    """
    Build a service with a fresh store and a snapshot adapter.

    Args:
        entity_type: Entity class held by the store
        resource: Snapshot path; defaults to the configured file for the type
        config: Configuration; defaults to get_config()
        save_on_close: Persist the store when the service closes
    """
    config = config or get_config()
    if resource is None:
        resource = config.storage.path_for(_default_file(entity_type, config))

    store: EntityStore[Any, E] = EntityStore(entity_type)
    adapter = JsonSnapshotAdapter(
        entity_type,
        encoding=config.storage.encoding,
        indent=config.storage.json_indent,
    )
    logger.debug(f"Created {entity_type.__name__} service on {resource}")
    return RepositoryService(
        store,
        adapter,
        resource,
        save_on_close=save_on_close,
        csv_delimiter=config.validation.csv_delimiter,
        report_path=config.storage.path_for(config.storage.report_file),
    )
