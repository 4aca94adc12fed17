# storage/memory.py

import copy
from contextlib import contextmanager
from threading import RLock
from typing import Any, Dict, List, Optional, Type

from storage.base import Storage, T
from storage.tables import ALL_TABLES


class MemStorage(Storage):
    """
    Dict-backed adapter. Rows are held as plain dicts and rebuilt on every
    read, so callers never share mutable state with the store.

    Route handlers run in a thread pool, so every access goes through one
    re-entrant lock; a transaction holds it for the whole block.
    """

    def __init__(self):
        self._lock = RLock()
        self._tables: Dict[str, Dict[str, Dict[str, Any]]] = {
            model.__tablename__: {} for model in ALL_TABLES
        }

    # -------------------------------------------------
    # Primitives
    # -------------------------------------------------
    def _rows(self, model: Type[T]) -> Dict[str, Dict[str, Any]]:
        return self._tables[model.__tablename__]

    def _list(self, model: Type[T], **equals: Any) -> List[T]:
        with self._lock:
            return [
                model.model_validate(row)
                for row in self._rows(model).values()
                if all(row.get(key) == value for key, value in equals.items())
            ]

    def _get(self, model: Type[T], record_id: str) -> Optional[T]:
        with self._lock:
            row = self._rows(model).get(record_id)
            return model.model_validate(row) if row is not None else None

    def _check_unique(self, model: Type[T], row: Dict[str, Any]) -> None:
        for column in model.__table__.columns:
            if not column.unique or row.get(column.name) is None:
                continue
            for other_id, other in self._rows(model).items():
                if other_id != row["id"] and other.get(column.name) == row[column.name]:
                    raise ValueError(
                        f"duplicate key value violates unique constraint "
                        f"{model.__tablename__}.{column.name}"
                    )

    def _insert(self, record: T) -> T:
        with self._lock:
            model = type(record)
            rows = self._rows(model)
            if record.id in rows:
                raise ValueError(f"duplicate key value for {model.__tablename__}.id={record.id}")
            row = record.model_dump()
            self._check_unique(model, row)
            rows[record.id] = row
            return model.model_validate(row)

    def _update(self, model: Type[T], record_id: str, changes: Dict[str, Any]) -> Optional[T]:
        with self._lock:
            rows = self._rows(model)
            row = rows.get(record_id)
            if row is None:
                return None
            updated = model.model_validate({**row, **changes, "id": record_id}).model_dump()
            self._check_unique(model, updated)
            rows[record_id] = updated
            return model.model_validate(updated)

    def _delete(self, model: Type[T], record_id: str) -> bool:
        with self._lock:
            return self._rows(model).pop(record_id, None) is not None

    # -------------------------------------------------
    # Unit of work
    # -------------------------------------------------
    @contextmanager
    def transaction(self):
        with self._lock:
            snapshot = copy.deepcopy(self._tables)
            try:
                yield self
            except BaseException:
                self._tables = snapshot
                raise
