# storage/sql.py

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, List, Optional, Type

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, select

from core.logging_config import logger
from storage.base import Storage, T


class SqlStorage(Storage):
    """
    Relational adapter over a SQLModel engine.

    Outside a transaction each primitive commits on its own. Inside
    `transaction()` they share one session and commit (or roll back) together.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._active: ContextVar[Optional[Session]] = ContextVar(
            f"sql_storage_session_{id(self)}", default=None
        )

    def create_all(self) -> None:
        # Registers every table on SQLModel.metadata
        import storage.tables  # noqa: F401

        SQLModel.metadata.create_all(self.engine)

    # -------------------------------------------------
    # Sessions
    # -------------------------------------------------
    def _new_session(self) -> Session:
        return Session(self.engine, expire_on_commit=False)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        active = self._active.get()
        if active is not None:
            yield active
            return

        with self._new_session() as session:
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise

    @contextmanager
    def transaction(self):
        if self._active.get() is not None:
            yield self
            return

        with self._new_session() as session:
            token = self._active.set(session)
            try:
                yield self
                session.commit()
            except Exception:
                session.rollback()
                logger.warning("Storage transaction rolled back")
                raise
            finally:
                self._active.reset(token)

    # -------------------------------------------------
    # Primitives
    # -------------------------------------------------
    # Records leave the session detached so later writes in the same
    # transaction never change what a caller already holds.
    @staticmethod
    def _detach(session: Session, record: T) -> T:
        session.expunge(record)
        return record

    def _list(self, model: Type[T], **equals: Any) -> List[T]:
        with self._session() as session:
            statement = select(model)
            for key, value in equals.items():
                statement = statement.where(getattr(model, key) == value)
            return [self._detach(session, record) for record in session.exec(statement).all()]

    def _get(self, model: Type[T], record_id: str) -> Optional[T]:
        with self._session() as session:
            record = session.get(model, record_id)
            if record is None:
                return None
            return self._detach(session, record)

    def _insert(self, record: T) -> T:
        with self._session() as session:
            session.add(record)
            session.flush()
            session.refresh(record)
            return self._detach(session, record)

    def _update(self, model: Type[T], record_id: str, changes: Dict[str, Any]) -> Optional[T]:
        with self._session() as session:
            record = session.get(model, record_id)
            if record is None:
                return None
            # Validate through the model so values are coerced like on insert
            cleaned = model.model_validate({**record.model_dump(), **changes, "id": record_id})
            for key in changes:
                setattr(record, key, getattr(cleaned, key))
            session.add(record)
            session.flush()
            session.refresh(record)
            return self._detach(session, record)

    def _delete(self, model: Type[T], record_id: str) -> bool:
        with self._session() as session:
            record = session.get(model, record_id)
            if record is None:
                return False
            session.delete(record)
            session.flush()
            return True
