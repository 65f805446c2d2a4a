from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import delete as sql_delete
from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, make_transient, sessionmaker

from models import Sample
from utils import get_logger

from .converters import db_to_sample, sample_to_db
from .errors import StorageFailure, StorageResult
from .models import SampleRecord
from .session import session_scope

logger = get_logger(__name__)

RecordT = TypeVar("RecordT")
ModelT = TypeVar("ModelT")
T = TypeVar("T")


class Repository(ABC, Generic[RecordT, ModelT]):
    """
    Generic persistence boundary for one (record, model) pair.

    Subclasses set `record_type` / `model_type` and supply the two
    conversions; everything else has a default implementation. Each call
    opens its own session. Engine errors never reach the caller: they are
    logged and the call degrades to a no-op or an empty/default result.

    With `cache_reads=True` the first `fetch_all()` is memoised; any write or
    delete made through this repository drops the memo.
    """

    record_type: Type[RecordT]
    model_type: Type[ModelT]

    def __init__(self, session_factory: sessionmaker, cache_reads: bool = False) -> None:
        self._session_factory = session_factory
        self._cache_reads = cache_reads
        self._cache: Optional[List[RecordT]] = None

    @abstractmethod
    def convert_to_model(self, record: RecordT) -> ModelT:
        """Map a storage record to its domain model."""
        raise NotImplementedError

    @abstractmethod
    def convert_to_record(self, model: ModelT) -> RecordT:
        """Map a domain model to its storage record."""
        raise NotImplementedError

    def _run(self, operation: str, work: Callable[[Session], T]) -> StorageResult[T]:
        try:
            with session_scope(self._session_factory) as session:
                value = work(session)
        except SQLAlchemyError as e:
            failure = StorageFailure(f"{self.record_type.__name__} {operation}", e)
            logger.error(str(failure))
            return StorageResult(error=failure)
        return StorageResult(value=value)

    def _write_each(self, operation: str, records: Iterable[RecordT], write: Callable[[Session, RecordT], None]) -> None:
        self.clear_cache()
        for record in records:
            result = self._run(operation, lambda session, record=record: write(session, record))
            if not result.ok:
                # Earlier elements stay committed; the rest of the batch is dropped.
                return

    def _count(self) -> StorageResult[int]:
        return self._run(
            "count",
            lambda session: session.scalar(select(func.count()).select_from(self.record_type)),
        )

    def clear_cache(self) -> None:
        self._cache = None

    def _copy_record(self, record: RecordT) -> RecordT:
        columns = inspect(self.record_type).column_attrs
        return self.record_type(**{column.key: getattr(record, column.key) for column in columns})

    def _add_new(self, session: Session, record: RecordT) -> None:
        # A fetched record keeps its identity; drop it so the flush is an INSERT, not an UPDATE.
        make_transient(record)
        session.add(record)

    # ── INSERT ────────────────────────────────────────────

    def insert_record(self, record: RecordT) -> None:
        self.insert_records([record])

    def insert_records(self, records: Iterable[RecordT]) -> None:
        """Add each record as a new row, one transaction per record."""
        self._write_each("insert", records, self._add_new)

    def insert(self, model: ModelT) -> None:
        self.insert_record(self.convert_to_record(model))

    def insert_many(self, models: Iterable[ModelT]) -> None:
        self.insert_records([self.convert_to_record(model) for model in models])

    # ── UPSERT ────────────────────────────────────────────

    def upsert_record(self, record: RecordT) -> None:
        self.upsert_records([record])

    def upsert_records(self, records: Iterable[RecordT]) -> None:
        """Overwrite the row sharing each record's key, or add it if there is none."""
        self._write_each("upsert", records, lambda session, record: session.merge(record))

    def upsert(self, model: ModelT) -> None:
        self.upsert_record(self.convert_to_record(model))

    def upsert_many(self, models: Iterable[ModelT]) -> None:
        self.upsert_records([self.convert_to_record(model) for model in models])

    # ── READ ──────────────────────────────────────────────

    def fetch_all(self) -> List[RecordT]:
        """Return every record in the engine's default order."""
        if self._cache_reads and self._cache is not None:
            return [self._copy_record(record) for record in self._cache]
        result = self._run(
            "fetch",
            lambda session: list(session.scalars(select(self.record_type)).all()),
        )
        records = result.unwrap_or([])
        if self._cache_reads and result.ok:
            self._cache = [self._copy_record(record) for record in records]
        return records

    def fetch_all_models(self) -> List[ModelT]:
        return [self.convert_to_model(record) for record in self.fetch_all()]

    def fetch_model(self, key: int) -> ModelT:
        """
        Return the model whose primary key equals `key`.

        A default-constructed model comes back when nothing matches; callers
        cannot tell that apart from a stored record holding default values.
        """
        matches = [model for model in self.fetch_all_models() if getattr(model, self._key_name()) == key]
        if not matches:
            logger.debug("return empty model.")
            return self.model_type()
        return matches[0]

    # ── DELETE ────────────────────────────────────────────

    def delete_all(self) -> None:
        self.clear_cache()

        def work(session: Session) -> None:
            count = session.scalar(select(func.count()).select_from(self.record_type))
            if count < 1:
                return
            session.execute(sql_delete(self.record_type))

        self._run("delete all", work)

    def delete_record(self, record: RecordT) -> None:
        self.delete_records([record])

    def delete_records(self, records: Iterable[RecordT]) -> None:
        """Delete each record by key in its own transaction; a no-op on an empty table."""
        self.clear_cache()
        if self._count().unwrap_or(0) < 1:
            logger.debug(f"{self.record_type.__name__} table is empty, nothing to delete")
            return
        self._write_each("delete", records, self._delete_by_key)

    def delete(self, model: ModelT) -> None:
        self.delete_record(self.convert_to_record(model))

    def delete_many(self, models: Iterable[ModelT]) -> None:
        self.delete_records([self.convert_to_record(model) for model in models])

    def _delete_by_key(self, session: Session, record: RecordT) -> None:
        identity = tuple(inspect(self.record_type).primary_key_from_instance(record))
        existing = session.get(self.record_type, identity)
        if existing is not None:
            session.delete(existing)

    # ── AUTO-INCREMENT ────────────────────────────────────

    def _key_name(self) -> str:
        mapper = inspect(self.record_type)
        return mapper.get_property_by_column(mapper.primary_key[0]).key

    def next_primary_key(self) -> int:
        """
        Return the key the next new record should get: the highest stored key
        plus one, or 0 for an empty table (and for types without a single
        primary-key column).
        """
        mapper = inspect(self.record_type)
        if len(mapper.primary_key) != 1:
            logger.debug(f"{self.record_type.__name__} has no single primary key")
            return 0
        key_column = mapper.primary_key[0]
        records = self._run(
            "next primary key",
            lambda session: list(session.scalars(select(self.record_type).order_by(key_column.asc())).all()),
        ).unwrap_or([])
        if not records:
            return 0
        return getattr(records[-1], self._key_name()) + 1


class SampleRepository(Repository[SampleRecord, Sample]):
    """
    Repository for Sample. Every "new record" path assigns keys itself, so
    callers never set `id` before inserting.
    """

    record_type = SampleRecord
    model_type = Sample

    def convert_to_model(self, record: SampleRecord) -> Sample:
        return db_to_sample(record)

    def convert_to_record(self, model: Sample) -> SampleRecord:
        return sample_to_db(model)

    def _assign_keys(self, records: Iterable[SampleRecord]) -> List[SampleRecord]:
        # Base key is read before anything in the batch is stored, then offset by position.
        numbered: List[SampleRecord] = []
        for record in records:
            record.id = self.next_primary_key() + len(numbered)
            numbered.append(record)
        return numbered

    def insert_new_record(self, record: SampleRecord) -> None:
        self.insert_records(self._assign_keys([record]))

    def insert_new_records(self, records: Iterable[SampleRecord]) -> None:
        self.insert_records(self._assign_keys(records))

    def insert(self, model: Sample) -> None:
        self.insert_new_record(self.convert_to_record(model))

    def insert_many(self, models: Iterable[Sample]) -> None:
        self.insert_new_records([self.convert_to_record(model) for model in models])
