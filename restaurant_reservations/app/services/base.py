"""
Generic collection service.

Every entity type lives in one collection: a JSON list stored under a
single key of the key-value store.  ``CollectionService`` implements the
access pattern shared by all of them:

* reads load the whole collection and scan it linearly;
* writes load the whole collection, change an in-memory copy and write
  the whole collection back.

``save`` is the single write path.  Without an id it creates a record;
with an id it shallow-merges the supplied fields over the stored
record.  What happens when the id matches nothing depends on the
service's ``upsert_mode``: ``STRICT`` services raise ``NotFoundError``,
``LENIENT`` services create a record under the supplied id.

When ``serialize_writes`` is enabled the read-modify-write cycle runs
under a per-service ``asyncio.Lock``.  Without it, two concurrent
writers read the same snapshot and the last one to write wins.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from enum import Enum
from typing import Any, AsyncIterator, Dict, Generic, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from ..core.codec import decode_collection, encode_collection
from ..core.errors import DecodeError, NotFoundError
from ..core.ids import generate_id
from ..core.storage import KeyValueStore
from ..schemas.common import Record


logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Record)

EntityInput = Union[BaseModel, Mapping[str, Any]]

_TIMESTAMP_FIELDS = ("created_at", "updated_at")


class UpsertMode(str, Enum):
    """How ``save`` treats an id that matches no stored record."""

    STRICT = "strict"
    LENIENT = "lenient"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _advance(previous: datetime, now: datetime) -> datetime:
    # Never move updated_at backwards, even if the clock does.
    if previous.tzinfo is not None and previous > now:
        return previous
    return now


class CollectionService(Generic[RecordT]):
    """Load/filter/rewrite access to one stored collection."""

    key: str = ""
    model: Type[RecordT]
    entity_name: str = "Record"
    upsert_mode: UpsertMode = UpsertMode.STRICT

    def __init__(self, store: KeyValueStore, serialize_writes: bool = True) -> None:
        self.store = store
        self.serialize_writes = serialize_writes
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    def _loop_lock(self) -> asyncio.Lock:
        # An asyncio.Lock belongs to one event loop; each asyncio.run gets its own.
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    @asynccontextmanager
    async def _write_guard(self) -> AsyncIterator[None]:
        if self.serialize_writes:
            async with self._loop_lock():
                yield
        else:
            yield

    # -- reads ---------------------------------------------------------

    async def get_all(self) -> List[RecordT]:
        """Return every record in storage order (empty if never written)."""
        raw = await self.store.get(self.key)
        if raw is None:
            return []
        try:
            return decode_collection(self.key, raw, self.model)
        except DecodeError:
            logger.error("Stored %s collection under %s is corrupt", self.entity_name, self.key)
            raise

    async def get_by_id(self, entity_id: str) -> Optional[RecordT]:
        """Return the record with ``entity_id`` or ``None``."""
        return await self._first(id=entity_id)

    async def _first(self, **criteria: Any) -> Optional[RecordT]:
        for record in await self.get_all():
            if all(getattr(record, name) == value for name, value in criteria.items()):
                return record
        return None

    async def _filter(self, **criteria: Any) -> List[RecordT]:
        return [
            record
            for record in await self.get_all()
            if all(getattr(record, name) == value for name, value in criteria.items())
        ]

    # -- writes --------------------------------------------------------

    async def save(self, data: EntityInput) -> RecordT:
        """Create or merge-update a record and persist the collection.

        ``data`` may be a pydantic model (only explicitly set fields are
        used) or a mapping with snake_case or camelCase keys.  Supplied
        ``createdAt``/``updatedAt`` values are ignored.
        """
        changes = self._coerce(data)
        entity_id = changes.pop("id", None)
        for name in _TIMESTAMP_FIELDS:
            changes.pop(name, None)

        async with self._write_guard():
            records = await self.get_all()
            if entity_id:
                index = self._index_of(records, entity_id)
                if index is not None:
                    record = self._merge(records, index, changes)
                    await self._write(records)
                    logger.info("Updated %s %s", self.entity_name, entity_id)
                    return record
                if self.upsert_mode is UpsertMode.STRICT:
                    raise NotFoundError(self.entity_name, entity_id)
                logger.debug("%s %s not stored yet, inserting", self.entity_name, entity_id)

            now = utcnow()
            record = self.model.model_validate(
                {**changes, "id": entity_id or generate_id(), "created_at": now, "updated_at": now}
            )
            records.append(record)
            await self._write(records)
            logger.info("Created %s %s", self.entity_name, record.id)
            return record

    async def delete(self, entity_id: str) -> None:
        """Remove every record with ``entity_id``; missing ids are ignored."""
        async with self._write_guard():
            records = await self.get_all()
            remaining = [record for record in records if record.id != entity_id]
            await self._write(remaining)
        if len(remaining) != len(records):
            logger.info("Deleted %s %s", self.entity_name, entity_id)

    async def _write(self, records: List[RecordT]) -> None:
        await self.store.set(self.key, encode_collection(records))

    # -- helpers -------------------------------------------------------

    @staticmethod
    def _index_of(records: List[RecordT], entity_id: str) -> Optional[int]:
        for index, record in enumerate(records):
            if record.id == entity_id:
                return index
        return None

    def _merge(self, records: List[RecordT], index: int, changes: Dict[str, Any]) -> RecordT:
        existing = records[index]
        merged = existing.model_dump()
        merged.update(changes)
        merged["created_at"] = existing.created_at
        merged["updated_at"] = _advance(existing.updated_at, utcnow())
        record = self.model.model_validate(merged)
        records[index] = record
        return record

    def _coerce(self, data: EntityInput) -> Dict[str, Any]:
        """Turn ``data`` into a dict keyed by model field names."""
        if isinstance(data, BaseModel):
            return data.model_dump(exclude_unset=True)
        names: Dict[str, str] = {}
        for name, info in self.model.model_fields.items():
            names[name] = name
            if info.alias:
                names[info.alias] = name
        return {names.get(key, key): value for key, value in dict(data).items()}
