"""
Base repository class for collection persistence.

Provides a common abstraction for the store's collections: each collection
lives under one storage key as a JSON array of records and is mirrored in
memory, keyed by the record's identity field.
"""

import json
import logging
from typing import Callable, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base class for all collection repositories.

    Provides common functionality for persistence:
    - Storage access via self._storage
    - One load at construction, whole-collection write on every mutation
    - Mutations are all-or-nothing: if the write fails, memory is untouched

    Subclasses set ``storage_key``, ``model`` and ``key_of``.

    Example:
        class CouponRepository(BaseRepository[Coupon]):
            storage_key = "coupons"
            model = Coupon

            @staticmethod
            def key_of(coupon: Coupon) -> str:
                return coupon.code
    """

    storage_key: str
    model: type[T]
    key_of: Callable[[T], str]

    def __init__(self, storage: KeyValueStorage) -> None:
        """
        Initialize the repository and load the persisted collection.

        Args:
            storage: Storage backend holding the collection.
        """
        self._storage = storage
        self._records: dict[str, T] = self._load()

    def _load(self) -> dict[str, T]:
        raw = self._storage.get(self.storage_key)
        if raw is None:
            return {}

        try:
            items = json.loads(raw)
        except json.JSONDecodeError:
            logger.error(f"Collection '{self.storage_key}' is not valid JSON; starting empty")
            return {}

        if not isinstance(items, list):
            logger.error(f"Collection '{self.storage_key}' is not a list; starting empty")
            return {}

        records: dict[str, T] = {}
        for item in items:
            try:
                record = self.model.model_validate(item)
            except PydanticValidationError as e:
                logger.warning(f"Skipping unreadable record in '{self.storage_key}': {e}")
                continue
            records[self.key_of(record)] = record
        return records

    def _write(self, records: dict[str, T]) -> None:
        payload = json.dumps(
            [record.model_dump(mode="json") for record in records.values()],
            ensure_ascii=False,
        )
        self._storage.set(self.storage_key, payload)

    def get(self, key: str) -> Optional[T]:
        return self._records.get(key)

    def contains(self, key: str) -> bool:
        return key in self._records

    def all(self) -> list[T]:
        """Snapshot of all records (a new list; records are immutable)."""
        return list(self._records.values())

    def put(self, record: T) -> T:
        """Insert or replace a record, persisting the whole collection."""
        updated = dict(self._records)
        updated[self.key_of(record)] = record
        self._write(updated)
        self._records = updated
        return record

    def __len__(self) -> int:
        return len(self._records)
