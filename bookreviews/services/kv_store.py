"""
String-keyed text stores with per-key versions.

Both backends expose localStorage-style get_item/set_item/remove_item plus a
versioned batch write used by the accessor for optimistic concurrency.
"""

import logging
from typing import Dict, NamedTuple, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy import exc as sa_exc

from bookreviews import db
from bookreviews.models.store_entry import StoreEntry
from .errors import ConcurrentModification

logger = logging.getLogger(__name__)

class StoredValue(NamedTuple):
    value: str
    version: int

class KeyValueStore:
    """Base class; subclasses implement read() and write()."""

    def read(self, key: str) -> Optional[StoredValue]:
        raise NotImplementedError

    def write(self, changes: Dict[str, Optional[str]], expected: Optional[Dict[str, int]] = None):
        """
        Apply changes atomically.

        Args:
            changes: key -> new text, or None to remove the key
            expected: key -> version the caller read (0 for absent keys)

        Raises:
            ConcurrentModification: an expected version no longer matches;
                nothing is written in that case
        """
        raise NotImplementedError

    def version(self, key: str) -> int:
        stored = self.read(key)
        return stored.version if stored else 0

    def get_item(self, key: str) -> Optional[str]:
        stored = self.read(key)
        return stored.value if stored else None

    def set_item(self, key: str, value: str):
        self.write({key: value})

    def remove_item(self, key: str):
        self.write({key: None})

class MemoryStore(KeyValueStore):
    """Dictionary-backed store, lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, StoredValue] = {
            key: StoredValue(value, 1) for key, value in (initial or {}).items()
        }
        # last version of every key ever written, removed keys included
        self._high_water: Dict[str, int] = {key: 1 for key in self._data}

    def read(self, key):
        return self._data.get(key)

    def write(self, changes, expected=None):
        for key, version in (expected or {}).items():
            actual = self.version(key)
            if actual != version:
                raise ConcurrentModification(key, version, actual)

        for key, value in changes.items():
            if value is None:
                if self._data.pop(key, None) is not None:
                    self._high_water[key] += 1
            else:
                version = self._high_water.get(key, 0) + 1
                self._data[key] = StoredValue(value, version)
                self._high_water[key] = version

    def keys(self):
        return list(self._data)

class SQLStore(KeyValueStore):
    """
    Store backed by the store_entries table.

    Versioned writes are guarded UPDATE/INSERT statements, so concurrent
    writers sharing one database cannot overwrite each other unnoticed.
    Must be used inside a Flask application context.
    """

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def read(self, key):
        row = self.session.execute(
            select(StoreEntry.value, StoreEntry.version).where(StoreEntry.key == key)
        ).first()
        if row is None or row.value is None:
            return None
        return StoredValue(row.value, row.version)

    def write(self, changes, expected=None):
        expected = expected or {}
        try:
            for key, version in expected.items():
                if key not in changes:
                    actual = self.version(key)
                    if actual != version:
                        raise ConcurrentModification(key, version, actual)
            for key, value in changes.items():
                self._apply(key, value, expected.get(key))
            self.session.commit()
        except (ConcurrentModification, sa_exc.SQLAlchemyError):
            self.session.rollback()
            raise

    def _apply(self, key, value, expected_version):
        row = self.session.execute(
            select(StoreEntry.value, StoreEntry.version).where(StoreEntry.key == key)
        ).first()
        live = row is not None and row.value is not None
        current = row.version if live else 0
        if expected_version is not None and current != expected_version:
            raise ConcurrentModification(key, expected_version, current)

        if row is None:
            if value is None:
                return
            try:
                self.session.execute(
                    insert(StoreEntry).values(key=key, value=value, version=1)
                )
            except sa_exc.IntegrityError:
                self.session.rollback()
                logger.warning(f"Key '{key}' was created by another writer")
                raise ConcurrentModification(key, 0, self.version(key))
            return

        if value is None and not live:
            return

        # removal keeps the row with a NULL value so its version keeps counting
        result = self.session.execute(
            update(StoreEntry)
            .where(StoreEntry.key == key, StoreEntry.version == row.version)
            .values(value=value, version=row.version + 1)
        )
        if result.rowcount != 1:
            raise ConcurrentModification(key, current, self.version(key))

    def keys(self):
        return list(self.session.execute(
            select(StoreEntry.key).where(StoreEntry.value.is_not(None))
        ).scalars())
