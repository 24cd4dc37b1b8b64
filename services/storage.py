"""Flat key-value stores holding JSON-serialized string values.

Both stores expose ``get(key)`` (``None`` when absent) and ``set(key, value)``.
There is no eviction and no expiry; callers invalidate by renaming keys.
"""
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Interface for the string key/value capability."""

    @abstractmethod
    def get(self, key: str):
        """Return the stored string, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a string value under key."""


class MemoryStore(KeyValueStore):
    def __init__(self, initial=None):
        self._data = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str):
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError('store values must be strings')
        with self._lock:
            self._data[key] = value

    def keys(self):
        with self._lock:
            return list(self._data)


class JsonFileStore(KeyValueStore):
    """Persist all keys in a single JSON object file.

    Every ``set`` rewrites the whole file through a temp file and ``os.replace``
    so a crash mid-write leaves the previous contents intact. A missing or
    corrupt file reads as an empty store.
    """

    def __init__(self, path):
        self.path = os.fspath(path)
        self._lock = threading.Lock()

    def _read_all(self) -> dict:
        try:
            with open(self.path, 'r', encoding='utf-8') as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning('Could not read store file %s: %s', self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning('Ignoring malformed store file %s', self.path)
            return {}
        return data

    def get(self, key: str):
        with self._lock:
            value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError('store values must be strings')
        with self._lock:
            data = self._read_all()
            data[key] = value
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=directory, prefix='.store-', suffix='.json')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                    json.dump(data, fh, ensure_ascii=False)
                os.replace(tmp, self.path)
            except Exception:
                if os.path.exists(tmp):
                    os.remove(tmp)
                raise
