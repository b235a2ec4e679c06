"""Best-effort keyed persistence for calculator records.

The store behaves like a browser's local storage: string values under
namespaced keys, last write wins, and nothing here is allowed to break a
calculation. Faults are logged and reported as "no data".
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Dict, Mapping, Optional, Protocol

from .migration import upgrade_record
from .models import StoredRecord

logger = logging.getLogger(__name__)


class StorageBackend(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryBackend:
    """Dict-backed storage, for tests and sessions without a disk."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._items


class UnavailableBackend:
    """Storage that is switched off: every access fails."""

    def get_item(self, key: str) -> Optional[str]:
        raise OSError("storage is unavailable")

    def set_item(self, key: str, value: str) -> None:
        raise OSError("storage is unavailable")

    def remove_item(self, key: str) -> None:
        raise OSError("storage is unavailable")


class JsonFileBackend:
    """All keys in one JSON object on disk, rewritten atomically on change."""

    def __init__(self, path: str) -> None:
        self.path = path

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path}: expected a JSON object at top level.")
        return data

    def _write_all(self, data: Mapping[str, str]) -> None:
        folder = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(folder, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".truecost-", suffix=".json", dir=folder)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


class QSettingsBackend:
    """Storage in the platform settings store via ``QtCore.QSettings``.

    ``path`` selects an INI file instead of the native location, which keeps
    tests away from the real user profile.
    """

    def __init__(
        self,
        organization: str = "TrueCost",
        application: str = "truecost-calc",
        path: Optional[str] = None,
    ) -> None:
        from PyQt5 import QtCore

        if path is not None:
            self.settings = QtCore.QSettings(path, QtCore.QSettings.IniFormat)
        else:
            self.settings = QtCore.QSettings(organization, application)
        self._no_error = QtCore.QSettings.NoError

    def get_item(self, key: str) -> Optional[str]:
        if not self.settings.contains(key):
            return None
        return self.settings.value(key, "", type=str)

    def set_item(self, key: str, value: str) -> None:
        self.settings.setValue(key, value)
        self.settings.sync()
        if self.settings.status() != self._no_error:
            raise OSError(f"QSettings could not write '{key}'")

    def remove_item(self, key: str) -> None:
        self.settings.remove(key)
        self.settings.sync()


class PersistenceStore:
    """Save and load ``{inputs, results, ...flags}`` documents by key."""

    def __init__(self, backend: Optional[StorageBackend] = None) -> None:
        self.backend: StorageBackend = backend if backend is not None else MemoryBackend()

    def save(
        self,
        key: str,
        inputs: Mapping[str, Any],
        results: Mapping[str, Any],
        **flags: Any,
    ) -> bool:
        """Persist a record; returns False instead of raising when it fails."""
        record = StoredRecord(inputs=dict(inputs), results=dict(results), flags=dict(flags))
        try:
            payload = json.dumps(record.to_document(), allow_nan=False)
            self.backend.set_item(key, payload)
        except (OSError, TypeError, ValueError, RecursionError) as exc:
            logger.warning("%s: could not save record (%s)", key, exc)
            return False
        return True

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the stored document for ``key`` upgraded to the current
        schema, or None when nothing usable is stored."""
        try:
            raw = self.backend.get_item(key)
        except (OSError, ValueError, RecursionError) as exc:
            logger.warning("%s: storage read failed (%s)", key, exc)
            return None
        if not raw:
            return None
        try:
            document = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            logger.warning("%s: stored record is not valid JSON (%s)", key, exc)
            return None
        if not isinstance(document, dict) or not isinstance(document.get("inputs"), dict):
            logger.debug("%s: stored record has no inputs; ignoring", key)
            return None
        return upgrade_record(key, document)

    def load_record(self, key: str) -> Optional[StoredRecord]:
        document = self.load(key)
        if document is None:
            return None
        try:
            return StoredRecord.from_document(document)
        except (TypeError, ValueError) as exc:
            logger.warning("%s: stored record is malformed (%s)", key, exc)
            return None

    def get_text(self, key: str) -> Optional[str]:
        """Read a bare string value such as the currency preference."""
        try:
            return self.backend.get_item(key)
        except (OSError, ValueError, RecursionError) as exc:
            logger.warning("%s: storage read failed (%s)", key, exc)
            return None

    def set_text(self, key: str, value: str) -> bool:
        try:
            self.backend.set_item(key, value)
        except (OSError, ValueError) as exc:
            logger.warning("%s: could not save value (%s)", key, exc)
            return False
        return True
