"""
Key-Value Persistence
=====================
The core never touches storage; the workspace hands state to a key-value
store at commit time.

Every value is wrapped in a versioned envelope:

    {"schemaVersion": 1, "data": <payload>}

A bare payload (written before versioning) is read as version 0. Payloads
from a newer schema are refused.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

from shiftboard.core.clock import IdGenerator
from shiftboard.core.errors import PersistenceError
from shiftboard.engine.templates import TemplateManager
from shiftboard.models.config import EngineConfig
from shiftboard.models.worker import Roster
from shiftboard.store.assignments import AssignmentStore
from shiftboard.utils.logging_setup import get_logger

logger = get_logger("shiftboard.io.persistence")

SCHEMA_VERSION = 1


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self) -> List[str]: ...


class MemoryStore:
    """Dict-backed store. Values are JSON round-tripped so nothing aliases caller state."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value, ensure_ascii=False)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)


class JsonFileStore:
    """
    One ``<key>.json`` file per key in a directory.

    Writes go to a temp file in the same directory and are swapped in with
    ``os.replace``, so a crash never leaves a half-written value.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Corrupted data in {path}: {e}") from e

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {path}")

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def keys(self) -> List[str]:
        return sorted(p.stem for p in self.directory.glob("*.json"))


def wrap(payload: Any, version: int = SCHEMA_VERSION) -> Dict[str, Any]:
    return {"schemaVersion": version, "data": payload}


def unwrap(value: Any, key: str = "") -> Any:
    """Payload of an envelope; bare legacy payloads pass through."""
    if isinstance(value, dict) and "schemaVersion" in value:
        version = value["schemaVersion"]
        if not isinstance(version, int) or version > SCHEMA_VERSION:
            raise PersistenceError(f"{key or 'value'}: unsupported schema version {version!r}")
        if "data" not in value:
            raise PersistenceError(f"{key or 'value'}: envelope has no data")
        return value["data"]
    return value


def _load(kv: KeyValueStore, key: str, default: Any) -> Any:
    raw = kv.get(key)
    if raw is None:
        return default
    return unwrap(raw, key)


def save_roster(kv: KeyValueStore, roster: Roster, key: str = "workers") -> None:
    kv.set(key, wrap(roster.to_list()))


def load_roster(kv: KeyValueStore, key: str = "workers") -> Roster:
    items = _load(kv, key, [])
    if not isinstance(items, list):
        raise PersistenceError(f"{key}: expected a list of workers")
    try:
        return Roster.from_list(items)
    except (KeyError, TypeError, ValueError) as e:
        raise PersistenceError(f"{key}: invalid worker record: {e}") from e


def save_assignments(kv: KeyValueStore, store: AssignmentStore, key: str = "assignments") -> None:
    kv.set(key, wrap(store.to_records()))


def load_assignments(
    kv: KeyValueStore,
    key: str = "assignments",
    config: Optional[EngineConfig] = None,
    id_generator: Optional[IdGenerator] = None,
) -> AssignmentStore:
    records = _load(kv, key, [])
    if not isinstance(records, list):
        raise PersistenceError(f"{key}: expected a list of assignments")
    try:
        return AssignmentStore.from_records(records, config=config, id_generator=id_generator)
    except (KeyError, TypeError, ValueError) as e:
        raise PersistenceError(f"{key}: invalid assignment record: {e}") from e


def save_templates(kv: KeyValueStore, templates: TemplateManager, key: str = "weeklyTemplates") -> None:
    kv.set(key, wrap(templates.to_dict()))


def load_templates(
    kv: KeyValueStore,
    key: str = "weeklyTemplates",
    id_generator: Optional[IdGenerator] = None,
) -> TemplateManager:
    payload = _load(kv, key, {})
    if not isinstance(payload, dict):
        raise PersistenceError(f"{key}: expected a mapping of templates")
    try:
        return TemplateManager.from_dict(payload, id_generator=id_generator)
    except (KeyError, TypeError, ValueError) as e:
        raise PersistenceError(f"{key}: invalid template record: {e}") from e
