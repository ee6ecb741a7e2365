"""Key-value storage capability used by the search history store."""
import json
from pathlib import Path
from typing import Dict, Optional, Protocol


# Default storage location
DEFAULT_STORAGE_PATH = Path.home() / ".content-search" / "history.json"


class KeyValueStorage(Protocol):
    """Minimal string key-value store (the shape of browser localStorage)."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class MemoryStorage:
    """In-process storage, lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStorage:
    """Storage backed by a single JSON object file mapping keys to strings.

    Every write rewrites the whole file atomically. Concurrent writers from
    several processes are not coordinated; the last write wins.
    """

    def __init__(self, path: Optional[Path] = None):
        """Initialize the file storage.

        Args:
            path: JSON file path. Defaults to ~/.content-search/history.json
        """
        self.path = path or DEFAULT_STORAGE_PATH

    def _read_all(self) -> Dict[str, str]:
        """Load the whole file.

        Raises:
            json.JSONDecodeError: If the file is malformed
            ValueError: If the file does not hold a JSON object
        """
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.path} does not contain a JSON object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Write to temp file first
        temp_path = self.path.with_suffix(".tmp")
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        # Atomic rename
        temp_path.replace(self.path)

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)
