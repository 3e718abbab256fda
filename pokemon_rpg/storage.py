import logging
from abc import ABC, abstractmethod
from pathlib import Path

LOGGER = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    @abstractmethod
    def get_item(self, key: str) -> str | None:
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        pass


class InMemoryStorage(KeyValueStorage):
    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def keys(self) -> list[str]:
        return sorted(self._data)

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value


class FileStorage(KeyValueStorage):
    SUFFIX = ".json"

    def __init__(self, folder: Path) -> None:
        self._folder = folder

    def _path(self, key: str) -> Path:
        return self._folder / f"{key}{self.SUFFIX}"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as f:
            return f.read()

    def keys(self) -> list[str]:
        if not self._folder.exists():
            return []
        return sorted(path.stem for path in self._folder.glob(f"*{self.SUFFIX}"))

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()
            LOGGER.info("Removed stored key: %s", key)

    def set_item(self, key: str, value: str) -> None:
        self._folder.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        temp_path = path.with_suffix(".tmp")
        with temp_path.open("w", encoding="utf-8") as f:
            f.write(value)
        temp_path.replace(path)
