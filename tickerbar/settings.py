"""Settings persistence port plus JSON-file and in-memory implementations."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

TICKERS_KEY = "saved_tickers"
MARQUEE_KEY = "marquee_mode"


class SettingsPort(Protocol):
    def get_list(self, key: str) -> list[str] | None: ...

    def set_list(self, key: str, values: list[str]) -> None: ...

    def get_bool(self, key: str, default: bool = False) -> bool: ...

    def set_bool(self, key: str, value: bool) -> None: ...


@dataclass
class MemorySettings:
    values: dict[str, object] = field(default_factory=dict)

    def get_list(self, key: str) -> list[str] | None:
        raw = self.values.get(key)
        if not isinstance(raw, list):
            return None
        return [str(item) for item in raw]

    def set_list(self, key: str, values: list[str]) -> None:
        self.values[key] = list(values)

    def get_bool(self, key: str, default: bool = False) -> bool:
        raw = self.values.get(key)
        return raw if isinstance(raw, bool) else default

    def set_bool(self, key: str, value: bool) -> None:
        self.values[key] = bool(value)


class JsonSettings(MemorySettings):
    """Settings stored as one JSON object on disk, rewritten on every set."""

    def __init__(self, path: Path) -> None:
        super().__init__(values=self._read(path))
        self._path = path

    @staticmethod
    def _read(path: Path) -> dict[str, object]:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring settings file %s: top level is not an object", path)
            return {}
        return raw

    def _write(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=str(self._path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self.values, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def set_list(self, key: str, values: list[str]) -> None:
        super().set_list(key, values)
        self._write()

    def set_bool(self, key: str, value: bool) -> None:
        super().set_bool(key, value)
        self._write()
