from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from mytask.core.repositories.kv_store import KeyValueStore
from mytask.utils.logging import get_logger

logger = get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value store kept in a single JSON object file.

    The file is read once on construction. A missing file starts empty; an
    unreadable or malformed file is logged and also starts empty. Every write
    rewrites the whole file through a temporary file and an atomic replace.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._data: dict[str, str] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw: Any = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as err:
            logger.warning("Ignoring unreadable storage file %s: %s", self._path, err)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring storage file %s: top level is not an object", self._path)
            return {}
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def _flush(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(self._data, fh, ensure_ascii=False, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
