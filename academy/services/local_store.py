# academy/services/local_store.py
import json
import logging
from pathlib import Path
from typing import Any, Optional

from academy.config import APP_DATA_DIR, LOCAL_STORE_FILE

logger = logging.getLogger(__name__)


class LocalStore:
    """
    Key/value storage kept on the device running the app.
    Values are stored as JSON strings, one file per store.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else APP_DATA_DIR / LOCAL_STORE_FILE

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Local storage at %s is unreadable: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict) -> None:
        # the old file stays in place until the new one is fully written
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_name(self.path.name + ".tmp")
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        temp_path.replace(self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def get_json(self, key: str) -> Any:
        """Decode the stored value; None when missing or not valid JSON."""
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            return None

    def set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value, ensure_ascii=False))
