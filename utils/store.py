# utils/store.py
import os, json, logging
from typing import Any
from config import Settings

SETTINGS_KEY = "tcbfl"

class JsonFileStore:
    """Tiny key/value store backed by one JSON object on disk."""
    def __init__(self, path: str):
        self.path = path
        self._data = self._read()

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                obj = json.load(f)
        except (OSError, ValueError):
            logging.warning("Settings file %s unreadable, starting empty", self.path, exc_info=True)
            return {}
        if not isinstance(obj, dict):
            logging.warning("Settings file %s is not a JSON object, ignored", self.path)
            return {}
        return obj

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any):
        self._data[key] = value
        parent = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(parent, exist_ok=True)
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(self._data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self.path)

def load_settings(store) -> Settings:
    obj = store.get(SETTINGS_KEY)
    if not isinstance(obj, dict):
        return Settings()
    try:
        return Settings.from_dict(obj)
    except (TypeError, ValueError):
        logging.warning("Stored settings invalid, using defaults: %r", obj)
        return Settings()

def save_settings(store, settings: Settings):
    store.set(SETTINGS_KEY, settings.to_dict())
