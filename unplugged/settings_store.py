import os
import json
import logging
import threading

from .errors import PersistenceFailure
from .logging_setup import get_logger
from .models import Settings
from .utils import write_json_atomic


class SettingsStore:
    def __init__(self, path: str, logger: logging.Logger | None = None):
        self._path = path
        self._logger = get_logger(logger)
        self._lock = threading.Lock()

    def load(self) -> Settings:
        if not os.path.exists(self._path):
            return Settings()
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("settings file is not an object")
        except (OSError, ValueError):
            self._logger.exception("Settings load failed, using defaults")
            return Settings()
        return Settings.from_dict(data)

    def save(self, settings: Settings) -> None:
        data = settings.to_dict()
        with self._lock:
            try:
                write_json_atomic(self._path, data)
            except OSError as e:
                raise PersistenceFailure(self._path, str(e)) from e
