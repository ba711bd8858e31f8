import os
import json
import logging
import threading

from .errors import PersistenceFailure
from .logging_setup import get_logger
from .models import TrackedApp
from .utils import write_json_atomic


class AppStore:
    def __init__(self, path: str, logger: logging.Logger | None = None):
        self._path = path
        self._logger = get_logger(logger)
        self._lock = threading.Lock()
        self._records: dict[str, dict] = {}

    @property
    def path(self) -> str:
        return self._path

    def load(self) -> list[TrackedApp]:
        if not os.path.exists(self._path):
            return []
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            self._logger.exception(f"App store load failed path={self._path}, starting empty")
            return []

        raw = data.get("apps", []) if isinstance(data, dict) else []
        apps: list[TrackedApp] = []
        for item in raw or []:
            try:
                apps.append(TrackedApp.from_dict(item))
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                self._logger.warning(f"Skipping bad tracked app record {item!r}: {e}")
                continue

        with self._lock:
            self._records = {app.id: app.to_dict() for app in apps}
        return apps

    def save(self, apps: list[TrackedApp]) -> None:
        records = [app.to_dict() for app in apps]
        with self._lock:
            self._records = {record["id"]: record for record in records}
            self._flush()

    def insert(self, app: TrackedApp) -> None:
        with self._lock:
            self._records[app.id] = app.to_dict()
            self._flush()

    def delete(self, app_id: str) -> None:
        with self._lock:
            self._records.pop(app_id, None)
            self._flush()

    def delete_all(self) -> None:
        with self._lock:
            self._records = {}
            self._flush()

    def _flush(self) -> None:
        # caller holds self._lock for the whole write
        data = {"apps": list(self._records.values())}
        try:
            write_json_atomic(self._path, data)
        except OSError as e:
            raise PersistenceFailure(self._path, str(e)) from e
