import os
import json
import logging
import threading

from .config import DEFAULT_POINTS
from .errors import InsufficientPoints, PersistenceFailure
from .logging_setup import get_logger
from .utils import write_json_atomic


class PointsBalance:
    def __init__(self, path: str, logger: logging.Logger | None = None, default: int = DEFAULT_POINTS):
        self._path = path
        self._logger = get_logger(logger)
        self._default = int(default)
        self._lock = threading.Lock()
        self._balance = self._default

    @property
    def balance(self) -> int:
        with self._lock:
            return self._balance

    def can_afford(self, cost: int) -> bool:
        return self.balance >= cost

    def debit(self, cost: int) -> int:
        with self._lock:
            if self._balance < cost:
                raise InsufficientPoints(self._balance, cost)
            self._balance -= cost
            return self._balance

    def reset(self) -> None:
        with self._lock:
            self._balance = self._default

    def load(self) -> None:
        if not os.path.exists(self._path):
            return
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
            balance = int(data.get("points", self._default))
        except (OSError, ValueError, TypeError, AttributeError):
            self._logger.exception("Points load failed, using default balance")
            balance = self._default
        with self._lock:
            self._balance = max(0, balance)

    def save(self) -> None:
        with self._lock:
            try:
                write_json_atomic(self._path, {"points": self._balance})
            except OSError as e:
                raise PersistenceFailure(self._path, str(e)) from e
