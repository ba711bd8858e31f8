import logging
import threading

from .config import TICK_STEP_MINUTES
from .errors import InvalidInput
from .logging_setup import get_logger
from .models import TrackedApp
from .notification_gate import NotificationGate
from .utils import parse_positive_int


class UsageLedger:
    def __init__(
        self,
        gate: NotificationGate,
        notifier=None,
        logger: logging.Logger | None = None,
        step_minutes: int = TICK_STEP_MINUTES,
    ):
        self._gate = gate
        self._notifier = notifier
        self._logger = get_logger(logger)
        self._step = int(step_minutes)
        # Single writer: ticks and unlocks both hold this while mutating apps
        self.lock = threading.RLock()
        self._apps: dict[str, TrackedApp] = {}

    def add(self, name: str, icon: str, time_limit) -> TrackedApp:
        name = (name or "").strip()
        if not name:
            raise InvalidInput("app name is required")
        limit = parse_positive_int(time_limit)
        if limit is None:
            raise InvalidInput(f"time limit must be a positive number of minutes, got {time_limit!r}")
        app = TrackedApp(name=name, icon=icon, time_limit=limit)
        self.insert(app)
        self._logger.info(f"App tracked name={app.name} limit={app.time_limit}")
        return app

    def insert(self, app: TrackedApp) -> None:
        with self.lock:
            if app.id in self._apps:
                raise InvalidInput(f"app id already tracked: {app.id}")
            if self.find(app.name) is not None:
                raise InvalidInput(f"{app.name} is already tracked")
            self._apps[app.id] = app

    def remove(self, app_id: str) -> TrackedApp | None:
        with self.lock:
            app = self._apps.pop(app_id, None)
        if app is not None:
            self._gate.clear_flags(app_id)
            self._logger.info(f"App untracked name={app.name}")
        return app

    def clear(self) -> None:
        with self.lock:
            self._apps.clear()

    def get(self, app_id: str) -> TrackedApp | None:
        with self.lock:
            return self._apps.get(app_id)

    def find(self, name: str) -> TrackedApp | None:
        key = (name or "").strip().lower()
        with self.lock:
            for app in self._apps.values():
                if app.name.lower() == key:
                    return app
        return None

    def apps(self) -> list[TrackedApp]:
        with self.lock:
            return list(self._apps.values())

    def __len__(self) -> int:
        with self.lock:
            return len(self._apps)

    def tick(self, tracking_enabled: bool) -> None:
        if not tracking_enabled:
            return

        with self.lock:
            for app in self._apps.values():
                if app.is_locked or app.time_used >= app.time_limit:
                    continue

                app.time_used += self._step
                if app.time_used >= app.time_limit:
                    app.is_locked = True
                    self._logger.info(f"App locked name={app.name} used={app.time_used} limit={app.time_limit}")

                self._check_notifications(app)

    def _check_notifications(self, app: TrackedApp) -> None:
        if self._gate.should_warn(app):
            self._gate.mark_warned(app.id)
            self._deliver("notify_warning", app)

        if self._gate.should_alert_limit(app):
            self._gate.mark_limit_alerted(app.id)
            self._deliver("notify_limit_reached", app)

    def _deliver(self, method: str, app: TrackedApp) -> None:
        if self._notifier is None:
            return
        try:
            getattr(self._notifier, method)(app)
        except Exception:
            self._logger.exception(f"Notifier {method} failed for {app.name}")
