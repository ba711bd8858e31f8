import os
import logging
from typing import Callable

from .config import (
    APPS_FILE,
    POINTS_FILE,
    SETTINGS_FILE,
    AVAILABLE_APPS,
    DEFAULT_APPS,
    TICK_INTERVAL_SEC,
)
from .app_store import AppStore
from .errors import InvalidInput, PersistenceFailure
from .insights import get_insights
from .ledger import UsageLedger
from .logging_setup import get_logger
from .models import Insight, ReminderFrequency, ReminderType, TrackedApp, UnlockResult
from .notification_gate import NotificationGate
from .notifier import Notifier
from .points import PointsBalance
from .scheduler import Ticker
from .settings_store import SettingsStore
from .unlock import UnlockEconomy
from .utils import format_minutes


class UnpluggedApp:
    """Composition root: owns every service and the tick driver.

    Validation errors (``InvalidInput``, ``InsufficientPoints``) reach the
    caller. Persistence failures are logged and the in-memory state stays
    authoritative.
    """

    def __init__(
        self,
        tray=None,
        data_dir: str | None = None,
        logger: logging.Logger | None = None,
        tick_interval_sec: float = TICK_INTERVAL_SEC,
        notifier: Notifier | None = None,
    ):
        self.logger = get_logger(logger)
        self._listeners: list[Callable[[], None]] = []

        self.settings_store = SettingsStore(self._data_path(data_dir, SETTINGS_FILE), self.logger)
        self.settings = self.settings_store.load()

        self.points = PointsBalance(self._data_path(data_dir, POINTS_FILE), self.logger)
        self.points.load()

        self.gate = NotificationGate()
        self.notifier = notifier or Notifier(tray, self.settings, self.logger)
        self.ledger = UsageLedger(self.gate, self.notifier, self.logger)
        self.economy = UnlockEconomy(self.gate, self.logger)

        self.store = AppStore(self._data_path(data_dir, APPS_FILE), self.logger)
        self._load_apps()

        self._ticker = Ticker(tick_interval_sec, self.tick, name="usage-tick", logger=self.logger)

    @staticmethod
    def _data_path(data_dir: str | None, default_path: str) -> str:
        if data_dir is None:
            return default_path
        return os.path.join(data_dir, os.path.basename(default_path))

    def _load_apps(self) -> None:
        first_run = not os.path.exists(self.store.path)
        for app in self.store.load():
            try:
                self.ledger.insert(app)
            except InvalidInput as e:
                self.logger.warning(f"Skipping stored app {app.name}: {e}")

        if first_run and len(self.ledger) == 0:
            for name, icon, used, limit, locked in DEFAULT_APPS:
                self.ledger.insert(
                    TrackedApp(name=name, icon=icon, time_used=used, time_limit=limit, is_locked=locked)
                )
            self.logger.info(f"Seeded default apps count={len(DEFAULT_APPS)}")
            self._persist("seed apps", self.store.save, self._snapshot_apps())

        self.logger.info(f"Loaded apps count={len(self.ledger)} points={self.points.balance}")

    def _persist(self, action: str, fn, *args) -> bool:
        try:
            fn(*args)
            return True
        except PersistenceFailure as e:
            self.logger.error(f"Persistence failure during {action}: {e}")
            return False

    # Listeners (the tray refreshes its menu through these)
    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def _changed(self) -> None:
        for callback in list(self._listeners):
            try:
                callback()
            except Exception:
                self.logger.exception("Change listener failed")

    # Lifecycle
    @property
    def running(self) -> bool:
        return self._ticker.running

    def start(self) -> None:
        self._ticker.start()
        self._schedule_reminder()
        self.logger.info("Tracking driver started")

    def stop(self) -> None:
        self._ticker.stop()
        self.notifier.cancel_all()
        self.save_all()
        self.logger.info("Tracking driver stopped")

    def _snapshot_apps(self) -> list[TrackedApp]:
        # copies taken under the writer lock never show a half-applied tick or unlock
        with self.ledger.lock:
            return [app.snapshot() for app in self.ledger.apps()]

    def save_all(self) -> None:
        self._persist("save apps", self.store.save, self._snapshot_apps())
        self._persist("save points", self.points.save)
        self._persist("save settings", self.settings_store.save, self.settings)

    # Tracking
    def tick(self) -> None:
        if not self.settings.tracking_enabled:
            return
        with self.ledger.lock:
            self.ledger.tick(self.settings.tracking_enabled)
            apps = self._snapshot_apps()
        self._persist("save apps", self.store.save, apps)
        self._changed()

    def add_app(self, name: str, time_limit) -> TrackedApp:
        known = self._lookup(name)
        if known is None:
            raise InvalidInput(f"{name!r} is not an app that can be tracked")
        with self.ledger.lock:
            app = self.ledger.add(known[0], known[1], time_limit)
            record = app.snapshot()
        self._persist("insert app", self.store.insert, record)
        self._changed()
        return app

    def remove_app(self, app_id: str) -> bool:
        app = self.ledger.remove(app_id)
        if app is None:
            return False
        self._persist("delete app", self.store.delete, app_id)
        self._changed()
        return True

    def unlock_app(self, app_id: str, minutes) -> UnlockResult:
        with self.ledger.lock:
            app = self.ledger.get(app_id)
            if app is None:
                raise InvalidInput(f"unknown app id {app_id!r}")
            result = self.economy.request_unlock(app, minutes, self.points)
            apps = self._snapshot_apps()
        self._persist("save apps", self.store.save, apps)
        self._persist("save points", self.points.save)
        self._changed()
        return result

    def reset(self) -> None:
        with self.ledger.lock:
            self.ledger.clear()
            self.gate.clear_all()
            self.points.reset()
        self.notifier.cancel_all()
        self._schedule_reminder()
        self._persist("delete all apps", self.store.delete_all)
        self._persist("save points", self.points.save)
        self.logger.info(f"App reset points={self.points.balance}")
        self._changed()

    # Settings
    def set_tracking_enabled(self, enabled: bool) -> None:
        self.settings.tracking_enabled = bool(enabled)
        self.logger.info(f"Tracking toggled enabled={self.settings.tracking_enabled}")
        self._persist("save settings", self.settings_store.save, self.settings)
        self._changed()

    def set_notifications_permitted(self, permitted: bool) -> None:
        self.settings.notifications_permitted = bool(permitted)
        self.logger.info(f"Notifications permitted={self.settings.notifications_permitted}")
        self._persist("save settings", self.settings_store.save, self.settings)
        if self.settings.notifications_permitted:
            self._schedule_reminder()
        else:
            self.notifier.cancel_all()
        self._changed()

    def set_reminder(
        self,
        frequency: ReminderFrequency | None = None,
        reminder_type: ReminderType | None = None,
    ) -> None:
        if frequency is not None:
            self.settings.reminder_frequency = frequency
        if reminder_type is not None:
            self.settings.reminder_type = reminder_type
        self._persist("save settings", self.settings_store.save, self.settings)
        self._schedule_reminder()
        self._changed()

    def _schedule_reminder(self) -> None:
        if not self.running:
            return
        self.notifier.notify_general(self.settings.reminder_frequency, self.settings.reminder_type)

    # Display helpers
    @staticmethod
    def _lookup(name: str) -> tuple[str, str] | None:
        key = (name or "").strip().lower()
        for app_name, icon in AVAILABLE_APPS:
            if app_name.lower() == key:
                return app_name, icon
        return None

    def untracked_app_names(self) -> list[str]:
        return [name for name, _ in AVAILABLE_APPS if self.ledger.find(name) is None]

    @staticmethod
    def describe(app: TrackedApp) -> str:
        lock = " (locked)" if app.is_locked else ""
        return f"{app.name}  {format_minutes(app.time_used)} / {format_minutes(app.time_limit)}{lock}"

    def insights(self) -> list[Insight]:
        return get_insights(self.ledger.apps())
