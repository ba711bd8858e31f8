import logging
import threading
from typing import Callable

from .audio import play_alert_chime
from .logging_setup import get_logger
from .models import ReminderFrequency, ReminderType, Settings, TrackedApp
from .scheduler import Ticker

WARNING_TITLE = "Screen Time Warning"
LIMIT_TITLE = "Time Limit Reached"
GENERAL_TITLE = "Digital Wellbeing Reminder"
GENERAL_BODY = "Time to check your screen time progress and take a mindful break!"


class Notifier:
    def __init__(
        self,
        tray,
        settings: Settings,
        logger: logging.Logger | None = None,
        play_sound: Callable[[logging.Logger], None] = play_alert_chime,
        ticker_factory=Ticker,
    ):
        self._tray = tray
        self._settings = settings
        self._logger = get_logger(logger)
        self._play_sound = play_sound
        self._ticker_factory = ticker_factory
        self._lock = threading.Lock()
        self._pending: dict[str, Ticker] = {}
        self._badge = 0

    @property
    def permission_granted(self) -> bool:
        if self._tray is None or not self._settings.notifications_permitted:
            return False
        return bool(getattr(self._tray, "can_notify", True))

    @property
    def badge(self) -> int:
        with self._lock:
            return self._badge

    def pending_ids(self) -> list[str]:
        with self._lock:
            return list(self._pending)

    def notify_warning(self, app: TrackedApp) -> bool:
        body = f"{app.name} is at 80% of your daily limit. Consider taking a break!"
        return self._post(WARNING_TITLE, body, self._settings.reminder_type)

    def notify_limit_reached(self, app: TrackedApp) -> bool:
        body = f"{app.name} has reached its daily limit and is now locked. Take a well-deserved break!"
        return self._post(LIMIT_TITLE, body, self._settings.reminder_type)

    def notify_general(self, frequency: ReminderFrequency, reminder_type: ReminderType) -> bool:
        if not self.permission_granted:
            return False

        # only one general reminder is pending at a time
        for other in ReminderFrequency:
            self.cancel(other.reminder_id)

        ticker = self._ticker_factory(
            frequency.interval_sec,
            lambda: self._post(GENERAL_TITLE, GENERAL_BODY, reminder_type),
            name=frequency.reminder_id,
            logger=self._logger,
        )
        with self._lock:
            self._pending[frequency.reminder_id] = ticker
        ticker.start()
        self._logger.info(f"General reminder scheduled frequency={frequency.value} type={reminder_type.value}")
        return True

    def cancel(self, reminder_id: str) -> None:
        with self._lock:
            ticker = self._pending.pop(reminder_id, None)
        if ticker is not None:
            ticker.stop()

    def cancel_all(self) -> None:
        with self._lock:
            tickers = list(self._pending.values())
            self._pending.clear()
        for ticker in tickers:
            ticker.stop()
        self.clear_badge()
        self._logger.info("All pending notifications cancelled")

    def clear_badge(self) -> None:
        with self._lock:
            self._badge = 0
        if self._tray is not None:
            try:
                self._tray.set_badge(0)
            except Exception:
                self._logger.exception("Clearing tray badge failed")

    def _post(self, title: str, body: str, reminder_type: ReminderType) -> bool:
        if not self.permission_granted:
            self._logger.debug(f"Notification dropped, no permission title={title}")
            return False

        try:
            self._tray.notify(body, title)
            if reminder_type.shows_badge:
                with self._lock:
                    self._badge += 1
                    badge = self._badge
                self._tray.set_badge(badge)
            if reminder_type.plays_sound:
                self._play_sound(self._logger)
        except Exception:
            self._logger.exception(f"Notification delivery failed title={title}")
            return False

        self._logger.info(f"Notification sent title={title}")
        return True
