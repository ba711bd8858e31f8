import threading

from .config import WARNING_RATIO
from .models import TrackedApp


class NotificationGate:
    """At most one warning and one limit notification per app per lock cycle.

    The flags live until the app is unlocked (``clear_flags``) or the whole
    app is reset (``clear_all``).
    """

    def __init__(self, warning_ratio: float = WARNING_RATIO):
        self._warning_ratio = warning_ratio
        self._lock = threading.Lock()
        self._warnings_sent: set[str] = set()
        self._limits_sent: set[str] = set()

    def should_warn(self, app: TrackedApp) -> bool:
        if app.time_limit <= 0:
            return False
        ratio = app.time_used / app.time_limit
        with self._lock:
            return ratio >= self._warning_ratio and app.id not in self._warnings_sent

    def should_alert_limit(self, app: TrackedApp) -> bool:
        with self._lock:
            return app.time_used >= app.time_limit and app.id not in self._limits_sent

    def mark_warned(self, app_id: str) -> None:
        with self._lock:
            self._warnings_sent.add(app_id)

    def mark_limit_alerted(self, app_id: str) -> None:
        with self._lock:
            self._limits_sent.add(app_id)

    def clear_flags(self, app_id: str) -> None:
        with self._lock:
            self._warnings_sent.discard(app_id)
            self._limits_sent.discard(app_id)

    def clear_all(self) -> None:
        with self._lock:
            self._warnings_sent.clear()
            self._limits_sent.clear()

    @property
    def warnings_sent(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._warnings_sent)

    @property
    def limits_sent(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._limits_sent)
