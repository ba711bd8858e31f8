import pystray
from PIL import Image, ImageDraw

from .config import APP_TITLE, DEFAULT_TIME_LIMIT_MIN, UNLOCK_PRESETS_MIN
from .errors import UnpluggedError
from .insights import random_tip
from .models import ReminderFrequency, ReminderType


class TrayController:
    def __init__(self, title: str = APP_TITLE):
        self._title = title
        self._app = None
        self._badge = 0
        self._icon = pystray.Icon(
            "Unplugged",
            self._make_icon_image(0),
            title,
            pystray.Menu(self._menu_items),
        )

    @property
    def can_notify(self) -> bool:
        return bool(self._icon.HAS_NOTIFICATION)

    def attach(self, app) -> None:
        self._app = app
        app.add_listener(self.refresh)

    def _make_icon_image(self, badge: int) -> Image.Image:
        img = Image.new("RGB", (64, 64), color=(40, 40, 40))
        draw = ImageDraw.Draw(img)
        # padlock
        draw.arc((20, 8, 44, 40), start=180, end=360, fill=(52, 120, 246), width=6)
        draw.rectangle((20, 22, 25, 30), fill=(52, 120, 246))
        draw.rectangle((39, 22, 44, 30), fill=(52, 120, 246))
        draw.rounded_rectangle((12, 28, 52, 58), radius=7, fill=(52, 120, 246))
        draw.ellipse((28, 37, 36, 45), fill=(245, 245, 245))
        if badge > 0:
            draw.ellipse((36, 0, 64, 28), fill=(220, 50, 50))
            draw.text((44, 8), str(badge) if badge < 10 else "9+", fill=(255, 255, 255))
        return img

    def notify(self, message: str, title: str) -> None:
        self._icon.notify(message, title)

    def set_badge(self, count: int) -> None:
        count = max(0, int(count))
        if count == self._badge:
            return
        self._badge = count
        self._icon.icon = self._make_icon_image(count)

    def refresh(self) -> None:
        self._icon.update_menu()

    def run(self) -> None:
        self._icon.run()

    def stop(self) -> None:
        try:
            self._icon.stop()
        except Exception:
            pass

    # Menu
    def _menu_items(self):
        app = self._app
        if app is None:
            return (pystray.MenuItem("Quit", self._on_quit),)

        items = [
            pystray.MenuItem(f"Points: {app.points.balance}", None, enabled=False),
            pystray.Menu.SEPARATOR,
        ]
        for tracked in app.ledger.apps():
            items.append(pystray.MenuItem(app.describe(tracked), pystray.Menu(*self._app_items(tracked))))
        if not app.ledger.apps():
            items.append(pystray.MenuItem("(no apps tracked)", None, enabled=False))

        untracked = app.untracked_app_names()
        track_items = [
            pystray.MenuItem(f"{name} ({DEFAULT_TIME_LIMIT_MIN} min/day)", self._track(name))
            for name in untracked
        ] or [pystray.MenuItem("(all apps tracked)", None, enabled=False)]

        insight_items = [
            pystray.MenuItem(f"{i.title}: {i.value} ({i.detail})", None, enabled=False)
            for i in app.insights()
        ]

        items += [
            pystray.Menu.SEPARATOR,
            pystray.MenuItem("Track app", pystray.Menu(*track_items)),
            pystray.MenuItem("Insights", pystray.Menu(*insight_items)),
            pystray.MenuItem("Daily tip", self._on_tip),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem("Settings", pystray.Menu(*self._settings_items())),
            pystray.MenuItem("Reset App", self._on_reset),
            pystray.MenuItem("Quit", self._on_quit),
        ]
        return items

    def _app_items(self, tracked):
        app = self._app
        items = []
        if tracked.is_locked:
            cost = app.economy.cost
            for minutes in UNLOCK_PRESETS_MIN:
                items.append(
                    pystray.MenuItem(
                        f"Unlock for {minutes} min ({cost} points)",
                        self._unlock(tracked.id, minutes),
                        enabled=app.points.can_afford(cost),
                    )
                )
        else:
            items.append(pystray.MenuItem(f"{round(tracked.progress * 100)}% of daily limit", None, enabled=False))
        items.append(pystray.MenuItem("Stop tracking", self._untrack(tracked.id)))
        return items

    def _settings_items(self):
        app = self._app
        frequency_items = [
            pystray.MenuItem(
                freq.value,
                self._set_frequency(freq),
                checked=lambda item, f=freq: app.settings.reminder_frequency == f,
                radio=True,
            )
            for freq in ReminderFrequency
        ]
        type_items = [
            pystray.MenuItem(
                rtype.value,
                self._set_type(rtype),
                checked=lambda item, t=rtype: app.settings.reminder_type == t,
                radio=True,
            )
            for rtype in ReminderType
        ]
        return [
            pystray.MenuItem(
                "App tracking",
                lambda icon, item: app.set_tracking_enabled(not app.settings.tracking_enabled),
                checked=lambda item: app.settings.tracking_enabled,
            ),
            pystray.MenuItem(
                "Notifications",
                lambda icon, item: app.set_notifications_permitted(not app.settings.notifications_permitted),
                checked=lambda item: app.settings.notifications_permitted,
            ),
            pystray.MenuItem("Reminder frequency", pystray.Menu(*frequency_items)),
            pystray.MenuItem("Reminder type", pystray.Menu(*type_items)),
        ]

    # Actions
    def _run_action(self, fn, failure_title: str) -> None:
        try:
            fn()
        except UnpluggedError as e:
            self.notify(str(e), failure_title)

    def _unlock(self, app_id: str, minutes: int):
        def on_unlock(icon, item):
            def _do():
                result = self._app.unlock_app(app_id, minutes)
                self.notify(
                    f"{result.app.name} has been unlocked for {minutes} minutes. "
                    f"{result.points_left} points left.",
                    "App unlocked!",
                )

            self._run_action(_do, "Unlock failed")

        return on_unlock

    def _track(self, name: str):
        def on_track(icon, item):
            self._run_action(lambda: self._app.add_app(name, DEFAULT_TIME_LIMIT_MIN), "Could not track app")

        return on_track

    def _untrack(self, app_id: str):
        def on_untrack(icon, item):
            self._app.remove_app(app_id)

        return on_untrack

    def _set_frequency(self, frequency: ReminderFrequency):
        def on_frequency(icon, item):
            self._app.set_reminder(frequency=frequency)

        return on_frequency

    def _set_type(self, reminder_type: ReminderType):
        def on_type(icon, item):
            self._app.set_reminder(reminder_type=reminder_type)

        return on_type

    def _on_tip(self, icon, item) -> None:
        self.notify(random_tip(), "Daily Tip")

    def _on_reset(self, icon, item) -> None:
        self._app.reset()
        self.notify("All tracked apps were deleted and your points were reset.", "Reset App")

    def _on_quit(self, icon, item) -> None:
        self.stop()
