import copy
import enum
import uuid
from dataclasses import dataclass, field


def new_app_id() -> str:
    return uuid.uuid4().hex


@dataclass
class TrackedApp:
    name: str
    icon: str
    time_limit: int
    time_used: int = 0
    is_locked: bool = False
    id: str = field(default_factory=new_app_id)

    @property
    def progress(self) -> float:
        if self.time_limit <= 0:
            return 1.0
        return min(self.time_used / self.time_limit, 1.0)

    @property
    def remaining(self) -> int:
        return self.time_limit - self.time_used

    def snapshot(self) -> "TrackedApp":
        return copy.copy(self)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "time_used": self.time_used,
            "time_limit": self.time_limit,
            "is_locked": self.is_locked,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TrackedApp":
        name = str(data.get("name") or "").strip()
        if not name:
            raise ValueError("tracked app without a name")
        time_limit = int(data["time_limit"])
        if time_limit <= 0:
            raise ValueError(f"non-positive time limit for {name}: {time_limit}")
        return cls(
            id=str(data.get("id") or new_app_id()),
            name=name,
            icon=str(data.get("icon", "")),
            time_used=max(0, int(data.get("time_used", 0))),
            time_limit=time_limit,
            is_locked=bool(data.get("is_locked", False)),
        )


class ReminderFrequency(enum.Enum):
    HOURLY = "Hourly"
    DAILY = "Daily"
    WEEKLY = "Weekly"

    @property
    def interval_sec(self) -> int:
        return {
            ReminderFrequency.HOURLY: 3600,
            ReminderFrequency.DAILY: 86400,
            ReminderFrequency.WEEKLY: 604800,
        }[self]

    @property
    def reminder_id(self) -> str:
        return f"{self.value.lower()}_reminder"


class ReminderType(enum.Enum):
    NOTIFICATION = "Notification"
    BADGE = "Badge"
    SOUND = "Sound"
    ALL = "All"

    @property
    def plays_sound(self) -> bool:
        return self in (ReminderType.SOUND, ReminderType.ALL)

    @property
    def shows_badge(self) -> bool:
        return self in (ReminderType.BADGE, ReminderType.ALL)


class UnlockPolicy(enum.Enum):
    NEW_LIMIT = "new_limit"
    USAGE_REDUCED = "usage_reduced"


@dataclass(frozen=True)
class UnlockResult:
    policy: UnlockPolicy
    app: TrackedApp
    points_left: int


@dataclass(frozen=True)
class Insight:
    title: str
    value: str
    detail: str
    icon_key: str
    color_key: str


@dataclass
class Settings:
    tracking_enabled: bool = True
    reminder_frequency: ReminderFrequency = ReminderFrequency.DAILY
    reminder_type: ReminderType = ReminderType.NOTIFICATION
    notifications_permitted: bool = True

    def to_dict(self) -> dict:
        return {
            "tracking_enabled": self.tracking_enabled,
            "reminder_frequency": self.reminder_frequency.value,
            "reminder_type": self.reminder_type.value,
            "notifications_permitted": self.notifications_permitted,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        settings = cls()
        settings.tracking_enabled = bool(data.get("tracking_enabled", True))
        settings.notifications_permitted = bool(data.get("notifications_permitted", True))
        try:
            settings.reminder_frequency = ReminderFrequency(data.get("reminder_frequency"))
        except ValueError:
            pass
        try:
            settings.reminder_type = ReminderType(data.get("reminder_type"))
        except ValueError:
            pass
        return settings
