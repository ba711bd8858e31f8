import random

from .models import Insight, TrackedApp

DIGITAL_WELLNESS_TIPS = [
    "Try setting specific screen time goals for different apps rather than a general limit for all screen time.",
    "Use the 20-20-20 rule: Every 20 minutes, look at something 20 feet away for 20 seconds.",
    "Keep your phone in another room while sleeping to improve sleep quality.",
    "Set up phone-free zones in your home, like the dining room or bedroom.",
    "Use grayscale mode to make your phone less visually appealing.",
    "Schedule specific times for checking social media instead of constant scrolling.",
    "Enable app time limits and stick to them - consistency builds healthy habits.",
    "Replace mindless scrolling with intentional activities like reading or exercise.",
]

PRODUCTIVE_DAY_THRESHOLD_MIN = 120

_PRODUCTIVE_DAY_DETAIL = "62% below average screen time"
_PEAK_USAGE = Insight(
    title="Peak Usage Time",
    value="9-11 PM",
    detail="Consider setting a digital curfew",
    icon_key="moon.stars",
    color_key="blue",
)


def get_insights(apps: list[TrackedApp]) -> list[Insight]:
    if not apps:
        return [
            Insight("No Apps Tracked", "Start Tracking", "Add apps to see insights", "plus.circle", "blue"),
            Insight("Most Productive Day", "Tuesday", _PRODUCTIVE_DAY_DETAIL, "calendar", "green"),
            _PEAK_USAGE,
        ]

    most_used = max(apps, key=lambda a: a.time_used)
    total_used = sum(a.time_used for a in apps)
    productive_day = "Today" if total_used < PRODUCTIVE_DAY_THRESHOLD_MIN else "Tuesday"

    return [
        Insight(
            "Most Used App",
            most_used.name,
            f"{most_used.time_used} min daily average",
            most_used.icon or "camera",
            "purple",
        ),
        Insight("Most Productive Day", productive_day, _PRODUCTIVE_DAY_DETAIL, "calendar", "green"),
        _PEAK_USAGE,
    ]


def random_tip(rng: random.Random | None = None) -> str:
    return (rng or random).choice(DIGITAL_WELLNESS_TIPS)
