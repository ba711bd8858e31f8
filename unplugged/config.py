import os

APP_TITLE = "Unplugged"
LOGGER_NAME = "Unplugged"
APPDATA_DIR = os.path.join(os.getenv("APPDATA") or os.path.expanduser("~"), "Unplugged")

APPS_FILE = os.path.join(APPDATA_DIR, "tracked_apps.json")
POINTS_FILE = os.path.join(APPDATA_DIR, "points.json")
SETTINGS_FILE = os.path.join(APPDATA_DIR, "settings.json")

LOG_DIR = os.path.join(APPDATA_DIR, "logs")
LOG_FILE = os.path.join(LOG_DIR, "unplugged.log")

# The tick driver adds TICK_STEP_MINUTES of usage every TICK_INTERVAL_SEC
TICK_INTERVAL_SEC = 5.0
TICK_STEP_MINUTES = 1

WARNING_RATIO = 0.8

# Points economy
DEFAULT_POINTS = 250
UNLOCK_COST_POINTS = 50
UNLOCK_PRESETS_MIN = (15, 30, 60)

DEFAULT_TIME_LIMIT_MIN = 60

AVAILABLE_APPS = [
    ("Instagram", "camera"),
    ("Facebook", "f.square"),
    ("Twitter", "bird"),
    ("Snapchat", "bolt"),
    ("TikTok", "music.note"),
    ("YouTube", "play.rectangle"),
    ("Reddit", "mail"),
    ("WhatsApp", "message"),
    ("Discord", "message.badge"),
    ("Netflix", "tv"),
]

# (name, icon, time_used, time_limit, is_locked) seeded on first run
DEFAULT_APPS = [
    ("Instagram", "camera", 30, 50, False),
    ("Facebook", "f.square", 60, 60, True),
]

# Alert chime
CHIME_NOTES_HZ = (659.25, 523.25, 392.00)
CHIME_NOTE_SEC = 0.16
CHIME_VOLUME = 0.45
SAMPLE_RATE = 44100
