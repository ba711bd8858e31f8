"""
Tests for the JSON stores: tracked apps, points and settings.
"""

import json
import os
import tempfile
import threading
import unittest
from unittest.mock import patch

from unplugged.app_store import AppStore
from unplugged.errors import InsufficientPoints, PersistenceFailure
from unplugged.models import ReminderFrequency, ReminderType, Settings, TrackedApp
from unplugged.points import PointsBalance
from unplugged.settings_store import SettingsStore


class StoreTestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def path(self, name):
        return os.path.join(self.dir, name)


class TestAppStore(StoreTestCase):

    def test_missing_file_loads_empty(self):
        self.assertEqual(AppStore(self.path("apps.json")).load(), [])

    def test_save_then_load(self):
        store = AppStore(self.path("apps.json"))
        apps = [
            TrackedApp(name="Instagram", icon="camera", time_used=30, time_limit=50),
            TrackedApp(name="Facebook", icon="f.square", time_used=60, time_limit=60, is_locked=True),
        ]
        store.save(apps)

        loaded = AppStore(self.path("apps.json")).load()

        self.assertEqual(loaded, apps)

    def test_insert_and_delete(self):
        store = AppStore(self.path("apps.json"))
        a = TrackedApp(name="Instagram", icon="camera", time_limit=50)
        b = TrackedApp(name="TikTok", icon="music.note", time_limit=45)
        store.insert(a)
        store.insert(b)
        store.delete(a.id)

        loaded = AppStore(self.path("apps.json")).load()

        self.assertEqual([app.id for app in loaded], [b.id])

    def test_delete_all(self):
        store = AppStore(self.path("apps.json"))
        store.insert(TrackedApp(name="Instagram", icon="camera", time_limit=50))
        store.delete_all()

        self.assertEqual(AppStore(self.path("apps.json")).load(), [])
        self.assertTrue(os.path.exists(self.path("apps.json")))

    def test_corrupt_file_loads_empty(self):
        with open(self.path("apps.json"), "w", encoding="utf-8") as f:
            f.write("{not json")
        self.assertEqual(AppStore(self.path("apps.json")).load(), [])

    def test_bad_records_are_skipped(self):
        good = TrackedApp(name="Instagram", icon="camera", time_limit=50).to_dict()
        data = {"apps": [good, {"name": "", "time_limit": 10}, {"name": "X", "time_limit": 0}, {"name": "Y"}, "junk"]}
        with open(self.path("apps.json"), "w", encoding="utf-8") as f:
            json.dump(data, f)

        loaded = AppStore(self.path("apps.json")).load()

        self.assertEqual([app.name for app in loaded], ["Instagram"])

    def test_concurrent_saves_keep_file_intact(self):
        """Saves from the tick thread and a menu action never collide."""
        store = AppStore(self.path("apps.json"))
        apps = [
            TrackedApp(name="Instagram", icon="camera", time_used=30, time_limit=50),
            TrackedApp(name="TikTok", icon="music.note", time_used=5, time_limit=45),
        ]
        errors = []

        def worker():
            for _ in range(200):
                try:
                    store.save(apps)
                except PersistenceFailure as e:
                    errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(errors, [])
        self.assertEqual(AppStore(self.path("apps.json")).load(), apps)
        self.assertEqual(os.listdir(self.dir), ["apps.json"])

    def test_write_failure_raises_persistence_failure(self):
        store = AppStore(self.path("apps.json"))
        with patch("unplugged.app_store.write_json_atomic", side_effect=OSError("disk full")):
            with self.assertRaises(PersistenceFailure) as ctx:
                store.save([])
        self.assertEqual(ctx.exception.path, self.path("apps.json"))


class TestPointsBalance(StoreTestCase):

    def test_default_balance(self):
        self.assertEqual(PointsBalance(self.path("points.json")).balance, 250)

    def test_debit_and_persist(self):
        points = PointsBalance(self.path("points.json"))
        self.assertEqual(points.debit(50), 200)
        points.save()

        reloaded = PointsBalance(self.path("points.json"))
        reloaded.load()
        self.assertEqual(reloaded.balance, 200)

    def test_debit_over_balance_raises(self):
        points = PointsBalance(self.path("points.json"), default=40)
        with self.assertRaises(InsufficientPoints):
            points.debit(50)
        self.assertEqual(points.balance, 40)

    def test_reset(self):
        points = PointsBalance(self.path("points.json"))
        points.debit(200)
        points.reset()
        self.assertEqual(points.balance, 250)

    def test_corrupt_file_uses_default(self):
        with open(self.path("points.json"), "w", encoding="utf-8") as f:
            f.write("[1, 2")
        points = PointsBalance(self.path("points.json"))
        points.load()
        self.assertEqual(points.balance, 250)

    def test_concurrent_saves(self):
        points = PointsBalance(self.path("points.json"))
        points.debit(50)
        errors = []

        def worker():
            for _ in range(100):
                try:
                    points.save()
                except PersistenceFailure as e:
                    errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        reloaded = PointsBalance(self.path("points.json"))
        reloaded.load()
        self.assertEqual(errors, [])
        self.assertEqual(reloaded.balance, 200)

    def test_save_failure(self):
        points = PointsBalance(self.path("points.json"))
        with patch("unplugged.points.write_json_atomic", side_effect=OSError("read-only")):
            with self.assertRaises(PersistenceFailure):
                points.save()


class TestSettingsStore(StoreTestCase):

    def test_defaults(self):
        settings = SettingsStore(self.path("settings.json")).load()
        self.assertEqual(settings, Settings())
        self.assertTrue(settings.tracking_enabled)
        self.assertEqual(settings.reminder_frequency, ReminderFrequency.DAILY)
        self.assertEqual(settings.reminder_type, ReminderType.NOTIFICATION)

    def test_round_trip(self):
        store = SettingsStore(self.path("settings.json"))
        store.save(Settings(False, ReminderFrequency.HOURLY, ReminderType.ALL, False))

        self.assertEqual(store.load(), Settings(False, ReminderFrequency.HOURLY, ReminderType.ALL, False))

    def test_unknown_values_fall_back(self):
        with open(self.path("settings.json"), "w", encoding="utf-8") as f:
            json.dump({"reminder_frequency": "Monthly", "reminder_type": "Vibrate", "tracking_enabled": False}, f)

        settings = SettingsStore(self.path("settings.json")).load()

        self.assertFalse(settings.tracking_enabled)
        self.assertEqual(settings.reminder_frequency, ReminderFrequency.DAILY)
        self.assertEqual(settings.reminder_type, ReminderType.NOTIFICATION)


if __name__ == "__main__":
    unittest.main()
