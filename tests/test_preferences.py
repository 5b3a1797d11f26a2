import threading
import unittest
from datetime import datetime, timedelta, timezone

from valuation.preferences import PreferenceStore, is_valid_percentage, is_valid_rate
from valuation.presets import match_preset


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 10, 18, 6, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.now += timedelta(minutes=1)
        return self.now


class PreferenceStoreTests(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.store = PreferenceStore(clock=self.clock)
        self.user = "whatsapp:+6591234567"

    def test_get_creates_defaults(self):
        pref = self.store.get(self.user)
        self.assertEqual(pref.user_id, self.user)
        self.assertEqual(pref.percentage, 0.93)
        self.assertEqual(pref.exchange_rate, 5.43)
        self.assertEqual(pref.active_preset, "default")
        self.assertIsNone(pref.last_updated)
        self.assertIn(self.user, self.store)
        self.assertEqual(len(self.store), 1)

    def test_get_is_idempotent(self):
        first = self.store.get(self.user)
        second = self.store.get(self.user)
        self.assertEqual(first, second)
        self.assertEqual(len(self.store), 1)

    def test_get_returns_copy(self):
        pref = self.store.get(self.user)
        pref.percentage = 0.5
        self.assertEqual(self.store.get(self.user).percentage, 0.93)

    def test_preset_overrides_values(self):
        pref = self.store.update(self.user, new_rate=9.0, new_percentage=50, preset_name="high")
        self.assertEqual(pref.percentage, 0.935)
        self.assertEqual(pref.exchange_rate, 5.43)
        self.assertEqual(pref.active_preset, "high")
        self.assertIsNotNone(pref.last_updated)

    def test_unknown_preset_falls_back_to_values(self):
        pref = self.store.update(self.user, new_rate=5.5, preset_name="nope")
        self.assertEqual(pref.exchange_rate, 5.5)
        self.assertEqual(pref.active_preset, "custom_rate_high")

    def test_rate_only_keeps_percentage(self):
        self.store.update(self.user, new_percentage=92.5)
        pref = self.store.update(self.user, new_rate=5.45)
        self.assertAlmostEqual(pref.percentage, 0.925)
        self.assertEqual(pref.exchange_rate, 5.45)
        self.assertEqual(pref.active_preset, "custom")

    def test_percentage_stored_as_fraction(self):
        pref = self.store.update(self.user, new_percentage=100)
        self.assertEqual(pref.percentage, 1.0)

    def test_invalid_values_leave_record_untouched(self):
        before = self.store.get(self.user)
        for rate, percentage in [(0, 0), (-1, -5), (None, 150), (float("inf"), float("nan"))]:
            with self.subTest(rate=rate, percentage=percentage):
                after = self.store.update(self.user, new_rate=rate, new_percentage=percentage)
                self.assertEqual(after, before)
                self.assertIsNone(after.last_updated)

    def test_update_refreshes_timestamp(self):
        first = self.store.update(self.user, new_rate=5.5)
        second = self.store.update(self.user, new_rate=5.6)
        self.assertGreater(second.last_updated, first.last_updated)

    def test_values_matching_preset_within_tolerance(self):
        pref = self.store.update(self.user, new_rate=5.435, new_percentage=93.05)
        self.assertEqual(pref.active_preset, "default")

    def test_reset_restores_defaults(self):
        self.store.update(self.user, new_rate=6.1, new_percentage=80)
        pref = self.store.reset(self.user)
        self.assertEqual(pref.percentage, 0.93)
        self.assertEqual(pref.exchange_rate, 5.43)
        self.assertEqual(pref.active_preset, "default")

    def test_users_are_isolated(self):
        self.store.update("alice", new_rate=6.0)
        self.assertEqual(self.store.get("bob").exchange_rate, 5.43)

    def test_concurrent_updates_for_distinct_users(self):
        def worker(n):
            for _ in range(50):
                self.store.update(f"user-{n}", new_percentage=90 + n)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(self.store), 8)
        for n in range(8):
            self.assertAlmostEqual(self.store.get(f"user-{n}").percentage, (90 + n) / 100)


class ValidationTests(unittest.TestCase):
    def test_rate(self):
        self.assertTrue(is_valid_rate(5.43))
        self.assertFalse(is_valid_rate(0))
        self.assertFalse(is_valid_rate(-2))
        self.assertFalse(is_valid_rate(None))
        self.assertFalse(is_valid_rate(float("inf")))

    def test_percentage(self):
        self.assertTrue(is_valid_percentage(100))
        self.assertTrue(is_valid_percentage(0.5))
        self.assertFalse(is_valid_percentage(0))
        self.assertFalse(is_valid_percentage(100.01))
        self.assertFalse(is_valid_percentage(float("nan")))

    def test_match_preset(self):
        self.assertEqual(match_preset(0.92, 5.43), "low")
        self.assertEqual(match_preset(0.93, 5.35), "custom_rate_low")
        self.assertEqual(match_preset(0.90, 5.43), "custom")


if __name__ == "__main__":
    unittest.main()
