import unittest
from datetime import datetime, timedelta, timezone

from core.utils import ensure_utc, round_half_up, minutes_between


class TestRoundHalfUp(unittest.TestCase):

    def test_half_rounds_up(self):
        self.assertEqual(round_half_up(4.25, 1), 4.3)
        self.assertEqual(round_half_up(4.35, 1), 4.4)

    def test_other_values(self):
        self.assertEqual(round_half_up(4.0, 1), 4.0)
        self.assertEqual(round_half_up(13 / 3, 1), 4.3)
        self.assertEqual(round_half_up(2.5, 0), 3.0)


class TestTimeHelpers(unittest.TestCase):

    def test_naive_is_assumed_utc(self):
        naive = datetime(2026, 1, 1, 12, 0)
        self.assertEqual(ensure_utc(naive), datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))

    def test_offsets_are_converted(self):
        plus_two = datetime(2026, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        self.assertEqual(ensure_utc(plus_two), datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))
        self.assertIsNone(ensure_utc(None))

    def test_minutes_between_rounds(self):
        start = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.assertEqual(minutes_between(start, start + timedelta(minutes=44, seconds=30)), 45)
        self.assertEqual(minutes_between(start, start + timedelta(minutes=44, seconds=29)), 44)


if __name__ == '__main__':
    unittest.main()
