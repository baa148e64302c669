import unittest

from core.matcher import filter_mentors, MatchFilters
from tests.fixtures.factories import make_mentor


class TestFilterMentors(unittest.TestCase):

    def setUp(self):
        self.mentors = [
            make_mentor("en-150", hourly_rate=150.0, languages=["English"]),
            make_mentor("es-90", hourly_rate=90.0, languages=["English", "Spanish"], expertise=["Product Management"]),
            make_mentor("free", hourly_rate=None, languages=["French"], expertise=[]),
        ]

    def _ids(self, filters):
        return [m.id for m in filter_mentors(filters, self.mentors)]

    def test_empty_filters_keep_everyone(self):
        self.assertTrue(MatchFilters().is_empty())
        self.assertEqual(self._ids(MatchFilters()), ["en-150", "es-90", "free"])

    def test_language_is_case_insensitive(self):
        self.assertEqual(self._ids(MatchFilters(language="spanish")), ["es-90"])

    def test_budget_keeps_mentors_without_rate(self):
        self.assertEqual(self._ids(MatchFilters(max_budget=100)), ["es-90", "free"])
        self.assertEqual(self._ids(MatchFilters(min_budget=100)), ["en-150", "free"])

    def test_expertise_tags_match_any(self):
        filters = MatchFilters(expertise_tags=("software engineering", "product management"))
        self.assertEqual(self._ids(filters), ["en-150", "es-90"])

    def test_filters_combine(self):
        filters = MatchFilters(language="English", max_budget=100, expertise_tags=("Product Management",))
        self.assertEqual(self._ids(filters), ["es-90"])


if __name__ == '__main__':
    unittest.main()
