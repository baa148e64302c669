import os
import tempfile
import unittest
from unittest.mock import patch, Mock

from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from core.config_loader import DatabaseConfig
from core.exceptions import ValidationError
from core.mentors import MentorStatus
from database.database import build_engine
from database.init_db import init_db, load_seed_mentors, seed_mentors
from database.repositories.memory import InMemoryMentorRepository

SEED_YAML = """
mentors:
  - id: mentor-1
    first_name: Ada
    last_name: Lovelace
    title: Staff Engineer
    expertise:
      - category: Software Engineering
        years_experience: 12
        level: expert
    availability:
      - day_of_week: 2
        start_time: "09:00"
        end_time: "12:00"
    metrics:
      average_rating: 4.8
      total_students: 12
    languages: [English, French]
  - id: mentor-2
    first_name: Grace
    last_name: Hopper
    status: INACTIVE
"""


class TestSeedLoading(unittest.TestCase):

    def _write(self, content):
        handle = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False)
        handle.write(content)
        handle.close()
        self.addCleanup(os.unlink, handle.name)
        return handle.name

    def test_load_seed_mentors(self):
        mentors = load_seed_mentors(self._write(SEED_YAML))

        self.assertEqual([m.id for m in mentors], ["mentor-1", "mentor-2"])
        ada = mentors[0]
        self.assertEqual(ada.expertise[0].category, "Software Engineering")
        self.assertEqual(ada.availability[0].start_time, "09:00")
        self.assertEqual(ada.metrics.average_rating, 4.8)
        self.assertEqual(ada.metrics.total_sessions, 0)
        self.assertEqual(ada.languages, ["English", "French"])
        self.assertEqual(mentors[1].status, MentorStatus.INACTIVE)

    def test_empty_file_gives_no_mentors(self):
        self.assertEqual(load_seed_mentors(self._write("")), [])

    def test_unknown_field_rejected(self):
        path = self._write("mentors:\n  - id: m\n    first_name: A\n    last_name: B\n    shoe_size: 44\n")
        with self.assertRaises(ValidationError):
            load_seed_mentors(path)

    def test_invalid_metrics_rejected(self):
        path = self._write("mentors:\n  - id: m\n    first_name: A\n    last_name: B\n    metrics: {average_rating: 7}\n")
        with self.assertRaises(ValidationError):
            load_seed_mentors(path)

    def test_example_seed_file_loads(self):
        path = os.path.join(os.path.dirname(__file__), "..", "..", "..", "seeds", "mentors.example.yaml")
        mentors = load_seed_mentors(path)
        self.assertEqual([m.full_name for m in mentors], ["Ada Lovelace", "Grace Hopper"])

    def test_seed_mentors_saves_all(self):
        repo = InMemoryMentorRepository()
        count = seed_mentors(repo, load_seed_mentors(self._write(SEED_YAML)))
        self.assertEqual(count, 2)
        self.assertEqual(repo.get("mentor-1").last_name, "Lovelace")


class TestInitDb(unittest.TestCase):

    def test_creates_tables(self):
        engine = build_engine(DatabaseConfig(url="sqlite://"))
        init_db(engine)
        tables = set(inspect(engine).get_table_names())
        self.assertTrue({"mentor_profile", "coaching_session", "session_participant", "session_feedback"} <= tables)

    @patch('database.init_db.Base')
    def test_retries_until_database_is_up(self, mock_base):
        mock_base.metadata.create_all.side_effect = [
            OperationalError("CREATE", {}, Exception("starting up")),
            None,
        ]
        with patch('time.sleep'):
            init_db(Mock())
        self.assertEqual(mock_base.metadata.create_all.call_count, 2)


if __name__ == '__main__':
    unittest.main()
