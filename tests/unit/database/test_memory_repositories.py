import unittest

from core.mentors import MentorStatus
from database.repositories.memory import InMemoryMentorRepository, InMemorySessionRepository
from tests.fixtures.factories import make_mentor, make_session, sample_mentors


class TestInMemoryMentorRepository(unittest.TestCase):

    def test_seeded_and_listed_by_status(self):
        repo = InMemoryMentorRepository(sample_mentors())
        self.assertEqual(len(repo), 4)
        self.assertEqual(
            [m.id for m in repo.list_by_status(MentorStatus.ACTIVE)],
            ["mentor-1", "mentor-2", "mentor-3"]
        )
        self.assertIsNone(repo.get("missing"))

    def test_returned_copies_are_isolated(self):
        repo = InMemoryMentorRepository([make_mentor()])
        mentor = repo.get("mentor-1")
        mentor.status = MentorStatus.SUSPENDED
        mentor.languages.append("French")

        stored = repo.get("mentor-1")
        self.assertEqual(stored.status, MentorStatus.ACTIVE)
        self.assertEqual(stored.languages, ["English"])

    def test_saved_object_is_copied(self):
        repo = InMemoryMentorRepository()
        mentor = make_mentor()
        repo.save(mentor)
        mentor.first_name = "Changed"
        self.assertEqual(repo.get("mentor-1").first_name, "Ada")


class TestInMemorySessionRepository(unittest.TestCase):

    def test_list_for_user_matches_mentor_and_participants(self):
        repo = InMemorySessionRepository([
            make_session("s1", participant_ids=["u1"]),
            make_session("s2", mentor_id="u1", participant_ids=["u5"]),
            make_session("s3", participant_ids=["u2"]),
        ])
        self.assertEqual(sorted(s.id for s in repo.list_for_user("u1")), ["s1", "s2"])
        self.assertEqual([s.id for s in repo.list_for_user("mentor-1")], ["s1", "s3"])
        self.assertEqual(repo.list_for_user("nobody"), [])

    def test_mutating_a_fetched_session_needs_save(self):
        repo = InMemorySessionRepository([make_session()])
        session = repo.get("session-1")
        session.participant_ids.append("u9")
        self.assertEqual(repo.get("session-1").participant_ids, ["u1"])

        repo.save(session)
        self.assertEqual(repo.get("session-1").participant_ids, ["u1", "u9"])
        self.assertEqual(len(repo), 1)


if __name__ == '__main__':
    unittest.main()
