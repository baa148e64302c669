#!/usr/bin/env python3
"""
Create the schema and optionally load mentors from a seed file.

Usage:
    python -m database.init_db
    python -m database.init_db --seed seeds/mentors.yaml
"""
import argparse
import logging
from typing import List

import yaml
from sqlalchemy.engine import Engine
from tenacity import retry, stop_after_attempt, wait_fixed, before_sleep_log

from core.config_loader import load_config
from core.mentors.models import MentorProfile
from database.models import Base
from database.repositories.interfaces import MentorRepository

logger = logging.getLogger(__name__)


@retry(
    stop=stop_after_attempt(5),
    wait=wait_fixed(2),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True
)
def init_db(engine: Engine) -> None:
    """Create missing tables. Retried while the database is still starting up."""
    logger.info("Initializing database...")
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Tables created or verified.")
    except Exception as e:
        logger.error(f"Error initializing DB: {e}")
        raise


def load_seed_mentors(path: str) -> List[MentorProfile]:
    """Read a YAML file of the form {mentors: [ {...}, ... ]}."""
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    return [MentorProfile.from_dict(item) for item in data.get("mentors", [])]


def seed_mentors(repo: MentorRepository, mentors: List[MentorProfile]) -> int:
    for mentor in mentors:
        repo.save(mentor)
    logger.info(f"Seeded {len(mentors)} mentors")
    return len(mentors)


def main():
    parser = argparse.ArgumentParser(description='Create tables and load seed data')
    parser.add_argument('--config', default='config.yaml')
    parser.add_argument('--seed', help='YAML file with mentors to load')
    args = parser.parse_args()

    config = load_config(args.config)
    logging.basicConfig(
        level=config.logging.level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not config.database.url:
        parser.error("database.url (or DATABASE_URL) must be set")

    from database.database import build_engine, build_session_factory
    from database.repositories.mentor import SqlMentorRepository

    engine = build_engine(config.database)
    init_db(engine)

    if args.seed:
        repo = SqlMentorRepository(build_session_factory(engine))
        seed_mentors(repo, load_seed_mentors(args.seed))


if __name__ == "__main__":
    main()
