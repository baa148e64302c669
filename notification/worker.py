#!/usr/bin/env python3
"""
RQ Worker for session notifications.

Usage:
    python -m notification.worker
    python -m notification.worker --burst
    python -m notification.worker --config config.yaml --verbose
"""

import argparse
import logging
import sys

from redis import Redis
from rq import Worker

from core.config_loader import load_config

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def start_worker(redis_url: str, queues: list, burst: bool = False):
    """Start the RQ worker."""
    logger.info(f"Starting RQ Worker on {', '.join(queues)} (burst={burst})")

    try:
        redis_conn = Redis.from_url(redis_url)
        redis_conn.ping()
        logger.info("Connected to Redis")

        worker = Worker(queues, connection=redis_conn)
        worker.work(burst=burst)
    except KeyboardInterrupt:
        logger.info("Worker stopped")
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(description='Session Notification Worker')
    parser.add_argument('--config', default='config.yaml')
    parser.add_argument('--burst', action='store_true', help='Process all and exit')
    parser.add_argument('--queues', nargs='+', default=None)
    parser.add_argument('--verbose', action='store_true')

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = load_config(args.config).notifications
    start_worker(
        redis_url=config.redis_url or 'redis://localhost:6379/0',
        queues=args.queues or [config.queue_name],
        burst=args.burst
    )


if __name__ == '__main__':
    main()
