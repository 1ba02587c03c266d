#!/usr/bin/env python3
"""
MediTracker Database Setup Script
=================================

Creates the database tables before the API server or the reminder worker
starts.

Usage:
    python scripts/setup_database.py [--check-only]
"""

import sys
import logging
import argparse
from sqlalchemy import inspect, text

from meditracker.db.session import engine
from meditracker.db.base import Base

# Registers every model with Base.metadata
from meditracker import models  # noqa: F401

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def test_connection() -> bool:
    logger.info("🔌 Testing database connection...")
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("✅ Database connection successful")
        return True
    except Exception as e:
        logger.error(f"❌ Database connection failed: {e}")
        return False


def missing_tables() -> list:
    inspector = inspect(engine)
    existing = set(inspector.get_table_names())
    return [table.name for table in Base.metadata.sorted_tables if table.name not in existing]


def create_tables() -> bool:
    try:
        logger.info("🏗️ Creating database tables...")
        Base.metadata.create_all(bind=engine)
        logger.info(f"✅ Tables ready: {', '.join(t.name for t in Base.metadata.sorted_tables)}")
        return True
    except Exception as e:
        logger.error(f"❌ Failed to create tables: {e}")
        return False


def main():
    parser = argparse.ArgumentParser(description='MediTracker Database Setup')
    parser.add_argument('--check-only', action='store_true',
                        help='Only check if tables exist, do not create')
    args = parser.parse_args()

    if not test_connection():
        logger.error("❌ Cannot proceed without database connection")
        sys.exit(1)

    missing = missing_tables()
    if args.check_only:
        if missing:
            logger.error(f"❌ Database check failed - missing tables: {missing}")
            sys.exit(1)
        logger.info("✅ Database check passed - all tables exist")
        sys.exit(0)

    if missing and not create_tables():
        sys.exit(1)

    if missing_tables():
        logger.error("❌ Setup verification failed")
        sys.exit(1)

    logger.info("🎉 Database setup completed successfully!")
    logger.info("Start the API with:    uvicorn meditracker.main:app --port 5000")
    logger.info("Start reminders with:  celery -A meditracker.reminders.celery_app worker -B -Q reminders")


if __name__ == "__main__":
    main()
