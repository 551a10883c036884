"""
Database initialization script.

    python init_db.py            # create any missing tables from the models
    python init_db.py --migrate  # apply Alembic migrations up to head
"""

import argparse
import logging
import sys

from sqlalchemy import inspect

from app.core.config import settings
from app.db.init_db import create_all_tables, init_db
from app.db.session import engine

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("db-init")

def main() -> int:
    parser = argparse.ArgumentParser(description="Initialize the database")
    parser.add_argument("--migrate", action="store_true", help="Run Alembic migrations instead of create_all")
    args = parser.parse_args()

    logger.info(f"Initializing database at: {settings.DATABASE_URL}")
    logger.info(f"Existing tables: {inspect(engine).get_table_names()}")

    if args.migrate:
        init_db()
        return 0

    if not create_all_tables():
        logger.error("Database initialization failed")
        return 1

    logger.info(f"Tables after creation: {inspect(engine).get_table_names()}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
