#!/usr/bin/env python
"""
Database initialization script for the claims API.

Creates the claims table in the database pointed to by DATABASE_URL (or the
DB_* variables, see database/database.py).
"""

import os
import sys

# Add the src directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from sqlalchemy import inspect

from database.database import get_engine
from models import Base
from utils.logging_utils import get_logger

logger = get_logger("init_database")


def init_database(drop_existing: bool = False) -> None:
    engine = get_engine()

    if drop_existing:
        logger.warning("Dropping all tables")
        Base.metadata.drop_all(engine)

    Base.metadata.create_all(engine)
    tables = inspect(engine).get_table_names()
    logger.info("Database ready, tables: %s", ", ".join(sorted(tables)))


if __name__ == "__main__":
    init_database(drop_existing="--drop" in sys.argv[1:])
