"""Database connection management."""
from functools import lru_cache
import os

from dotenv import load_dotenv
from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import sessionmaker, Session

load_dotenv()


def get_database_url() -> str:
    """
    Construct the database URL from environment variables.

    Returns
    -------
    str
        The database URL.
    """
    # A full DATABASE_URL wins over the individual components
    full_url = os.getenv("DATABASE_URL")
    if full_url:
        return full_url

    username = os.getenv("DB_USERNAME")
    password = os.getenv("DB_PASSWORD")
    host = os.getenv("DB_HOST", "localhost")
    name = os.getenv("DB_NAME", "claims")
    return f"postgresql://{username}:{password}@{host}:5432/{name}"


@lru_cache
def get_engine() -> Engine:
    """
    Create the process wide engine on first use.

    The connection string is read once; later changes to the environment
    are not picked up.
    """
    return create_engine(get_database_url(), pool_pre_ping=True)


@lru_cache
def get_session_factory() -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db_session() -> Session:
    """
    Creates and returns a new database session.

    Returns
    -------
    Session
        A SQLAlchemy database session.
    """
    return get_session_factory()()
