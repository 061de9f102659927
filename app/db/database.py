"""
Database connection and session management for the YouTube study notes application.
"""

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import config

# Create base class for SQLAlchemy models
Base = declarative_base()

# Create engine
# Use environment variable for database URL or default to SQLite
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{config.DATA_DIR}/study_notes.db")

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Initialize the database by creating all tables."""
    from app.db.models import TranscriptCacheEntry  # noqa: F401 registers the table

    # Create all tables
    Base.metadata.create_all(bind=engine)

