"""Engine and session factory for the health report store"""

from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finhealth_gateway.config import settings

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,  # verify connections before use
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_recycle=settings.db_pool_recycle_seconds,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """One session per request; routes commit or roll back themselves"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
