"""Database configuration using SQLAlchemy."""

from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from .settings import settings


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine, applying SQLite specific connection settings."""
    if not database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=10,
            pool_recycle=3600,
        )

    # Requests are served from a thread pool, so connections cross threads
    sqlite_engine = create_engine(
        database_url,
        echo=echo,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(sqlite_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return sqlite_engine


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Base class for models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session.

    Usage:
        @router.get("/job-offers")
        def list_job_offers(db: Session = Depends(get_db)):
            return db.query(JobOffer).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None) -> None:
    """Initialize database tables."""
    # Import all models to register them with Base
    from recruitment_api import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def check_db_connection(bind: Engine = None) -> bool:
    """Check if database connection is working."""
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
