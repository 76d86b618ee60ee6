import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from dotenv import load_dotenv

load_dotenv()

Base = declarative_base()


def get_database_url() -> str:
    """Get database URL from environment."""
    url = os.getenv("DATABASE_URL", "sqlite:///./barberdesk.db")
    # Ensure psycopg (v3) driver is used
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)
    elif url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+psycopg://", 1)
    return url


DATABASE_URL = get_database_url()


def get_engine(url: str = None):
    """Get or create database engine."""
    url = url or DATABASE_URL
    kwargs = {"echo": os.getenv("DEBUG", "false").lower() == "true"}
    if url.startswith("sqlite"):
        # FastAPI serves sync routes from a threadpool
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(url, **kwargs)


engine = get_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """Create all tables that do not exist yet.

    Managed databases are migrated with Alembic; this is for the dev SQLite
    database and for tests.
    """
    import barberdesk.models  # noqa: F401  registers mappers on Base.metadata

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    """Dependency for FastAPI routes to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
