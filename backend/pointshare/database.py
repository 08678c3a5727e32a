"""Database connection and session management."""
from collections.abc import Generator
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from pointshare.config import get_settings

settings = get_settings()

uses_sqlite = settings.database_url.startswith("sqlite")

# SQLite requires check_same_thread=False for FastAPI
connect_args = {"check_same_thread": False} if uses_sqlite else {}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,
)

if uses_sqlite:
    @event.listens_for(engine, "connect")
    def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON;")
        cursor.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def ensure_sqlite_directory(database_url: str) -> Path | None:
    """Create the parent directory of a file-backed SQLite database."""
    parsed_url = make_url(database_url)
    if not parsed_url.drivername.startswith("sqlite"):
        return None
    if not parsed_url.database or parsed_url.database == ":memory:":
        return None

    directory = Path(parsed_url.database).parent
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

