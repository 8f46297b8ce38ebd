"""Database engine, sessions and schema setup."""
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from api.config import DATABASE_URL, SQLITE_BUSY_TIMEOUT_MS

_is_sqlite = DATABASE_URL.startswith("sqlite")

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)

if _is_sqlite:

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragmas(dbapi_connection, _record) -> None:
        # reports, stats and streak updates for one submission arrive together
        cursor = dbapi_connection.cursor()
        cursor.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS}")
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Base class for quiz, report and activity tables."""
    pass


def get_db():
    """Request-scoped session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create all tables (models must be imported to register them)."""
    import api.models.db  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_db():
    """Drop all tables."""
    import api.models.db  # noqa: F401

    Base.metadata.drop_all(bind=engine)
