"""
Database setup (synchronous SQLAlchemy engine + session factory).
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from categories.config import get_settings
from categories.models.base import Base


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections get foreign keys switched on."""
    engine = create_engine(database_url, echo=echo, future=True)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


settings = get_settings()

engine = make_engine(settings.database_url, echo=settings.debug)

# Session factory
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db():
    """Yield a session and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = engine):
    """Initialize database tables."""
    # Import models so they register on the metadata
    import categories.models  # noqa: F401

    Base.metadata.create_all(bind=bind)


def drop_db(bind: Engine = engine):
    """Drop all tables (for testing)."""
    Base.metadata.drop_all(bind=bind)
