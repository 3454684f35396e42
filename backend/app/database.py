"""Database setup with SQLAlchemy."""
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session
from sqlalchemy.pool import StaticPool

from app.config import Settings


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the DateTime columns hand back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Database:
    """Storage client owning the engine and its connection pool.

    Built once at process start (see ``app.main.lifespan``) and disposed on
    shutdown. Request handlers get sessions through ``get_db``.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        pool_timeout: int = 2,
    ):
        options: dict = {"pool_pre_ping": True}
        if url.startswith("sqlite"):
            options["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url == "sqlite://":
                # One shared connection, otherwise every checkout sees an empty DB
                options["poolclass"] = StaticPool
        else:
            options.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
            )
        self.engine = create_engine(url, **options)
        self.SessionLocal = sessionmaker(autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
        )

    def init(self) -> None:
        """Create tables for all registered models."""
        import app.models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def ping(self) -> None:
        """Round-trip a trivial query; raises if the database is unreachable."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self) -> None:
        """Close pooled connections."""
        self.engine.dispose()


def get_database(request: Request) -> Database:
    """Dependency returning the application's storage client."""
    return request.app.state.database


def get_db(request: Request):
    """Dependency for database session."""
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
