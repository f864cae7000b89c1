from contextlib import contextmanager

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from memorial.memorial_logger import logger


Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY / ON DELETE CASCADE unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the engine and session factory for one application instance.

    Created by the application factory (or handed to it), initialized on
    startup and disposed on shutdown.
    """

    def __init__(self, url: str, production: bool = False):
        self.url = url
        self.is_sqlite = url.startswith("sqlite")

        connect_args = {}
        if self.is_sqlite:
            connect_args["check_same_thread"] = False
        elif production:
            # TLS on, certificate not verified
            connect_args["sslmode"] = "require"

        self.connect_args = connect_args
        self.engine = create_engine(url, pool_pre_ping=True, connect_args=connect_args)
        if self.is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.sessionlocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def init_schema(self) -> None:
        """Create the tables if they do not exist yet. Safe on every start."""
        # register the models on Base.metadata
        from memorial.models import comment, memory  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables initialized")

    @contextmanager
    def session(self):
        db = self.sessionlocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database connections released")


def get_db(request: Request):
    database: Database = request.app.state.database
    db = database.sessionlocal()
    try:
        yield db
    finally:
        db.close()
