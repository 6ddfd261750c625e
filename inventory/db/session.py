"""Database session management."""
import logging
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from .models import Base

def _create_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine, sharing one connection for in-memory SQLite."""
    if database_url.startswith('sqlite'):
        kwargs = {'connect_args': {'check_same_thread': False}}
        if database_url in ('sqlite://', 'sqlite:///:memory:'):
            kwargs['poolclass'] = StaticPool
        engine = create_engine(database_url, echo=echo, **kwargs)

        # SQLite only enforces foreign keys when asked to
        @event.listens_for(engine, 'connect')
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute('PRAGMA foreign_keys=ON')
            cursor.close()

        return engine
    return create_engine(database_url, echo=echo)

class SessionManager:
    """Manages database sessions.

    Used as a context manager, each ``with`` block is one short transaction:
    committed on success, rolled back on any exception, always closed.
    """

    def __init__(self, database_url: Optional[str] = None, engine: Optional[Engine] = None, echo: bool = False):
        """Initialize session manager with a database URL or an existing engine."""
        if engine is None:
            if not database_url:
                raise ValueError("database_url or engine is required")
            engine = _create_engine(database_url, echo=echo)
        self.engine = engine
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )
        self.logger = logging.getLogger(__name__)

    def create_schema(self) -> None:
        """Create the Barcode and Producto tables if they do not exist."""
        self.logger.info("Creating database schema")
        Base.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        """Get a new database session."""
        session = self.SessionLocal()
        self.logger.debug(f"Created new session: {id(session)}")
        return session

    def __enter__(self) -> Session:
        """Context manager entry."""
        self.session = self.get_session()
        self.logger.debug(f"Entering context with session: {id(self.session)}")
        return self.session

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.logger.debug(f"Exiting context with session: {id(self.session)}")
        try:
            if exc_type is None:
                self.logger.debug("Committing session")
                self.session.commit()
            else:
                self.logger.debug("Rolling back session")
                self.session.rollback()
        finally:
            self.logger.debug("Closing session")
            self.session.close()
