"""Link database using SQLAlchemy"""

from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional, Union
from sqlalchemy import create_engine, event, inspect, Column, Integer, Text, TIMESTAMP, Index, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from loguru import logger

from .base import LinkSink
from ..errors import StorageInitError
from ..links.url import CandidateURL

Base = declarative_base()


class LinkDB(Base):
    """Database model for recorded links"""
    __tablename__ = 'links'
    __table_args__ = (
        Index('link_index', 'link'),
        {'sqlite_autoincrement': True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    link = Column(Text)
    inserted_at = Column(TIMESTAMP, server_default=func.current_timestamp())
    updated_at = Column(TIMESTAMP, server_default=func.current_timestamp())


class DatabaseSink(LinkSink):
    """Stores links as rows of the SQLite 'links' table"""

    def __init__(self, db_path: Union[str, Path], read_only: bool = False):
        """
        Open the database and make sure the schema exists

        Args:
            db_path: Path to database file, created if absent
            read_only: Open an existing database without creating or
                changing anything

        Raises:
            StorageInitError: If the database cannot be opened or initialized
        """
        self.db_path = Path(db_path).expanduser()
        self.read_only = read_only
        self.engine = None
        self.SessionLocal = None

        self._initialize_database()

    def _create_engine(self):
        """Create the engine with SQLAlchemy's pysqlite transaction recipe"""
        if self.read_only:
            engine = create_engine(f'sqlite:///file:{self.db_path}?mode=ro&uri=true')
        else:
            engine = create_engine(f'sqlite:///{self.db_path}')

        # pysqlite only opens transactions before DML; take over so DDL is transactional too
        @event.listens_for(engine, "connect")
        def _disable_driver_transactions(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _emit_begin(conn):
            conn.exec_driver_sql("BEGIN")

        return engine

    def _initialize_database(self):
        """Initialize database connection and create tables"""
        has_links = True
        try:
            self.engine = self._create_engine()

            if self.read_only:
                with self.engine.connect() as conn:
                    has_links = inspect(conn).has_table(LinkDB.__tablename__)
            else:
                # Table and index are created in one transaction, committed on exit
                with self.engine.begin() as conn:
                    Base.metadata.create_all(bind=conn, checkfirst=True)

        except SQLAlchemyError as e:
            if self.engine is not None:
                self.engine.dispose()
            raise StorageInitError(f"Could not initialize link database {self.db_path}") from e

        if not has_links:
            self.engine.dispose()
            raise StorageInitError(f"No links table in {self.db_path}")

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        logger.info(f"Initialized database: {self.db_path}")

    @contextmanager
    def get_session(self):
        """Get a new database session with proper cleanup"""
        if self.SessionLocal is None:
            raise RuntimeError("Database not initialized")

        session: Session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def persist(self, url: CandidateURL) -> int:
        """
        Insert a link row

        Args:
            url: Link to store

        Returns:
            Id of the new row
        """
        with self.get_session() as session:
            entry = LinkDB(link=str(url))
            session.add(entry)
            session.flush()
            link_id = entry.id

        logger.debug(f"Inserted link {link_id}")
        return link_id

    def count(self) -> int:
        """Get total number of stored links"""
        with self.get_session() as session:
            return session.scalar(select(func.count()).select_from(LinkDB))

    def recent(self, limit: Optional[int] = None) -> List[str]:
        """
        Get stored links, newest first

        Args:
            limit: Optional limit on number of links

        Returns:
            List of link strings
        """
        query = select(LinkDB.link).order_by(LinkDB.id.desc())
        if limit is not None:
            query = query.limit(limit)

        with self.get_session() as session:
            return list(session.scalars(query))

    def describe(self) -> str:
        return f"database {self.db_path}"

    def close(self):
        """Close database connection"""
        if self.engine:
            self.engine.dispose()
            logger.info("Database connection closed")
