# =======================================================================================
# scan_attendance/database.py - Database Management
# =======================================================================================
from contextlib import contextmanager
from typing import Iterator, Optional
from sqlalchemy import (
    Column, DateTime, Index, Integer, MetaData, String, Table, create_engine, text,
)
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import QueuePool
from .config import Settings

metadata = MetaData()

# Append-only; no update or delete path exists.
attendance_scans = Table(
    "AttendanceScans",
    metadata,
    Column("ScanID", Integer, primary_key=True, autoincrement=True),
    Column("EmployeeID", String(50), nullable=False),
    Column("ScanDateTime", DateTime, nullable=False),
    Column("BarcodeType", String(20), nullable=False),
    Column("DeviceInfo", String(100), nullable=False),
    Column("RecordedAt", DateTime, nullable=False),
    Index("ix_attendance_scans_employee_time", "EmployeeID", "ScanDateTime"),
)


class DatabaseManager:
    """Manages database connections and transactions."""

    def __init__(self, settings: Settings, engine: Optional[Engine] = None):
        self.settings = settings
        self.engine: Engine = engine or self._create_engine(settings)

    @staticmethod
    def _create_engine(settings: Settings) -> Engine:
        kwargs = dict(
            poolclass=QueuePool,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=True,
        )
        if settings.DB_URL.startswith("sqlite"):
            # pooled connections move between request threads
            kwargs["connect_args"] = {"check_same_thread": False}
        elif settings.DB_ISOLATION_LEVEL:
            kwargs["isolation_level"] = settings.DB_ISOLATION_LEVEL
        return create_engine(settings.DB_URL, **kwargs)

    @contextmanager
    def get_connection(self) -> Iterator[Connection]:
        """Borrow a pooled connection inside a transaction; released on every exit path."""
        with self.engine.begin() as conn:
            yield conn

    def ping(self) -> None:
        """Raise if the store cannot be reached."""
        with self.get_connection() as conn:
            conn.execute(text("SELECT 1"))

    def create_schema(self) -> None:
        metadata.create_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
