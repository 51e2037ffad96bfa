# tests/fakes.py
from __future__ import annotations

from contextlib import contextmanager

from sqlalchemy import exc as sa_exc

from scan_attendance.database import DatabaseManager


class FakeDriverError(Exception):
    """Stands in for a DBAPI exception: args[0] is the vendor code."""


class FakePgError(Exception):
    def __init__(self, pgcode: str, msg: str):
        super().__init__(msg)
        self.pgcode = pgcode


def db_error(code, msg: str = "driver failure", cls=sa_exc.OperationalError):
    orig = FakeDriverError(code, msg) if code is not None else FakeDriverError(msg)
    return cls("INSERT INTO AttendanceScans ...", {}, orig)


class FailingDatabase(DatabaseManager):
    """DatabaseManager whose every connection attempt raises `error`."""

    def __init__(self, settings, error: BaseException):
        super().__init__(settings)
        self.error = error
        self.attempts = 0

    @contextmanager
    def get_connection(self):
        self.attempts += 1
        raise self.error
        yield  # pragma: no cover
