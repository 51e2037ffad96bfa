# =======================================================================================
# scan_attendance/storage_errors.py - Storage Fault Classification
# =======================================================================================
"""
Translate native driver faults into the fixed ErrorKind taxonomy.

All vendor-specific sniffing (MySQL/SQL Server numeric codes, SQLSTATE strings,
SQLite messages) lives in the tables below and nowhere else. Callers only ever
see a StorageFailure.
"""
import re
from dataclasses import dataclass
from typing import Optional, Union
from sqlalchemy import exc as sa_exc
from .models.enums import ErrorKind

NativeCode = Union[int, str]

# Native error code -> kind. Ints are MySQL / SQL Server error numbers,
# strings are SQLSTATE values (PostgreSQL, ODBC drivers).
NATIVE_CODES = {
    # credentials rejected
    1044: ErrorKind.AUTH_FAILURE,
    1045: ErrorKind.AUTH_FAILURE,
    18456: ErrorKind.AUTH_FAILURE,
    "28000": ErrorKind.AUTH_FAILURE,
    "28P01": ErrorKind.AUTH_FAILURE,
    # host unreachable / socket failure
    2002: ErrorKind.UNREACHABLE,
    2003: ErrorKind.UNREACHABLE,
    2005: ErrorKind.UNREACHABLE,
    2006: ErrorKind.UNREACHABLE,
    2013: ErrorKind.UNREACHABLE,
    20002: ErrorKind.UNREACHABLE,
    20009: ErrorKind.UNREACHABLE,
    "08001": ErrorKind.UNREACHABLE,
    "08004": ErrorKind.UNREACHABLE,
    "08006": ErrorKind.UNREACHABLE,
    "08S01": ErrorKind.UNREACHABLE,
    # unknown referenced entity
    547: ErrorKind.REFERENCE_VIOLATION,
    1451: ErrorKind.REFERENCE_VIOLATION,
    1452: ErrorKind.REFERENCE_VIOLATION,
    "23503": ErrorKind.REFERENCE_VIOLATION,
    # table / column missing
    207: ErrorKind.SCHEMA_MISMATCH,
    208: ErrorKind.SCHEMA_MISMATCH,
    1054: ErrorKind.SCHEMA_MISMATCH,
    1146: ErrorKind.SCHEMA_MISMATCH,
    "42P01": ErrorKind.SCHEMA_MISMATCH,
    "42703": ErrorKind.SCHEMA_MISMATCH,
    "42S02": ErrorKind.SCHEMA_MISMATCH,
    "42S22": ErrorKind.SCHEMA_MISMATCH,
}

# SQLite reports faults by message only.
NATIVE_MESSAGES = (
    ("no such table", ErrorKind.SCHEMA_MISMATCH),
    ("no such column", ErrorKind.SCHEMA_MISMATCH),
    ("foreign key constraint failed", ErrorKind.REFERENCE_VIOLATION),
    ("unable to open database file", ErrorKind.UNREACHABLE),
)

# Caller-safe messages; never contain driver text.
MESSAGES = {
    ErrorKind.AUTH_FAILURE: "Database login failed. Check credentials.",
    ErrorKind.UNREACHABLE: "Cannot connect to the database. Check server address and firewall.",
    ErrorKind.REFERENCE_VIOLATION: "Employee ID not found in system.",
    ErrorKind.SCHEMA_MISMATCH: "Table not found. Check table name in database.",
    ErrorKind.UNKNOWN: "Failed to record scan",
    ErrorKind.STORAGE_UNAVAILABLE: "Failed to fetch scans",
}

_SQLSTATE = re.compile(r"^[0-9A-Z]{5}$")


@dataclass(frozen=True)
class StorageFailure:
    kind: ErrorKind
    message: str
    error: str
    native_code: Optional[NativeCode] = None

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    @property
    def error_code(self) -> str:
        return self.kind.error_code

    def as_unavailable(self) -> "StorageFailure":
        """Collapse to the generic read-path outcome, keeping the diagnostic."""
        return StorageFailure(
            kind=ErrorKind.STORAGE_UNAVAILABLE,
            message=MESSAGES[ErrorKind.STORAGE_UNAVAILABLE],
            error=self.error,
            native_code=self.native_code,
        )


def native_code(orig: BaseException) -> Optional[NativeCode]:
    """Extract the vendor error code from a DBAPI exception, if it carries one."""
    for attr in ("pgcode", "sqlstate"):
        value = getattr(orig, attr, None)
        if value:
            return str(value)

    args = getattr(orig, "args", ())
    if not args:
        return None
    first = args[0]
    if isinstance(first, int) and not isinstance(first, bool):
        return first
    if isinstance(first, str) and _SQLSTATE.match(first):
        return first
    return None


def _kind_from_message(text: str) -> Optional[ErrorKind]:
    lowered = text.lower()
    for needle, kind in NATIVE_MESSAGES:
        if needle in lowered:
            return kind
    return None


def classify(error: BaseException) -> StorageFailure:
    """Map any exception raised at the storage boundary to a StorageFailure."""
    code: Optional[NativeCode] = None
    kind: Optional[ErrorKind] = None
    detail = str(error)

    if isinstance(error, sa_exc.DBAPIError):
        orig = error.orig if error.orig is not None else error
        detail = str(orig)
        code = native_code(orig)
        kind = NATIVE_CODES.get(code) if code is not None else None
        if kind is None:
            kind = _kind_from_message(detail)
        if kind is None and error.connection_invalidated:
            kind = ErrorKind.UNREACHABLE
    elif isinstance(error, sa_exc.TimeoutError):
        # pool exhausted / checkout timed out
        kind = ErrorKind.UNREACHABLE
    elif isinstance(error, OSError):
        kind = ErrorKind.UNREACHABLE
        code = error.errno

    kind = kind or ErrorKind.UNKNOWN
    return StorageFailure(kind=kind, message=MESSAGES[kind], error=detail, native_code=code)
