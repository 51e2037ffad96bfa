# =======================================================================================
# scan_attendance/models/enums.py - Enums and Constants
# =======================================================================================
from enum import Enum
from typing import Literal

# Type aliases for better type hints
CameraFacing = Literal["back", "front"]
DatabaseState = Literal["connected", "disconnected"]

DEFAULT_SCAN_TYPE = "UNKNOWN"
DEFAULT_DEVICE_INFO = "Mobile Scanner"

EMPLOYEE_ID_MIN_LENGTH = 3
EMPLOYEE_ID_MAX_LENGTH = 50
SCAN_TYPE_MAX_LENGTH = 20
DEVICE_INFO_MAX_LENGTH = 100

# Symbologies the camera is asked to report.
SUPPORTED_BARCODE_TYPES = frozenset({
    "qr", "pdf417", "code128", "code39", "code93", "codabar",
    "ean13", "ean8", "itf14", "upc_a", "upc_e",
})


class CaptureState(Enum):
    """Client capture lifecycle."""
    IDLE = "Idle"
    CAPTURED = "Captured"


class ErrorKind(Enum):
    """Stable, caller-facing failure taxonomy for scan ingestion and retrieval."""
    MISSING_FIELD = "MissingField"
    INVALID_FORMAT = "InvalidFormat"
    AUTH_FAILURE = "AuthFailure"
    UNREACHABLE = "Unreachable"
    REFERENCE_VIOLATION = "ReferenceViolation"
    SCHEMA_MISMATCH = "SchemaMismatch"
    UNKNOWN = "Unknown"
    STORAGE_UNAVAILABLE = "StorageUnavailable"

    @property
    def status_code(self) -> int:
        return _ERROR_META[self][0]

    @property
    def error_code(self) -> str:
        return _ERROR_META[self][1]


# kind -> (HTTP status, errorCode)
_ERROR_META = {
    ErrorKind.MISSING_FIELD: (400, "EMISSING"),
    ErrorKind.INVALID_FORMAT: (400, "EFORMAT"),
    ErrorKind.AUTH_FAILURE: (401, "ELOGIN"),
    ErrorKind.UNREACHABLE: (503, "ESOCKET"),
    ErrorKind.REFERENCE_VIOLATION: (400, "EREFERENCE"),
    ErrorKind.SCHEMA_MISMATCH: (500, "ESCHEMA"),
    ErrorKind.UNKNOWN: (500, "EUNKNOWN"),
    ErrorKind.STORAGE_UNAVAILABLE: (503, "EUNAVAILABLE"),
}
