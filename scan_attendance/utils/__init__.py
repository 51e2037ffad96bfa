# =======================================================================================
# scan_attendance/utils/__init__.py - Utils Package
# =======================================================================================
from .exceptions import *
from .validators import *

__all__ = [
    "ScanAttendanceError", "ScanValidationError", "MissingFieldError", "InvalidFormatError",
    "StorageUnavailableError", "CaptureError", "NoCandidateError", "SessionClosedError",
    "ScanValidator", "parse_scan_datetime",
]
