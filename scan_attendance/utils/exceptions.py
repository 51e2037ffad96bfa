# =======================================================================================
# scan_attendance/utils/exceptions.py - Custom Exceptions
# =======================================================================================
from ..models.enums import ErrorKind


class ScanAttendanceError(Exception):
    """Base exception for the scan attendance system."""
    pass

class ScanValidationError(ScanAttendanceError):
    """Raised when a scan payload is rejected before any storage access."""
    kind = ErrorKind.INVALID_FORMAT

class MissingFieldError(ScanValidationError):
    """Raised when a required scan field is absent."""
    kind = ErrorKind.MISSING_FIELD

class InvalidFormatError(ScanValidationError):
    """Raised when a scan field is present but malformed."""
    kind = ErrorKind.INVALID_FORMAT

class StorageUnavailableError(ScanAttendanceError):
    """Raised by read paths when the store cannot serve a query."""

    def __init__(self, failure):
        super().__init__(failure.message)
        self.failure = failure

class CaptureError(ScanAttendanceError):
    """Base for client capture session misuse."""
    pass

class NoCandidateError(CaptureError):
    """Raised when submitting while no scan is held."""
    pass

class SessionClosedError(CaptureError):
    """Raised when a capture session is used after unmount."""
    pass
