# =======================================================================================
# scan_attendance/models/__init__.py - Models Package
# =======================================================================================
from .schemas import *
from .enums import *
from .scan_event import ScanEvent, ScanRecord, isoformat_utc

__all__ = [
    "ScanRequest", "ScanResponse", "ScanData", "ErrorResponse", "ScanItem",
    "ScanListResponse", "EmployeeScanListResponse", "HealthResponse", "ServiceInfo",
    "CaptureState", "ErrorKind", "ScanEvent", "ScanRecord", "isoformat_utc",
]
