# =======================================================================================
# scan_attendance/client/__init__.py - Client Package
# =======================================================================================
from .api_client import ScanApiClient, SubmissionResult
from .capture import CaptureSession

__all__ = ["ScanApiClient", "SubmissionResult", "CaptureSession"]
