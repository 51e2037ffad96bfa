# =======================================================================================
# scan_attendance/__init__.py - Package Initialization
# =======================================================================================
"""
Scan Attendance - barcode scan capture and ingestion.

Mobile clients capture an ID-card barcode once per user action and submit it;
the API validates, records and serves scan events back.
"""

__version__ = "1.0.0"
__author__ = "Scan Attendance Team"
