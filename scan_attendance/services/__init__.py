# =======================================================================================
# scan_attendance/services/__init__.py - Services Package
# =======================================================================================
from .ingestion import IngestionService, IngestionResult
from .scan_query import ScanQueryService

__all__ = ["IngestionService", "IngestionResult", "ScanQueryService"]
