# =======================================================================================
# scan_attendance/api/dependencies.py - FastAPI Dependencies
# =======================================================================================
from fastapi import Request
from ..services.ingestion import IngestionService
from ..services.scan_query import ScanQueryService

def get_ingestion_service(request: Request) -> IngestionService:
    """Dependency returning the app's ingestion service."""
    return request.app.state.ingestion_service

def get_query_service(request: Request) -> ScanQueryService:
    return request.app.state.query_service
