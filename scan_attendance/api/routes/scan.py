# =======================================================================================
# scan_attendance/api/routes/scan.py - Scan Endpoints
# =======================================================================================
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from ...app_logger import get_logger
from ...models.schemas import (
    EmployeeScanListResponse, ErrorResponse, ScanListResponse, ScanRequest, ScanResponse,
)
from ...services.ingestion import IngestionService
from ...services.scan_query import ScanQueryService
from ..dependencies import get_ingestion_service, get_query_service

router = APIRouter()
logger = get_logger("api.scan")

_FAILURES = {code: {"model": ErrorResponse} for code in (400, 401, 500, 503)}

@router.post("/scan", status_code=201, response_model=ScanResponse, responses=_FAILURES)
def record_scan(request: ScanRequest, service: IngestionService = Depends(get_ingestion_service)):
    """Validate and persist one scan event."""
    logger.debug("Received scan request: %s", request.model_dump())
    result = service.ingest(request.model_dump())
    return JSONResponse(status_code=result.status_code, content=result.to_response())

@router.get("/scans", response_model=ScanListResponse, responses={503: {"model": ErrorResponse}})
def list_scans(service: ScanQueryService = Depends(get_query_service)):
    """Latest scans, newest capture time first."""
    records = service.list_recent()
    return ScanListResponse(count=len(records), scans=[r.to_dict() for r in records])

@router.get("/scans/{employee_id:path}", response_model=EmployeeScanListResponse,
            responses={503: {"model": ErrorResponse}})
def list_employee_scans(employee_id: str, service: ScanQueryService = Depends(get_query_service)):
    records = service.list_by_employee(employee_id)
    return EmployeeScanListResponse(
        employeeId=employee_id, count=len(records), scans=[r.to_dict() for r in records]
    )
