# =======================================================================================
# scan_attendance/models/schemas.py - Pydantic Models
# =======================================================================================
from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field
from .enums import DatabaseState

# ========== Scan ingestion ==========
class ScanRequest(BaseModel):
    """
    Scan submission body. Every field is optional here so that missing values
    reach the ingestion service and are reported as MissingField, not as a 422.
    """
    employeeId: Optional[str] = Field(None, description="Identifier decoded from the barcode")
    scanDateTime: Optional[str] = Field(None, description="ISO-8601 capture time from the client")
    scanType: Optional[str] = Field(None, description="Barcode symbology or scan purpose")
    deviceInfo: Optional[str] = Field(None, description="Capturing device label")

class ScanData(BaseModel):
    employeeId: str
    scanDateTime: str
    scanType: str
    recordedAt: str

class ScanResponse(BaseModel):
    """Scan recorded response model."""
    success: bool = True
    message: str
    data: ScanData

class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None
    errorCode: Optional[Union[str, int]] = None

# ========== Retrieval ==========
class ScanItem(BaseModel):
    id: Optional[int] = None
    employeeId: str
    scanDateTime: str
    scanType: str
    deviceInfo: str
    recordedAt: str

class ScanListResponse(BaseModel):
    success: bool = True
    count: int
    scans: List[ScanItem]

class EmployeeScanListResponse(ScanListResponse):
    employeeId: str

# ========== Health ==========
class HealthResponse(BaseModel):
    status: str                 # "ok" | "degraded"
    timestamp: datetime
    database: DatabaseState
    uptime: float
    message: Optional[str] = None

class ServiceInfo(BaseModel):
    message: str
    endpoints: Dict[str, Any]
