# =======================================================================================
# scan_attendance/services/ingestion.py - Scan Ingestion (validate -> persist -> classify)
# =======================================================================================
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional
from sqlalchemy import insert
from ..app_logger import get_logger
from ..database import DatabaseManager, attendance_scans
from ..models.enums import ErrorKind
from ..models.scan_event import ScanEvent, ScanRecord, isoformat_utc
from ..storage_errors import classify
from ..utils.exceptions import ScanValidationError
from ..utils.validators import ScanValidator, parse_scan_datetime

logger = get_logger("ingestion")

SUCCESS_MESSAGE = "Scan recorded successfully"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of one `ingest` call: either a persisted record or a classified failure."""
    ok: bool
    message: str
    event: Optional[ScanEvent] = None
    record: Optional[ScanRecord] = None
    kind: Optional[ErrorKind] = None
    error: Optional[str] = None

    @property
    def status_code(self) -> int:
        return 201 if self.ok else self.kind.status_code

    @property
    def error_code(self) -> Optional[str]:
        return self.kind.error_code if self.kind else None

    def to_response(self) -> Dict[str, Any]:
        if self.ok:
            return {
                "success": True,
                "message": self.message,
                "data": {
                    "employeeId": self.event.employee_id,
                    "scanDateTime": self.event.scan_date_time,
                    "scanType": self.event.scan_type,
                    "recordedAt": isoformat_utc(self.record.recorded_at),
                },
            }
        return {
            "success": False,
            "message": self.message,
            "error": self.error,
            "errorCode": self.error_code,
        }


class IngestionService:
    """
    Validates a scan submission and writes it to storage exactly once.

    Validation runs before a connection is borrowed. Storage faults are caught
    around the single insert, classified, and returned; nothing is retried.
    The service never deduplicates: two identical submissions give two rows.
    """

    def __init__(self, db: DatabaseManager, validator: Optional[ScanValidator] = None,
                 clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.validator = validator or ScanValidator(
            default_scan_type=db.settings.DEFAULT_SCAN_TYPE,
            default_device_info=db.settings.DEFAULT_DEVICE_INFO,
        )
        self._clock = clock

    def ingest(self, payload: Mapping[str, Any]) -> IngestionResult:
        try:
            event = self.validator.validate(payload)
        except ScanValidationError as e:
            logger.info("Rejected scan (%s): %s", e.kind.value, e)
            return IngestionResult(ok=False, message=str(e), kind=e.kind, error=str(e))

        try:
            record = self._persist(event)
        except Exception as e:
            failure = classify(e)
            logger.error(
                "Storage error recording scan for %s: kind=%s native=%s error=%s",
                event.employee_id, failure.kind.value, failure.native_code, failure.error,
            )
            return IngestionResult(
                ok=False, message=failure.message, event=event,
                kind=failure.kind, error=failure.error,
            )

        logger.info("Scan recorded for employee: %s", event.employee_id)
        return IngestionResult(ok=True, message=SUCCESS_MESSAGE, event=event, record=record)

    def _persist(self, event: ScanEvent) -> ScanRecord:
        """Single parameterized insert; returns the record once the commit has succeeded."""
        scan_dt = parse_scan_datetime(event.scan_date_time)

        with self.db.get_connection() as conn:
            recorded_at = self._clock()
            result = conn.execute(
                insert(attendance_scans).values(
                    EmployeeID=event.employee_id,
                    ScanDateTime=scan_dt.replace(tzinfo=None),
                    BarcodeType=event.scan_type,
                    DeviceInfo=event.device_info,
                    RecordedAt=recorded_at.astimezone(timezone.utc).replace(tzinfo=None),
                )
            )
            row_id = result.inserted_primary_key[0]

        return ScanRecord(
            id=row_id,
            employee_id=event.employee_id,
            scan_date_time=scan_dt,
            scan_type=event.scan_type,
            device_info=event.device_info,
            recorded_at=recorded_at,
        )
