# =======================================================================================
# scan_attendance/services/scan_query.py - Scan Retrieval
# =======================================================================================
from typing import List, Optional
from sqlalchemy import select
from ..app_logger import get_logger
from ..database import DatabaseManager, attendance_scans
from ..models.scan_event import ScanRecord
from ..storage_errors import classify
from ..utils.exceptions import StorageUnavailableError

logger = get_logger("scan_query")


class ScanQueryService:
    """Read-only listing of recorded scans, newest capture time first."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    def _fetch(self, stmt) -> List[ScanRecord]:
        try:
            with self.db.get_connection() as conn:
                rows = conn.execute(stmt).mappings().all()
        except Exception as e:
            failure = classify(e).as_unavailable()
            logger.error("Error fetching scans: native=%s error=%s", failure.native_code, failure.error)
            raise StorageUnavailableError(failure) from e
        return [ScanRecord.from_row(row) for row in rows]

    def _ordered(self):
        return select(attendance_scans).order_by(
            attendance_scans.c.ScanDateTime.desc(), attendance_scans.c.ScanID.desc()
        )

    def list_recent(self, limit: Optional[int] = None) -> List[ScanRecord]:
        if limit is None:
            limit = self.db.settings.SCAN_LIST_LIMIT
        return self._fetch(self._ordered().limit(limit))

    def list_by_employee(self, employee_id: str) -> List[ScanRecord]:
        return self._fetch(self._ordered().where(attendance_scans.c.EmployeeID == employee_id))
