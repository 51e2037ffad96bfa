# =======================================================================================
# scan_attendance/models/scan_event.py - Scan Event Value Objects
# =======================================================================================
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from .enums import DEFAULT_DEVICE_INFO, DEFAULT_SCAN_TYPE


def isoformat_utc(value: datetime) -> str:
    """Render an instant as ISO-8601 UTC with a trailing `Z`."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ScanEvent:
    """
    One barcode detection, as submitted by a client.
    `scan_date_time` is the client's capture instant; the server never rewrites it.
    """
    employee_id: str
    scan_date_time: str
    scan_type: str = DEFAULT_SCAN_TYPE
    device_info: str = DEFAULT_DEVICE_INFO

    def to_payload(self) -> Dict[str, Any]:
        return {
            "employeeId": self.employee_id,
            "scanDateTime": self.scan_date_time,
            "scanType": self.scan_type,
            "deviceInfo": self.device_info,
        }


@dataclass(frozen=True)
class ScanRecord:
    """A persisted scan row. `recorded_at` is server-assigned."""
    employee_id: str
    scan_date_time: datetime
    scan_type: str
    device_info: str
    recorded_at: datetime
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row) -> "ScanRecord":
        return cls(
            id=row["ScanID"],
            employee_id=row["EmployeeID"],
            scan_date_time=row["ScanDateTime"],
            scan_type=row["BarcodeType"],
            device_info=row["DeviceInfo"],
            recorded_at=row["RecordedAt"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "scanDateTime": isoformat_utc(self.scan_date_time),
            "scanType": self.scan_type,
            "deviceInfo": self.device_info,
            "recordedAt": isoformat_utc(self.recorded_at),
        }
