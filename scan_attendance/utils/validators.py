# =======================================================================================
# scan_attendance/utils/validators.py - Validation Helpers
# =======================================================================================
from datetime import datetime, timezone
from typing import Any, Mapping
from .exceptions import MissingFieldError, InvalidFormatError
from ..models.enums import (
    DEFAULT_DEVICE_INFO, DEFAULT_SCAN_TYPE, DEVICE_INFO_MAX_LENGTH, EMPLOYEE_ID_MAX_LENGTH,
    EMPLOYEE_ID_MIN_LENGTH, SCAN_TYPE_MAX_LENGTH,
)
from ..models.scan_event import ScanEvent


def parse_scan_datetime(value: str) -> datetime:
    """
    Parse an ISO-8601 instant into an aware UTC datetime.
    A trailing `Z` is accepted; values without an offset are taken as UTC.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class ScanValidator:
    """Validates scan submissions. First failing rule wins."""

    def __init__(self, default_scan_type: str = DEFAULT_SCAN_TYPE,
                 default_device_info: str = DEFAULT_DEVICE_INFO):
        self.default_scan_type = default_scan_type
        self.default_device_info = default_device_info

    @staticmethod
    def _is_blank(value: Any) -> bool:
        return value is None or (isinstance(value, str) and value == "")

    @staticmethod
    def _optional_text(payload: Mapping[str, Any], key: str, default: str, max_length: int) -> str:
        value = payload.get(key)
        if value is None or value == "":
            return default
        if not isinstance(value, str):
            raise InvalidFormatError(f"{key} must be a string")
        if len(value) > max_length:
            raise InvalidFormatError(f"{key} must be at most {max_length} characters")
        return value

    def validate_required(self, payload: Mapping[str, Any]) -> None:
        if self._is_blank(payload.get("employeeId")) or self._is_blank(payload.get("scanDateTime")):
            raise MissingFieldError("Employee ID and scan time are required")

    def validate_employee_id(self, employee_id: Any) -> str:
        if not isinstance(employee_id, str):
            raise InvalidFormatError("Employee ID must be a string")
        if not EMPLOYEE_ID_MIN_LENGTH <= len(employee_id) <= EMPLOYEE_ID_MAX_LENGTH:
            raise InvalidFormatError(
                f"Employee ID must be between {EMPLOYEE_ID_MIN_LENGTH} "
                f"and {EMPLOYEE_ID_MAX_LENGTH} characters"
            )
        return employee_id

    def validate_scan_datetime(self, value: Any) -> datetime:
        if not isinstance(value, str):
            raise InvalidFormatError("Scan time must be a valid ISO-8601 timestamp")
        try:
            return parse_scan_datetime(value)
        except (ValueError, OverflowError):
            # out-of-range offsets near year 1 or 9999 overflow on UTC conversion
            raise InvalidFormatError("Scan time must be a valid ISO-8601 timestamp")

    def validate(self, payload: Mapping[str, Any]) -> ScanEvent:
        """Return a normalized ScanEvent or raise a ScanValidationError."""
        self.validate_required(payload)
        employee_id = self.validate_employee_id(payload["employeeId"])
        self.validate_scan_datetime(payload["scanDateTime"])

        return ScanEvent(
            employee_id=employee_id,
            scan_date_time=payload["scanDateTime"],
            scan_type=self._optional_text(payload, "scanType", self.default_scan_type,
                                         SCAN_TYPE_MAX_LENGTH),
            device_info=self._optional_text(payload, "deviceInfo", self.default_device_info,
                                           DEVICE_INFO_MAX_LENGTH),
        )
