# =======================================================================================
# scan_attendance/client/capture.py - Scan Capture State Machine
# =======================================================================================
from datetime import datetime, timezone, tzinfo
from typing import Callable, FrozenSet, Iterable, Optional
from ..app_logger import get_logger
from ..models.enums import (
    CameraFacing, CaptureState, DEFAULT_DEVICE_INFO, DEFAULT_SCAN_TYPE, SUPPORTED_BARCODE_TYPES,
)
from ..models.scan_event import ScanEvent, isoformat_utc
from ..utils.exceptions import NoCandidateError, SessionClosedError
from .api_client import ScanApiClient, SubmissionResult

logger = get_logger("client.capture")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CaptureSession:
    """
    Turns a stream of camera detections into at most one scan candidate per
    user action.

    IDLE      camera feeding detections; the first one becomes the candidate.
    CAPTURED  detections are discarded until `reset()` or a focus regain.

    Submitting never changes state or clears the candidate, so a failed
    submission can be retried by hand without rescanning.
    """

    def __init__(
        self,
        api: ScanApiClient,
        device_info: str = DEFAULT_DEVICE_INFO,
        barcode_types: Iterable[str] = SUPPORTED_BARCODE_TYPES,
        clock: Callable[[], datetime] = _utcnow,
        display_tz: Optional[tzinfo] = None,
    ):
        self.api = api
        self.device_info = device_info
        self.barcode_types: FrozenSet[str] = frozenset(barcode_types)
        self._clock = clock
        self._display_tz = display_tz

        self.state = CaptureState.IDLE
        self.candidate: Optional[ScanEvent] = None
        self.captured_at: Optional[datetime] = None
        self.last_result: Optional[SubmissionResult] = None
        self.camera_active = True
        self.facing: CameraFacing = "back"
        self.closed = False

    # ------------------------------------------------------------------
    # Camera events
    # ------------------------------------------------------------------
    @property
    def detection_enabled(self) -> bool:
        return not self.closed and self.camera_active and self.state is CaptureState.IDLE

    def on_detection(self, data: str, barcode_type: Optional[str] = None) -> Optional[ScanEvent]:
        """Handle one detection; returns the new candidate, or None if discarded."""
        self._ensure_open()
        if not self.detection_enabled:
            return None
        if barcode_type is not None and barcode_type not in self.barcode_types:
            logger.debug("Ignoring unsupported barcode type %s", barcode_type)
            return None

        self.captured_at = self._clock()
        self.candidate = ScanEvent(
            employee_id=data,
            scan_date_time=isoformat_utc(self.captured_at),
            scan_type=barcode_type or DEFAULT_SCAN_TYPE,
            device_info=self.device_info,
        )
        self.state = CaptureState.CAPTURED
        self.last_result = None
        logger.info("Barcode scanned: type=%s data=%s", barcode_type, data)
        return self.candidate

    def focus_lost(self) -> None:
        """Screen hidden: suspend detection whatever the state."""
        self._ensure_open()
        self.camera_active = False

    def focus_gained(self) -> None:
        """Screen visible again: resume detection from IDLE if it had been hidden."""
        self._ensure_open()
        if self.camera_active:
            return
        self.camera_active = True
        self.reset()

    def toggle_facing(self) -> CameraFacing:
        self._ensure_open()
        self.facing = "front" if self.facing == "back" else "back"
        return self.facing

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Scan again."""
        self._ensure_open()
        self.state = CaptureState.IDLE
        self.candidate = None
        self.captured_at = None
        self.last_result = None

    def submit(self) -> SubmissionResult:
        """Send the held candidate once. No retry, no state change."""
        self._ensure_open()
        if self.state is not CaptureState.CAPTURED or self.candidate is None:
            raise NoCandidateError("No scanned barcode to submit")

        result = self.api.submit_scan(self.candidate)
        self.last_result = result
        if result.ok:
            logger.info("Scan submitted for %s", self.candidate.employee_id)
        else:
            logger.warning("Scan submission failed (%s): %s", result.error_code, result.message)
        return result

    def unmount(self) -> None:
        self.closed = True
        self.camera_active = False
        self.candidate = None
        self.captured_at = None

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------
    @property
    def display_time(self) -> Optional[str]:
        """Capture time as shown under the scanned data, e.g. `Jan 15, 2024, 09:00:00 AM`."""
        if self.captured_at is None:
            return None
        t = self.captured_at.astimezone(self._display_tz)
        return f"{t:%b} {t.day}, {t:%Y, %I:%M:%S %p}"

    def _ensure_open(self) -> None:
        if self.closed:
            raise SessionClosedError("Capture session has been unmounted")
