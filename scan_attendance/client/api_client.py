# =======================================================================================
# scan_attendance/client/api_client.py - HTTP Client for the Scan API
# =======================================================================================
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote
import httpx
from ..app_logger import get_logger
from ..models.scan_event import ScanEvent

logger = get_logger("client.api")

NETWORK_ERROR_CODE = "ENETWORK"


@dataclass(frozen=True)
class SubmissionResult:
    """What the capture screen shows after a submit attempt."""
    ok: bool
    status_code: int
    message: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    error_code: Optional[Union[str, int]] = None


class ScanApiClient:
    """
    Thin synchronous client for the scan server.

    Pass an existing `httpx.Client` (for instance FastAPI's TestClient) to reuse
    its transport; otherwise one is created for `base_url` and closed by `close()`.
    """

    def __init__(self, base_url: str = "http://localhost:3000",
                 client: Optional[httpx.Client] = None, timeout: float = 10.0):
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def __enter__(self) -> "ScanApiClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def submit_scan(self, event: ScanEvent) -> SubmissionResult:
        """POST one scan. Transport failures are returned, not raised."""
        try:
            response = self._client.post("/api/scan", json=event.to_payload())
        except httpx.RequestError as e:
            logger.warning("Scan submission failed before reaching the server: %s", e)
            return SubmissionResult(
                ok=False, status_code=0, message="Could not reach the scan server",
                error=str(e), error_code=NETWORK_ERROR_CODE,
            )

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code == 201 and body.get("success"):
            return SubmissionResult(
                ok=True, status_code=201, message=body.get("message", ""), data=body.get("data"),
            )
        return SubmissionResult(
            ok=False,
            status_code=response.status_code,
            message=body.get("message") or response.reason_phrase,
            error=body.get("error"),
            error_code=body.get("errorCode"),
        )

    def list_recent(self) -> List[Dict[str, Any]]:
        response = self._client.get("/api/scans")
        response.raise_for_status()
        return response.json()["scans"]

    def list_by_employee(self, employee_id: str) -> List[Dict[str, Any]]:
        response = self._client.get(f"/api/scans/{quote(employee_id, safe='')}")
        response.raise_for_status()
        return response.json()["scans"]

    def health(self) -> Dict[str, Any]:
        response = self._client.get("/api/health")
        response.raise_for_status()
        return response.json()
