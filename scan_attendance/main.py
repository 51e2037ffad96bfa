# =======================================================================================
# scan_attendance/main.py - FastAPI Application Entry Point
# =======================================================================================
import time
from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .app_logger import get_logger, setup_logging
from .config import Settings
from .database import DatabaseManager
from .api.routes.scan import router as scan_router
from .models.enums import ErrorKind
from .models.schemas import HealthResponse, ServiceInfo
from .services.ingestion import IngestionService
from .services.scan_query import ScanQueryService
from .utils.exceptions import StorageUnavailableError

logger = get_logger("main")

_VALIDATION_MESSAGES = {
    ErrorKind.MISSING_FIELD: "Employee ID and scan time are required",
    ErrorKind.INVALID_FORMAT: "Request body is not a valid scan event",
}


def _error_body(kind: ErrorKind, message: str, error: Optional[str]) -> dict:
    return {"success": False, "message": message, "error": error, "errorCode": kind.error_code}


def create_app(settings: Optional[Settings] = None, db: Optional[DatabaseManager] = None) -> FastAPI:
    settings = settings or (db.settings if db else Settings.from_env())
    setup_logging(settings.LOG_LEVEL, debug=settings.API_DEBUG)
    db = db or DatabaseManager(settings)

    app = FastAPI(
        title="Scan Attendance API",
        version="1.0.0",
        description="Records barcode scans from ID cards and serves them back",
        debug=settings.API_DEBUG,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.db = db
    app.state.ingestion_service = IngestionService(db)
    app.state.query_service = ScanQueryService(db)
    app.state.started_at = time.monotonic()

    # Routers
    app.include_router(scan_router, prefix="/api", tags=["scan"])

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        missing = bool(errors) and all(e.get("type") == "missing" for e in errors)
        kind = ErrorKind.MISSING_FIELD if missing else ErrorKind.INVALID_FORMAT
        detail = "; ".join(
            f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}" for e in errors
        )
        logger.info("Rejected request body (%s): %s", kind.value, detail)
        return JSONResponse(
            status_code=kind.status_code,
            content=_error_body(kind, _VALIDATION_MESSAGES[kind], detail),
        )

    @app.exception_handler(StorageUnavailableError)
    async def storage_unavailable_handler(request: Request, exc: StorageUnavailableError):
        f = exc.failure
        return JSONResponse(status_code=f.status_code, content=_error_body(f.kind, f.message, f.error))

    @app.get("/", response_model=ServiceInfo, tags=["health"])
    def service_info():
        return ServiceInfo(
            message="Scan Attendance API is running",
            endpoints={
                "scan": "POST /api/scan",
                "scans": "GET /api/scans",
                "employeeScans": "GET /api/scans/{employeeId}",
                "health": "GET /api/health",
            },
        )

    @app.get("/api/health", response_model=HealthResponse, tags=["health"])
    def api_health():
        uptime = round(time.monotonic() - app.state.started_at, 3)
        now = datetime.now(timezone.utc)
        try:
            db.ping()
            return HealthResponse(status="ok", timestamp=now, database="connected", uptime=uptime)
        except Exception as e:
            return HealthResponse(
                status="degraded", timestamp=now, database="disconnected",
                uptime=uptime, message=str(e),
            )

    @app.on_event("startup")
    def startup_event():
        try:
            db.ping()
            logger.info("Database connected successfully")
        except Exception as e:
            logger.error("Database connection failed: %s", e)
        logger.info("Scan endpoint: POST /api/scan, health check: GET /api/health")

    @app.on_event("shutdown")
    def shutdown_event():
        db.dispose()

    return app
