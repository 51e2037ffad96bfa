# =======================================================================================
# scan_attendance/__main__.py - Server Entrypoint
# =======================================================================================
import uvicorn
from .config import Settings


def main():
    settings = Settings.from_env()
    uvicorn.run(
        "scan_attendance.main:create_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_DEBUG,
    )


if __name__ == "__main__":
    main()
