# routers/health.py
import time
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version

from fastapi import APIRouter

router = APIRouter(tags=["Health"])

STARTED_AT = time.monotonic()


def app_version() -> str:
    try:
        return version("board-api")
    except PackageNotFoundError:
        return "1.0.0"


def uptime_seconds() -> float:
    return round(time.monotonic() - STARTED_AT, 3)


@router.get("/health", summary="Health check")
async def health():
    # 의존성(DB) 확인 없이 항상 200
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": uptime_seconds(),
        "version": app_version(),
    }
