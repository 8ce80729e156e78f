from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter

from dp_cars.infra.config import environment

router = APIRouter(tags=["Health"])


@router.get("/health", summary="Liveness probe")
def health() -> dict[str, Any]:
    return {
        "ok": True,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": environment(),
    }
