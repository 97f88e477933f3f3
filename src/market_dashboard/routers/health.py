from __future__ import annotations

from datetime import datetime, timezone
from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness probe for the dashboard service."""
    return {"status": "ok", "asof": datetime.now(timezone.utc).isoformat()}
