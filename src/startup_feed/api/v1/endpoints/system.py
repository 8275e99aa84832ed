"""Health and storage diagnostics endpoints."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter

from ..dependencies import SettingsDep, StoreDep

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check(config: SettingsDep) -> dict[str, str]:
    """Report that the API is running."""
    return {
        "status": "OK",
        "message": f"{config.app_name} API is running",
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/debug/storage")
async def storage_status(store: StoreDep) -> dict[str, object]:
    """Return the active backend mode and collection sizes."""
    return {"mode": store.mode.value, "counts": await store.counts()}
