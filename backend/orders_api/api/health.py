"""Service status endpoint."""

from typing import Any

from fastapi import APIRouter

from orders_api.api.dependencies import SettingsDep

router = APIRouter()


@router.get("/health", operation_id="healthCheck")
async def health_check(settings: SettingsDep) -> dict[str, Any]:
    """Report whether the store settings are complete.

    Makes no call to the document store, so an unreachable GitHub does not
    show up here. A deployment missing any GITHUB_* variable is ``degraded``:
    every order it receives will fail with 500.
    """
    missing = settings.missing_store_settings
    return {
        "status": "degraded" if missing else "healthy",
        "store_configured": not missing,
        "missing": missing,
        "branch": settings.github_branch,
        "path": settings.store_data_path,
    }
