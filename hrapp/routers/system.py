# hrapp/routers/system.py
from fastapi import APIRouter, Depends, status
from hrapp.core.config import get_settings, Settings
from hrapp.core.security import require_admin_key
from hrapp.db import RowStore, get_store

router = APIRouter()

@router.get("/health", tags=["System"], summary="Health check",
            responses={200: {"description": "Service healthy"}})
def health():
    return {"status": "ok"}

@router.get("/info", tags=["System"], summary="Application info",
            status_code=status.HTTP_200_OK)
def info(
    settings: Settings = Depends(get_settings),
    store: RowStore = Depends(get_store),
    _: bool = Depends(require_admin_key),
):
    counts = store.get(
        "SELECT (SELECT COUNT(*) FROM employees) AS employees,"
        " (SELECT COUNT(*) FROM timesheets) AS timesheets"
    )
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "db": settings.SQLITE_PATH,
        "engine": "SQLAlchemy + SQLite",
        "records": counts,
    }
