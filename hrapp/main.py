# hrapp/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from hrapp.core.config import get_settings
from hrapp.db import create_tables, engine
from hrapp.routers import employees, system, timesheets

logger = logging.getLogger("hrapp")

tags_metadata = [
    {"name": "System", "description": "Service health and metadata."},
    {"name": "Employees", "description": "Employee records, photo and CV uploads."},
    {"name": "Timesheets", "description": "Timesheets, table and calendar views."},
]

@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables(engine)
    yield

def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=settings.APP_DESCRIPTION,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    # "/" -> employee listing
    @app.get("/", include_in_schema=False)
    def root():
        return RedirectResponse(url="/employees")
    app.include_router(system.router, prefix=settings.API_PREFIX)
    app.include_router(employees.router)
    app.include_router(timesheets.router)
    app.mount("/uploads", StaticFiles(directory=settings.upload_path, check_dir=False), name="uploads")
    for r in app.routes:
        logger.debug("route %s %s", getattr(r, "path", r), sorted(getattr(r, "methods", None) or []))
    return app

app = create_app()
