import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.common.config import get_settings
from app.common import file_router
from app.auth import router as auth_router
from app.intake import router as intake_router
from app.admin.routers import (
    dashboard as admin_dashboard,
    sites as admin_sites,
    submissions as admin_submissions,
    users as admin_users,
    settings as admin_settings,
)


settings = get_settings()

logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)

app = FastAPI(title=settings.app_name, version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers - all under /api prefix
app.include_router(auth_router.router, prefix="/api/auth", tags=["auth"])
app.include_router(intake_router.router, prefix="/api/intake", tags=["intake"])
app.include_router(admin_dashboard.router, prefix="/api/admin", tags=["admin"])
app.include_router(admin_sites.router, prefix="/api/admin/sites", tags=["admin-sites"])
app.include_router(admin_submissions.router, prefix="/api/admin/submissions", tags=["admin-submissions"])
app.include_router(admin_users.router, prefix="/api/admin/users", tags=["admin-users"])
app.include_router(admin_settings.router, prefix="/api/admin/settings", tags=["admin-settings"])
app.include_router(file_router.router, prefix="/api", tags=["files"])


@app.get("/api/health", tags=["system"])
def health() -> dict:
    """Health check endpoint that pings the database."""
    from sqlalchemy import text
    from app.common.db import get_sync_engine

    try:
        with get_sync_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as e:
        db_status = f"error: {str(e)}"

    return {"status": "ok", "database": db_status}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
