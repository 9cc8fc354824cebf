"""Dashboard shell: who is signed in, which tabs to show, and tab counters."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.admin.access import get_admin_user
from app.admin.models import AdminUser
from app.admin.schemas import AdminSession, DashboardCounts
from app.auth.models import AuthIdentity
from app.common.admin_service import AdminService
from app.common.db import get_db
from app.common.security import get_current_identity

router = APIRouter()


@router.get("/session", response_model=AdminSession)
def admin_session(
    identity: AuthIdentity = Depends(get_current_identity),
    current_admin: AdminUser = Depends(get_admin_user),
):
    """
    Gate check for the dashboard.

    401 means no session (show login), 403 means signed in without an
    admin directory entry (show Access Denied).
    """
    return AdminSession(user_id=identity.id, email=identity.email, role=current_admin.role)


@router.get("/dashboard", response_model=DashboardCounts)
def dashboard(
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    return AdminService(db).dashboard_counts()
