"""Pydantic schemas for the admin directory and dashboard shell."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.admin.models import AdminRole


DASHBOARD_TABS = ["submissions", "sites", "admins", "whatsapp"]


class AdminUserCreate(BaseModel):
    """Provision a new identity and grant it a role."""
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: AdminRole = AdminRole.ADMIN


class AdminUserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    role: AdminRole
    created_at: datetime
    email: Optional[str] = None


class AdminSession(BaseModel):
    """What the dashboard shell needs to render its header and tabs."""
    user_id: str
    email: str
    role: AdminRole
    tabs: List[str] = Field(default_factory=lambda: list(DASHBOARD_TABS))


class DashboardCounts(BaseModel):
    submissions: int
    pending: int
    contacted: int
    sites: int
    active_sites: int
    admins: int
