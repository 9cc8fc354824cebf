"""Pydantic schemas for referral sites."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.sites.models import ButtonColor


class SiteBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    display_name: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=500)
    logo_url: Optional[str] = Field(None, max_length=500)
    button_color: ButtonColor = ButtonColor.GREEN


class SiteCreate(SiteBase):
    is_active: bool = True


class SiteUpdate(SiteBase):
    """Full replacement of the editable fields, as the edit form sends them."""
    pass


class SiteActiveUpdate(BaseModel):
    is_active: bool


class SiteResponse(SiteBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    is_active: bool
    created_at: datetime


class PublicSite(BaseModel):
    """A site as the intake form shows it. Fallback entries have no id."""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    name: str
    display_name: str
    url: str
    logo_url: Optional[str] = None
    button_color: str = ButtonColor.GREEN.value


class LogoUploadResponse(BaseModel):
    url: str
    filename: str
