"""Admin referral site router - CRUD, activation toggle and logo upload."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.admin.access import get_admin_user
from app.admin.models import AdminUser
from app.common.db import get_db
from app.common.schemas import Message
from app.sites.schemas import (
    LogoUploadResponse,
    SiteActiveUpdate,
    SiteCreate,
    SiteResponse,
    SiteUpdate,
)
from app.sites.service import SiteService

router = APIRouter()


def _parse_form(schema, **fields):
    try:
        return schema(**fields)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


@router.get("", response_model=List[SiteResponse])
def list_sites(
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """All sites, newest first."""
    return SiteService(db).list_sites()


@router.post("", response_model=SiteResponse, status_code=status.HTTP_201_CREATED)
def create_site(
    name: str = Form(...),
    display_name: str = Form(...),
    url: str = Form(...),
    logo_url: Optional[str] = Form(None),
    button_color: str = Form("green"),
    is_active: bool = Form(True),
    logo: Optional[UploadFile] = File(None, description="Logo image; replaces logo_url when given"),
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """Add a site. A logo file is uploaded first; if that fails nothing is saved."""
    data = _parse_form(
        SiteCreate,
        name=name, display_name=display_name, url=url,
        logo_url=logo_url, button_color=button_color, is_active=is_active,
    )
    return SiteService(db).create_site(data, logo)


@router.put("/{site_id}", response_model=SiteResponse)
def update_site(
    site_id: str,
    name: str = Form(...),
    display_name: str = Form(...),
    url: str = Form(...),
    logo_url: Optional[str] = Form(None),
    button_color: str = Form("green"),
    logo: Optional[UploadFile] = File(None, description="Logo image; replaces logo_url when given"),
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """Edit a site in place."""
    data = _parse_form(
        SiteUpdate,
        name=name, display_name=display_name, url=url,
        logo_url=logo_url, button_color=button_color,
    )
    return SiteService(db).update_site(site_id, data, logo)


@router.patch("/{site_id}/active", response_model=SiteResponse)
def set_site_active(
    site_id: str,
    data: SiteActiveUpdate,
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """Show or hide a site on the intake form."""
    return SiteService(db).set_active(site_id, data.is_active)


@router.delete("/{site_id}", response_model=Message)
def delete_site(
    site_id: str,
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """Delete a site. Clients ask the admin to confirm before calling this."""
    SiteService(db).delete_site(site_id)
    return Message(message="Site deleted successfully")


@router.post("/logo", response_model=LogoUploadResponse)
def upload_logo(
    file: UploadFile = File(..., description="Image file to upload"),
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """Upload a logo on its own and get back its public URL."""
    return SiteService(db).upload_logo(file)
