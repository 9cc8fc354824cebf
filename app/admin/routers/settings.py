"""Admin settings router - the support WhatsApp number."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.admin.access import get_admin_user
from app.admin.models import AdminUser
from app.common.db import get_db
from app.site_settings.schemas import WhatsAppNumber
from app.site_settings.service import SettingsService

router = APIRouter()


@router.get("/whatsapp", response_model=WhatsAppNumber)
def get_whatsapp_number(
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    return WhatsAppNumber(number=SettingsService(db).get_whatsapp_number())


@router.put("/whatsapp", response_model=WhatsAppNumber)
def update_whatsapp_number(
    data: WhatsAppNumber,
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """Change the number intake submissions are sent to."""
    return WhatsAppNumber(number=SettingsService(db).set_whatsapp_number(data.number))
