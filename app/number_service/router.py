"""GET/POST /whatsapp: read or replace the stored support number."""

import hmac
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.number_service.config import get_number_settings
from app.number_service.db import get_number_db
from app.number_service.models import WhatsAppDocument

router = APIRouter()
logger = logging.getLogger(__name__)


class NumberUpdate(BaseModel):
    number: Optional[str] = None
    password: Optional[str] = None


def _first_document(db: Session) -> Optional[WhatsAppDocument]:
    return db.execute(select(WhatsAppDocument).order_by(WhatsAppDocument.id).limit(1)).scalar_one_or_none()


def _password_matches(given: Optional[str]) -> bool:
    expected = get_number_settings().admin_password
    if not expected or given is None:
        return False
    return hmac.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


@router.get("/whatsapp")
def get_number(db: Session = Depends(get_number_db)):
    """Current number; 404 with an empty number when none has been saved."""
    try:
        document = _first_document(db)
    except SQLAlchemyError as exc:
        logger.error("Failed to read WhatsApp number: %s", exc)
        return JSONResponse(status_code=500, content={"error": "Server error"})

    if document is None:
        return JSONResponse(status_code=404, content={"number": ""})
    return {"number": document.number}


@router.post("/whatsapp")
def set_number(data: NumberUpdate, db: Session = Depends(get_number_db)):
    """Replace the number. Requires the shared admin password."""
    if not _password_matches(data.password):
        logger.warning("Rejected WhatsApp number update with wrong password")
        return JSONResponse(status_code=403, content={"error": "Unauthorized"})

    if not data.number:
        logger.error("Rejected WhatsApp number update without a number")
        return JSONResponse(status_code=500, content={"error": "Update failed"})

    try:
        document = _first_document(db)
        if document is None:
            db.add(WhatsAppDocument(number=data.number))
        else:
            document.number = data.number
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Failed to update WhatsApp number: %s", exc)
        return JSONResponse(status_code=500, content={"error": "Update failed"})

    logger.info("WhatsApp number updated")
    return {"success": True}
