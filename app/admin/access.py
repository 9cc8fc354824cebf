"""Back-office gate.

A request reaches an admin endpoint only if it carries a valid session
(otherwise 401, the client goes to the login view) and the session's identity
has a row in the admin directory (otherwise 403, the "Access Denied" view).
The session itself stays valid after a 403.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.admin.models import AdminUser
from app.auth.models import AuthIdentity
from app.common.db import get_db, store_operation
from app.common.security import get_current_identity

logger = logging.getLogger(__name__)


def find_admin_entry(db: Session, user_id: str) -> Optional[AdminUser]:
    return db.execute(
        select(AdminUser).where(AdminUser.user_id == user_id).limit(1)
    ).scalar_one_or_none()


def get_admin_user(
    identity: AuthIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> AdminUser:
    """Dependency to ensure the signed-in identity is in the admin directory."""
    with store_operation(db, "Error checking admin status"):
        entry = find_admin_entry(db, identity.id)
    if entry is None:
        logger.info("Denied back-office access to identity %s", identity.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access Denied. You don't have admin privileges."
        )
    return entry
