"""Admin directory management."""

import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.admin.models import AdminRole, AdminUser
from app.admin import schemas as admin_schema
from app.auth.models import AuthIdentity
from app.auth.service import IdentityService
from app.common.config import get_settings
from app.common.db import store_operation

settings = get_settings()
logger = logging.getLogger(__name__)


class AdminDirectoryService:
    def __init__(self, session: Session):
        self.session = session

    def list_admins(self) -> List[admin_schema.AdminUserResponse]:
        """All directory entries, newest first, with the identity's email when known."""
        with store_operation(self.session, "Error fetching admin users"):
            rows = self.session.execute(
                select(AdminUser, AuthIdentity.email)
                .outerjoin(AuthIdentity, AuthIdentity.id == AdminUser.user_id)
                .order_by(AdminUser.created_at.desc())
            ).all()
        result = []
        for entry, email in rows:
            item = admin_schema.AdminUserResponse.model_validate(entry)
            item.email = email
            result.append(item)
        return result

    def create_admin(self, email: str, password: str, role: AdminRole) -> admin_schema.AdminUserResponse:
        """
        Provision an identity, then grant it a role.

        The two steps are not atomic. If the grant fails the identity stays
        behind without a directory row; it is logged and not cleaned up.
        """
        identity = IdentityService(self.session).sign_up(email, password, settings.admin_redirect_url)

        entry = AdminUser(user_id=identity.id, role=role)
        try:
            self.session.add(entry)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.warning("Identity %s created but admin grant failed: %s", identity.id, exc)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error creating admin user"
            ) from exc

        logger.info("Granted %s to identity %s", role.value, identity.id)
        item = admin_schema.AdminUserResponse.model_validate(entry)
        item.email = identity.email
        return item

    def delete_admin(self, admin_id: str) -> None:
        """Remove the directory row only. The identity keeps existing and can still sign in."""
        with store_operation(self.session, "Error deleting admin user"):
            entry = self.session.get(AdminUser, admin_id)
            if entry is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Admin user not found")
            self.session.delete(entry)
            self.session.commit()
        logger.info("Removed admin entry %s (identity %s)", admin_id, entry.user_id)
