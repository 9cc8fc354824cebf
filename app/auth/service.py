"""Identity provider: accounts, sessions and token management.

Nothing here decides who is an administrator; that lives in the admin
directory (``app.admin``). A valid session only proves who the caller is.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.auth.models import AuthIdentity, LoginAudit, RefreshToken
from app.auth import schemas as auth_schema
from app.common.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    get_password_hash,
    verify_password,
)
from app.common.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


class IdentityService:
    """Sign-up, sign-in, sign-out and session refresh."""

    def __init__(self, session: Session):
        self.session = session

    def _create_login_audit(self, email: str, user_id: Optional[str], success: bool) -> None:
        audit = LoginAudit(email=email, user_id=user_id, success=success)
        self.session.add(audit)

    def sign_up(self, email: str, password: str, redirect_to: Optional[str] = None) -> AuthIdentity:
        """
        Create a new identity.

        Args:
            email: Login email, unique across identities
            password: Plain password, stored as a bcrypt hash
            redirect_to: Where the account should land after confirming its email

        Returns:
            The created identity

        Raises:
            HTTPException: 400 if the email is already registered
        """
        email = email.lower()
        existing = self.session.execute(
            select(AuthIdentity).where(AuthIdentity.email == email)
        ).scalar_one_or_none()
        if existing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User already registered"
            )

        identity = AuthIdentity(
            email=email,
            hashed_password=get_password_hash(password),
            email_redirect_to=redirect_to or settings.admin_redirect_url,
        )
        self.session.add(identity)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User already registered"
            ) from exc

        logger.info("Created identity %s", identity.id)
        return identity

    def sign_in(self, email: str, password: str) -> auth_schema.SessionResponse:
        """
        Authenticate and open a session.

        Raises:
            HTTPException: 401 if credentials are invalid
        """
        email = email.lower()
        identity = self.session.execute(
            select(AuthIdentity).where(AuthIdentity.email == email)
        ).scalar_one_or_none()

        if not identity or not identity.is_active or not verify_password(password, identity.hashed_password):
            self._create_login_audit(email, identity.id if identity else None, False)
            self.session.commit()
            logger.info("Failed sign-in for %s", email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid login credentials"
            )

        access_token = create_access_token(identity.id, extra={"email": identity.email})
        refresh_token_str = create_refresh_token(identity.id)
        self.session.add(
            RefreshToken(
                user_id=identity.id,
                token=refresh_token_str,
                expires_at=datetime.utcnow() + timedelta(days=settings.refresh_token_expire_days),
            )
        )
        self._create_login_audit(email, identity.id, True)
        self.session.commit()

        return auth_schema.SessionResponse(
            access_token=access_token,
            refresh_token=refresh_token_str,
            expires_in=settings.access_token_expire_minutes * 60,
            user=auth_schema.IdentityRead.model_validate(identity),
        )

    def refresh(self, refresh_token_str: str) -> auth_schema.Token:
        """
        Issue a new access token for a stored, unrevoked refresh token.

        Raises:
            HTTPException: If refresh token is invalid, revoked, or expired
        """
        decode_refresh_token(refresh_token_str)

        refresh_token = self.session.execute(
            select(RefreshToken).where(
                RefreshToken.token == refresh_token_str,
                RefreshToken.revoked == False,  # noqa: E712
                RefreshToken.expires_at > datetime.utcnow(),
            )
        ).scalar_one_or_none()
        if not refresh_token:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired refresh token"
            )

        identity = self.session.get(AuthIdentity, refresh_token.user_id)
        if not identity or not identity.is_active:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User not found or inactive"
            )

        return auth_schema.Token(
            access_token=create_access_token(identity.id, extra={"email": identity.email}),
            refresh_token=refresh_token_str,
            expires_in=settings.access_token_expire_minutes * 60,
        )

    def sign_out(self, user_id: str) -> None:
        """Revoke every refresh token of the identity."""
        for token in self.session.execute(
            select(RefreshToken).where(RefreshToken.user_id == user_id)
        ).scalars():
            token.revoked = True
        self.session.commit()
