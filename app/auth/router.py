"""Identity endpoints: sign-up, sign-in, refresh, sign-out and session lookup."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.common.db import get_db
from app.auth import schemas as auth_schema
from app.common.schemas import Message
from app.common.security import get_current_identity
from app.auth.service import IdentityService
from app.auth.models import AuthIdentity

router = APIRouter()


@router.post("/signup", response_model=auth_schema.IdentityRead, status_code=status.HTTP_201_CREATED)
def sign_up(payload: auth_schema.SignUpRequest, db: Session = Depends(get_db)):
    """
    Create an account.

    The account can sign in straight away but only reaches the admin
    dashboard once an admin directory entry references it.
    """
    identity = IdentityService(db).sign_up(payload.email, payload.password, payload.redirect_to)
    return auth_schema.IdentityRead.model_validate(identity)


@router.post("/login", response_model=auth_schema.SessionResponse)
def login(payload: auth_schema.Credentials, db: Session = Depends(get_db)):
    """Sign in with email and password."""
    return IdentityService(db).sign_in(payload.email, payload.password)


@router.post("/refresh", response_model=auth_schema.Token)
def refresh_token(payload: auth_schema.RefreshTokenRequest, db: Session = Depends(get_db)):
    """Exchange a refresh token for a new access token."""
    return IdentityService(db).refresh(payload.refresh_token)


@router.post("/logout", response_model=Message)
def logout(
    identity: AuthIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Sign out everywhere. Access tokens expire on their own within minutes."""
    IdentityService(db).sign_out(identity.id)
    return Message(message="Signed out")


@router.get("/session", response_model=auth_schema.IdentityRead)
def current_session(identity: AuthIdentity = Depends(get_current_identity)):
    """The identity behind the bearer token, or 401 when there is none."""
    return auth_schema.IdentityRead.model_validate(identity)
