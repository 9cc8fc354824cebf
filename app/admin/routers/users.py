"""Admin directory router - list, add and remove back-office users."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.admin.access import get_admin_user
from app.admin.models import AdminUser
from app.admin.schemas import AdminUserCreate, AdminUserResponse
from app.admin.service import AdminDirectoryService
from app.common.db import get_db
from app.common.schemas import Message

router = APIRouter()


@router.get("", response_model=List[AdminUserResponse])
def list_admin_users(
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """List admin directory entries, newest first."""
    return AdminDirectoryService(db).list_admins()


@router.post("", response_model=AdminUserResponse, status_code=status.HTTP_201_CREATED)
def create_admin_user(
    data: AdminUserCreate,
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """
    Create a login for a new admin and grant it a role.

    If the account is created but the grant fails, the account is left
    without admin rights and the request reports the failure.
    """
    return AdminDirectoryService(db).create_admin(data.email, data.password, data.role)


@router.delete("/{admin_id}", response_model=Message)
def delete_admin_user(
    admin_id: str,
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """Remove an admin's directory entry. Their login keeps working but is denied access."""
    AdminDirectoryService(db).delete_admin(admin_id)
    return Message(message="Admin user removed successfully")
