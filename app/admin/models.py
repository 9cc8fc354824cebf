"""Admin directory: which identities may use the back office."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from app.common.db import Base


class AdminRole(str, enum.Enum):
    ADMIN = "admin"
    MODERATOR = "moderator"


class AdminUser(Base):
    """One row grants back-office access to one identity."""
    __tablename__ = "admin_users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Not a foreign key: removing the row must never touch the identity
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    role: Mapped[AdminRole] = mapped_column(
        Enum(AdminRole, values_callable=lambda e: [m.value for m in e], native_enum=False),
        default=AdminRole.ADMIN,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
