"""Referral sites offered on the intake form."""

import enum
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.common.db import Base


class ButtonColor(str, enum.Enum):
    GREEN = "green"
    RED = "red"
    BLUE = "blue"
    PURPLE = "purple"


class ReferralSite(Base):
    __tablename__ = "betting_sites"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    logo_url: Mapped[Optional[str]] = mapped_column(String(500))
    button_color: Mapped[str] = mapped_column(String(20), default=ButtonColor.GREEN.value, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
