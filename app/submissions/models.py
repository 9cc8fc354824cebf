"""Leads captured by the intake form."""

import enum
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.common.db import Base


class SubmissionStatus(str, enum.Enum):
    PENDING = "pending"
    CONTACTED = "contacted"


class Submission(Base):
    __tablename__ = "user_submissions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    mobile_number: Mapped[str] = mapped_column(String(10), nullable=False)
    selected_website: Mapped[str] = mapped_column(String(255), nullable=False)
    # Nullable: rows written before statuses existed have none
    status: Mapped[Optional[str]] = mapped_column(String(20), default=SubmissionStatus.PENDING.value)
    submitted_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
