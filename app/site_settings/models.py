"""Key/value settings edited from the back office."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.common.db import Base

WHATSAPP_KEY = "whatsapp"


class Setting(Base):
    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, default="", nullable=False)
