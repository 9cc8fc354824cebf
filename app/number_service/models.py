from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.number_service.db import NumberBase


class WhatsAppDocument(NumberBase):
    """The service's only collection. In practice it holds at most one document."""
    __tablename__ = "whatsapp"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    number: Mapped[str] = mapped_column(String(50), nullable=False)
