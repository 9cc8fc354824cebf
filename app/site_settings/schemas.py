from pydantic import BaseModel, Field


class WhatsAppNumber(BaseModel):
    number: str = Field("", max_length=20, pattern=r"^[0-9]*$")
