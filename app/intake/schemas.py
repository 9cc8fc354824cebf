from typing import List

from pydantic import BaseModel, Field

from app.sites.schemas import PublicSite


class IntakeState(BaseModel):
    """Where a visitor is in the form and what they have typed so far."""
    step: int = Field(1, ge=1, le=3)
    name: str = ""
    mobile: str = ""


class IntakeSubmit(BaseModel):
    name: str = Field(..., max_length=255)
    mobile: str
    site: str = Field(..., min_length=1, max_length=255, description="Display name (or name) of the chosen site")


class IntakeSubmitResponse(BaseModel):
    submission_id: str
    whatsapp_url: str
    state: IntakeState


class IntakeSites(BaseModel):
    sites: List[PublicSite]
    fallback: bool = False


class ContactNumber(BaseModel):
    number: str
