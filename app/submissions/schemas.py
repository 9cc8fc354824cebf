from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SubmissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    mobile_number: str
    selected_website: str
    status: Optional[str] = None
    submitted_at: datetime
    in_range: bool = True


class SubmissionList(BaseModel):
    items: List[SubmissionResponse]
    total: int
    in_range: int
    start: Optional[date] = None
    end: Optional[date] = None


class BulkDeleteRequest(BaseModel):
    ids: List[str] = Field(default_factory=list)


class BulkDeleteResponse(BaseModel):
    deleted: int


class WhatsAppLink(BaseModel):
    url: str
