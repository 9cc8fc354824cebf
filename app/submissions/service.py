"""Submission ledger: review, status tracking, bulk delete and export."""

import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Sequence

from fastapi import HTTPException, status
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.common.config import get_settings
from app.common.db import store_operation
from app.common.whatsapp import build_whatsapp_url, support_greeting
from app.submissions.models import Submission, SubmissionStatus
from app.submissions import schemas as submission_schema

settings = get_settings()
logger = logging.getLogger(__name__)

EXPORT_HEADERS = ["Name", "Mobile Number", "Website", "Status", "Submitted At"]
EXPORT_FILENAME = "user_submissions"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

# Open-ended bounds of the date filter
RANGE_FLOOR = datetime(2000, 1, 1)
RANGE_CEILING = datetime(2100, 1, 1)


def is_in_range(submitted_at: datetime, start: Optional[date] = None, end: Optional[date] = None) -> bool:
    """
    Inclusive date filter.

    ``start`` counts from the beginning of that day and ``end`` through the
    last moment of that day. With neither bound every row is in range.
    """
    if start is None and end is None:
        return True
    lower = datetime.combine(start, time.min) if start else RANGE_FLOOR
    upper = datetime.combine(end + timedelta(days=1), time.min) if end else RANGE_CEILING
    if submitted_at.tzinfo is not None:
        submitted_at = submitted_at.replace(tzinfo=None)
    return lower <= submitted_at < upper


def filter_by_date(
    submissions: Iterable[Submission], start: Optional[date] = None, end: Optional[date] = None
) -> List[Submission]:
    return [s for s in submissions if is_in_range(s.submitted_at, start, end)]


def next_status(current: Optional[str]) -> str:
    """Pending flips to contacted; anything else flips back to pending."""
    if current == SubmissionStatus.PENDING.value:
        return SubmissionStatus.CONTACTED.value
    return SubmissionStatus.PENDING.value


def export_row(submission: Submission) -> Sequence:
    return [
        submission.name,
        f"+{settings.whatsapp_country_code}{submission.mobile_number}",
        submission.selected_website,
        submission.status,
        submission.submitted_at.strftime(TIMESTAMP_FORMAT),
    ]


class SubmissionService:
    def __init__(self, session: Session):
        self.session = session

    def list_submissions(self) -> List[Submission]:
        """Every submission, newest first."""
        with store_operation(self.session, "Error fetching submissions"):
            return list(self.session.execute(
                select(Submission).order_by(Submission.submitted_at.desc())
            ).scalars())

    def review(self, start: Optional[date] = None, end: Optional[date] = None) -> submission_schema.SubmissionList:
        """All rows, each marked with whether it falls inside the date filter."""
        items = []
        for row in self.list_submissions():
            item = submission_schema.SubmissionResponse.model_validate(row)
            item.in_range = is_in_range(row.submitted_at, start, end)
            items.append(item)
        return submission_schema.SubmissionList(
            items=items,
            total=len(items),
            in_range=sum(1 for item in items if item.in_range),
            start=start,
            end=end,
        )

    def export_rows(self, start: Optional[date] = None, end: Optional[date] = None) -> List[Sequence]:
        """Rows for the export file: only what the date filter currently shows."""
        return [export_row(s) for s in filter_by_date(self.list_submissions(), start, end)]

    def delete_many(self, ids: List[str]) -> int:
        if not ids:
            return 0
        with store_operation(self.session, "Error deleting submissions"):
            result = self.session.execute(delete(Submission).where(Submission.id.in_(ids)))
            self.session.commit()
        logger.info("Deleted %s submissions", result.rowcount)
        return result.rowcount

    def _get(self, submission_id: str) -> Submission:
        submission = self.session.get(Submission, submission_id)
        if submission is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")
        return submission

    def toggle_status(self, submission_id: str) -> Submission:
        with store_operation(self.session, "Error updating submission"):
            submission = self._get(submission_id)
            submission.status = next_status(submission.status)
            self.session.commit()
        return submission

    def whatsapp_link(self, submission_id: str) -> submission_schema.WhatsAppLink:
        """Link for support to message the lead directly."""
        with store_operation(self.session, "Error fetching submission"):
            submission = self._get(submission_id)
        number = f"{settings.whatsapp_country_code}{submission.mobile_number}"
        return submission_schema.WhatsAppLink(url=build_whatsapp_url(number, support_greeting(submission.name)))
