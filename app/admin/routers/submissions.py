"""Admin submission ledger router."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.admin.access import get_admin_user
from app.admin.models import AdminUser
from app.common.db import get_db
from app.common.exporter import write_rows_to_csv, write_rows_to_xlsx
from app.submissions.schemas import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    SubmissionList,
    SubmissionResponse,
    WhatsAppLink,
)
from app.submissions.service import EXPORT_FILENAME, EXPORT_HEADERS, SubmissionService

router = APIRouter()


@router.get("", response_model=SubmissionList)
def list_submissions(
    start: Optional[date] = Query(None, description="First day of the date filter"),
    end: Optional[date] = Query(None, description="Last day of the date filter"),
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """
    All submissions, newest first.

    The date filter only marks rows (``in_range``); nothing is hidden.
    """
    return SubmissionService(db).review(start, end)


@router.get("/export")
def export_submissions(
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    format: str = Query("csv", pattern="^(csv|xlsx)$"),
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """Download the submissions inside the date filter."""
    rows = SubmissionService(db).export_rows(start, end)

    if format == "xlsx":
        return StreamingResponse(
            write_rows_to_xlsx(EXPORT_HEADERS, rows, title="Submissions"),
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}.xlsx"}
        )

    return StreamingResponse(
        write_rows_to_csv(EXPORT_HEADERS, rows),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}.csv"}
    )


@router.post("/delete", response_model=BulkDeleteResponse)
def delete_submissions(
    data: BulkDeleteRequest,
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """Delete the selected submissions. An empty selection does nothing."""
    return BulkDeleteResponse(deleted=SubmissionService(db).delete_many(data.ids))


@router.post("/{submission_id}/toggle-status", response_model=SubmissionResponse)
def toggle_submission_status(
    submission_id: str,
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """Flip between pending and contacted."""
    return SubmissionService(db).toggle_status(submission_id)


@router.get("/{submission_id}/whatsapp", response_model=WhatsAppLink)
def submission_whatsapp_link(
    submission_id: str,
    current_admin: AdminUser = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """Deep link for messaging the lead from the support account."""
    return SubmissionService(db).whatsapp_link(submission_id)
