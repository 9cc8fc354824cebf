"""Intake commit: record the lead, then hand the visitor off to WhatsApp."""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.common.db import store_operation
from app.common.whatsapp import build_whatsapp_url, intake_message
from app.intake import flow
from app.intake import schemas as intake_schema
from app.site_settings.service import SettingsService
from app.sites.service import SiteService
from app.submissions.models import Submission, SubmissionStatus

logger = logging.getLogger(__name__)


class IntakeService:
    def __init__(self, session: Session):
        self.session = session

    def sites(self) -> intake_schema.IntakeSites:
        sites, fallback = SiteService(self.session).public_sites()
        return intake_schema.IntakeSites(sites=sites, fallback=fallback)

    def contact_number(self) -> str:
        """Support number, or empty when it can't be read."""
        try:
            return SettingsService(self.session).get_whatsapp_number()
        except HTTPException:
            return ""

    def submit(self, data: intake_schema.IntakeSubmit) -> intake_schema.IntakeSubmitResponse:
        """
        Save the lead as pending and build the WhatsApp link for it.

        If the save fails nothing else happens and the caller keeps its form
        state; on success the returned state is back at step one.
        """
        flow.validate_for_commit(data.name, data.mobile)
        name = data.name.strip()

        submission = Submission(
            name=name,
            mobile_number=data.mobile,
            selected_website=data.site,
            status=SubmissionStatus.PENDING.value,
        )
        with store_operation(self.session, "Error submitting form"):
            self.session.add(submission)
            self.session.commit()
        logger.info("Recorded submission %s for %s", submission.id, data.site)

        url = build_whatsapp_url(self.contact_number(), intake_message(name, data.mobile, data.site))
        return intake_schema.IntakeSubmitResponse(
            submission_id=submission.id,
            whatsapp_url=url,
            state=flow.reset(),
        )
