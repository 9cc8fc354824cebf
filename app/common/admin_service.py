from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.admin.models import AdminUser
from app.admin.schemas import DashboardCounts
from app.common.db import store_operation
from app.sites.models import ReferralSite
from app.submissions.models import Submission, SubmissionStatus


class AdminService:
    def __init__(self, session: Session):
        self.session = session

    def _count(self, model, *criteria) -> int:
        stmt = select(func.count()).select_from(model)
        if criteria:
            stmt = stmt.where(*criteria)
        return self.session.execute(stmt).scalar_one()

    def dashboard_counts(self) -> DashboardCounts:
        with store_operation(self.session, "Error loading dashboard"):
            return DashboardCounts(
                submissions=self._count(Submission),
                pending=self._count(Submission, Submission.status == SubmissionStatus.PENDING.value),
                contacted=self._count(Submission, Submission.status == SubmissionStatus.CONTACTED.value),
                sites=self._count(ReferralSite),
                active_sites=self._count(ReferralSite, ReferralSite.is_active == True),  # noqa: E712
                admins=self._count(AdminUser),
            )
