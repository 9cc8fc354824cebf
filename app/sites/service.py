"""Referral site registry."""

import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, UploadFile, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.common.db import store_operation
from app.common.storage import save_upload_file
from app.sites.models import ReferralSite
from app.sites import schemas as site_schema

logger = logging.getLogger(__name__)

LOGO_NAMESPACE = "logos"

# Shown on the intake form when the registry can't be read
FALLBACK_SITES = [
    site_schema.PublicSite(name="cricindia99.com (CricBet99)", display_name="CricBet99",
                           url="https://cricindia99.com", button_color="green", logo_url="/cricbet99.jpg"),
    site_schema.PublicSite(name="7xmatch.com (11xplay)", display_name="11xplay",
                           url="https://7xmatch.com", button_color="red", logo_url="/11xplay.jpeg"),
    site_schema.PublicSite(name="lagan247.com (LaserBook)", display_name="LaserBook",
                           url="https://lagan247.com", button_color="purple", logo_url="/laserbook.jpeg"),
    site_schema.PublicSite(name="lagan365.com (Lotus365)", display_name="Lotus365",
                           url="https://lagan365.com", button_color="green", logo_url="/lotus365.png"),
    site_schema.PublicSite(name="reddybook247.com (ReddyBook)", display_name="ReddyBook",
                           url="https://reddybook247.com", button_color="green", logo_url="/reddybook.png"),
    site_schema.PublicSite(name="myfair247.com (Fairplay)", display_name="Fairplay",
                           url="https://myfair247.com", button_color="red", logo_url="/fairplay.png"),
]


class SiteService:
    def __init__(self, session: Session):
        self.session = session

    def list_sites(self) -> List[ReferralSite]:
        """Every site, newest first (admin view)."""
        with store_operation(self.session, "Error fetching sites"):
            return list(self.session.execute(
                select(ReferralSite).order_by(ReferralSite.created_at.desc())
            ).scalars())

    def list_active_sites(self) -> List[ReferralSite]:
        """Active sites in the order they were added (intake form)."""
        return list(self.session.execute(
            select(ReferralSite)
            .where(ReferralSite.is_active == True)  # noqa: E712
            .order_by(ReferralSite.created_at.asc())
        ).scalars())

    def public_sites(self) -> Tuple[List[site_schema.PublicSite], bool]:
        """
        Active sites for the intake form.

        Returns the sites and whether they came from the built-in list because
        the registry could not be read.
        """
        try:
            return [site_schema.PublicSite.model_validate(site) for site in self.list_active_sites()], False
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Error fetching betting sites, using fallback list: %s", exc)
            return [site.model_copy() for site in FALLBACK_SITES], True

    def _get(self, site_id: str) -> ReferralSite:
        site = self.session.get(ReferralSite, site_id)
        if site is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Site not found")
        return site

    def _resolve_logo(self, logo_url: Optional[str], logo_file: Optional[UploadFile]) -> Tuple[Optional[str], bool]:
        # A chosen file wins over a typed URL; a failed upload aborts the save
        if logo_file is not None and logo_file.filename:
            return save_upload_file(logo_file, LOGO_NAMESPACE), True
        return logo_url or None, False

    def _save(self, site: ReferralSite, uploaded: bool, detail: str) -> ReferralSite:
        try:
            self.session.add(site)
            self.session.commit()
            self.session.refresh(site)
        except SQLAlchemyError as exc:
            self.session.rollback()
            if uploaded:
                logger.warning("Logo %s uploaded but site was not saved", site.logo_url)
            logger.error("%s: %s", detail, exc)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=detail
            ) from exc
        return site

    def create_site(self, data: site_schema.SiteCreate, logo_file: Optional[UploadFile] = None) -> ReferralSite:
        logo_url, uploaded = self._resolve_logo(data.logo_url, logo_file)
        site = ReferralSite(
            name=data.name,
            display_name=data.display_name,
            url=data.url,
            logo_url=logo_url,
            button_color=data.button_color.value,
            is_active=data.is_active,
        )
        return self._save(site, uploaded, "Error saving site")

    def update_site(
        self, site_id: str, data: site_schema.SiteUpdate, logo_file: Optional[UploadFile] = None
    ) -> ReferralSite:
        with store_operation(self.session, "Error saving site"):
            site = self._get(site_id)
        logo_url, uploaded = self._resolve_logo(data.logo_url, logo_file)
        site.name = data.name
        site.display_name = data.display_name
        site.url = data.url
        site.logo_url = logo_url
        site.button_color = data.button_color.value
        return self._save(site, uploaded, "Error saving site")

    def set_active(self, site_id: str, is_active: bool) -> ReferralSite:
        with store_operation(self.session, "Error updating site"):
            site = self._get(site_id)
            site.is_active = is_active
            self.session.commit()
        logger.info("Site %s %s", site_id, "activated" if is_active else "deactivated")
        return site

    def delete_site(self, site_id: str) -> None:
        """Hard delete. The logo file, if any, stays in storage."""
        with store_operation(self.session, "Error deleting site"):
            site = self._get(site_id)
            self.session.delete(site)
            self.session.commit()
        logger.info("Deleted site %s", site_id)

    def upload_logo(self, logo_file: UploadFile) -> site_schema.LogoUploadResponse:
        filename = logo_file.filename or "unknown"
        return site_schema.LogoUploadResponse(url=save_upload_file(logo_file, LOGO_NAMESPACE), filename=filename)
