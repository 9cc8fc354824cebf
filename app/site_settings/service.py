"""Settings store: one row per key, written by upsert."""

import logging

from sqlalchemy.orm import Session

from app.common.db import store_operation
from app.site_settings.models import WHATSAPP_KEY, Setting

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, session: Session):
        self.session = session

    def get_value(self, key: str, default: str = "") -> str:
        with store_operation(self.session, "Error loading settings"):
            setting = self.session.get(Setting, key)
        return setting.value if setting and setting.value is not None else default

    def set_value(self, key: str, value: str) -> Setting:
        """Insert the key if it is new, otherwise overwrite its value."""
        with store_operation(self.session, "Failed to update setting"):
            setting = self.session.get(Setting, key)
            if setting is None:
                setting = Setting(key=key, value=value)
                self.session.add(setting)
            else:
                setting.value = value
            self.session.commit()
        logger.info("Updated setting %s", key)
        return setting

    def get_whatsapp_number(self) -> str:
        return self.get_value(WHATSAPP_KEY)

    def set_whatsapp_number(self, number: str) -> str:
        return self.set_value(WHATSAPP_KEY, number).value
