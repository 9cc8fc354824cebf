"""WhatsApp deep links (``https://wa.me/<number>?text=<message>``)."""

from urllib.parse import quote

from app.common.config import get_settings

settings = get_settings()

WHATSAPP_BASE_URL = "https://wa.me"
# Characters encodeURIComponent leaves alone
URI_COMPONENT_SAFE = "-_.!~*'()"


def build_whatsapp_url(number: str, message: str) -> str:
    return f"{WHATSAPP_BASE_URL}/{number}?text={quote(message, safe=URI_COMPONENT_SAFE)}"


def intake_message(name: str, mobile: str, site: str) -> str:
    return f"NAME: {name}\nMOBILE NUMBER: +{settings.whatsapp_country_code} {mobile}\nWEBSITE: {site}"


def support_greeting(name: str) -> str:
    return f"Hello {name}, this is {settings.support_team_name} support team."
