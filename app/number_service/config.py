from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NumberServiceSettings(BaseSettings):
    """Configuration of the standalone WhatsApp number service."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_name: str = "WhatsApp Number Service"
    debug: bool = False
    number_store_url: str = Field("sqlite:///whatsapp.db", validation_alias="NUMBER_STORE_URL")
    admin_password: str = Field("", validation_alias="ADMIN_PASSWORD")
    port: int = Field(5000, validation_alias="PORT")
    cors_origins: list[str] = ["*"]


@lru_cache
def get_number_settings() -> NumberServiceSettings:
    return NumberServiceSettings()
