from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    # Service root; task routes live under <api_url>/task
    api_url: str = Field("http://localhost:5000")
    timeout: float = Field(10.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_client_settings() -> ClientSettings:
    return ClientSettings()
