"""Client configuration from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/140.0.0.0 Safari/537.36"
)


class ClientSettings(BaseSettings):
    """Settings of the transit client, overridable as RMV_TRANSIT_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="RMV_TRANSIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    network: str = Field(default="mobil.rmv.de", description="Network id of the dialect")
    timeout: int = Field(default=30, description="Request timeout in seconds")
    max_attempts: int = Field(
        default=3, description="Attempts per page fetch before giving up"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT, description="User-Agent header sent with requests"
    )
