import base64
import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()


class Settings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # dotCMS API Configuration
    api_host: str = Field(default="http://localhost:8080", alias="DOTCMS_API_HOST")
    api_token: str = Field(default="", alias="DOTCMS_API_TOKEN")
    api_username: str = Field(default="", alias="DOTCMS_API_USERNAME")
    api_password: str = Field(default="", alias="DOTCMS_API_PASSWORD")

    # Transport Configuration
    request_timeout: float = Field(default=30.0, alias="DOTCMS_REQUEST_TIMEOUT")

    # Cache Configuration
    live_cache_ttl: int = Field(default=60, alias="DOTCMS_LIVE_CACHE_TTL")
    debug: bool = Field(default=False, alias="DOTCMS_DEBUG")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment (after .env loading)."""
        names = {field.alias for field in cls.model_fields.values()}
        return cls.model_validate(
            {key: value for key, value in os.environ.items() if key in names}
        )

    @property
    def authorization(self) -> str:
        """Authorization header value; a token wins over username/password."""
        if self.api_token:
            return f"Bearer {self.api_token}"
        raw = f"{self.api_username}:{self.api_password}".encode("utf-8")
        return f"Basic {base64.b64encode(raw).decode('ascii')}"


global_settings = Settings.from_env()
