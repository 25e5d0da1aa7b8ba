"""
Application settings.

Values come from ``CLUBFINDER_*`` environment variables, after an optional
``.env`` file in the working directory has been loaded. Everything else in the
service receives a ``Settings`` instance rather than reading the environment.
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

ENV_PREFIX = "CLUBFINDER_"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    db_path: str = "data/clubfinder.db"

    resend_api_key: Optional[str] = None
    resend_api_url: str = "https://api.resend.com/emails"
    email_from: str = "Golf Club Finder <onboarding@resend.dev>"
    feedback_from: str = "Golf Club Finder Feedback <onboarding@resend.dev>"
    feedback_recipient: str = "admin@yourdomain.com"
    request_timeout_s: float = 10.0

    cors_origins: List[str] = ["*"]
    admin_export_enabled: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Build ``Settings`` from the environment.

    Existing environment variables win over values in the ``.env`` file.
    Unset or blank variables fall back to the model defaults.
    """
    load_dotenv(dotenv_path=env_file or Path.cwd() / ".env", override=False)

    values = {}
    for name in Settings.model_fields:
        raw = os.getenv(ENV_PREFIX + name.upper())
        if raw is not None and raw.strip() != "":
            values[name] = raw.strip()
    return Settings(**values)
