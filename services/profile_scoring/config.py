import os
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from services.profile_scoring.loader import DEFAULT_INSTRUMENTS_PATH

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()


class ProfileEngineSettings(BaseSettings):
    instruments_path: str = str(DEFAULT_INSTRUMENTS_PATH)
    templates_path: str = "data/templates.json"
    log_level: str = "INFO"
    clinic_name: Optional[str] = None

    model_config = SettingsConfigDict(env_prefix='PROFILE_ENGINE_')


def get_settings() -> ProfileEngineSettings:
    return ProfileEngineSettings()
