# config/settings.py
import os
import sys
from typing import Optional
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.enums import ArchiveMode, Environment
import logging


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()

_log = logging.getLogger("config.settings")


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")
    REDIS_URL: str = Field(..., validation_alias="REDIS_URL")

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(default="*", validation_alias="ALLOWED_ORIGIN")
    RATE_LIMIT_TIMES: int = Field(default=30, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")

    # Provider (Ark / Seedance). Checked at tick start, not at import.
    ARK_API_KEY: Optional[str] = Field(default=None, validation_alias="ARK_API_KEY")
    ARK_BASE_URL: Optional[str] = Field(default=None, validation_alias="ARK_BASE_URL")
    SEEDANCE_MODEL_ID: Optional[str] = Field(
        default="seedance-1-0-pro-fast-251015", validation_alias="SEEDANCE_MODEL_ID"
    )

    # Store (Apps Script web app in front of the gallery sheet)
    APPS_SCRIPT_BASE_URL: Optional[str] = Field(
        default=None, validation_alias="APPS_SCRIPT_BASE_URL"
    )

    # Tick knobs
    MAX_CONCURRENT: int = Field(default=5, validation_alias="MAX_CONCURRENT")
    TICK_MAX_SECONDS: float = Field(default=60.0, validation_alias="TICK_MAX_SECONDS")
    ARCHIVE_MODE: ArchiveMode = Field(
        default=ArchiveMode.AWAIT, validation_alias="ARCHIVE_MODE"
    )
    ARCHIVE_DRAIN_SECONDS: float = Field(
        default=30.0, validation_alias="ARCHIVE_DRAIN_SECONDS"
    )

    # Generation defaults
    DEFAULT_VIDEO_PROMPT: str = "Cinematic movement, high quality, slow motion"
    DEFAULT_RESOLUTION: str = "480p"
    ALLOWED_RESOLUTIONS: tuple[str, ...] = ("720p", "480p")
    VIDEO_DURATION_SECONDS: int = 5
    VIDEO_AUDIO: bool = False
    SOURCE_IMAGE_URL_TEMPLATE: str = (
        "https://drive.google.com/uc?export=download&id={job_id}"
    )

    # Logging knobs
    LOGGER_NAME: str = "video-tick"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
