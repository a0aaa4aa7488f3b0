# config/tick_config.py
from dataclasses import dataclass
from functools import lru_cache
from config.settings import Settings, settings
from util.enums import ArchiveMode
from util.errors import ConfigError


@dataclass(frozen=True)
class TickConfig:
    """
    Validated, immutable view of everything a tick needs.
    Built once per process and injected into TickService.
    """

    api_key: str
    provider_base_url: str
    store_base_url: str
    default_model: str
    max_concurrent: int = 5
    default_prompt: str = "Cinematic movement, high quality, slow motion"
    default_resolution: str = "480p"
    allowed_resolutions: tuple[str, ...] = ("720p", "480p")
    duration_seconds: int = 5
    audio: bool = False
    image_url_template: str = "https://drive.google.com/uc?export=download&id={job_id}"
    tick_max_seconds: float = 60.0
    archive_mode: ArchiveMode = ArchiveMode.AWAIT

    @classmethod
    def from_settings(cls, s: Settings) -> "TickConfig":
        required = {
            "ARK_API_KEY": s.ARK_API_KEY,
            "ARK_BASE_URL": s.ARK_BASE_URL,
            "APPS_SCRIPT_BASE_URL": s.APPS_SCRIPT_BASE_URL,
            "SEEDANCE_MODEL_ID": s.SEEDANCE_MODEL_ID,
        }
        missing = [name for name, value in required.items() if not (value or "").strip()]
        if missing:
            raise ConfigError(missing)
        if s.MAX_CONCURRENT < 0:
            raise ConfigError(["MAX_CONCURRENT"])

        return cls(
            api_key=s.ARK_API_KEY.strip(),
            provider_base_url=s.ARK_BASE_URL.strip(),
            store_base_url=s.APPS_SCRIPT_BASE_URL.strip(),
            default_model=s.SEEDANCE_MODEL_ID.strip(),
            max_concurrent=s.MAX_CONCURRENT,
            default_prompt=s.DEFAULT_VIDEO_PROMPT,
            default_resolution=s.DEFAULT_RESOLUTION,
            allowed_resolutions=tuple(s.ALLOWED_RESOLUTIONS),
            duration_seconds=s.VIDEO_DURATION_SECONDS,
            audio=s.VIDEO_AUDIO,
            image_url_template=s.SOURCE_IMAGE_URL_TEMPLATE,
            tick_max_seconds=s.TICK_MAX_SECONDS,
            archive_mode=ArchiveMode(s.ARCHIVE_MODE),
        )


@lru_cache
def get_tick_config() -> TickConfig:
    return TickConfig.from_settings(settings)
