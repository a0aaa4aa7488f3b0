# controller/controller_dependencies.py
import logging
from config.http_client import get_http_client
from config.tick_config import get_tick_config
from core.seedance_client import SeedanceClient
from repository.gallery_repository import GalleryRepository
from service.archive_tracker import archive_tracker
from service.tick_service import TickService
from util.enums import ErrorMessage
from util.errors import AppError, ConfigError

logger = logging.getLogger(__name__)


def get_tick_service() -> TickService:
    # Misconfiguration is reported here, before any outbound call.
    try:
        config = get_tick_config()
    except ConfigError as e:
        logger.error("tick.config.missing keys=%s", ",".join(e.missing))
        raise AppError(ErrorMessage.CONFIG_MISSING)

    http = get_http_client()
    _store = GalleryRepository(http, base_url=config.store_base_url)
    _provider = SeedanceClient(
        http, api_key=config.api_key, base_url=config.provider_base_url
    )
    return TickService(config, _store, _provider, archives=archive_tracker)
