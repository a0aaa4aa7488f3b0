# controller/video_controller.py
import asyncio
import logging
from fastapi import APIRouter, Depends, status
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from controller.controller_dependencies import get_tick_service
from model.api import TickResponse
from service.tick_service import TickService
from util.constants import InternalURIs
from util.enums import ErrorMessage
from util.errors import AppError, SnapshotError

logger = logging.getLogger(__name__)

tick_rate_limiter = RateLimiter(
    times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
)

video_router = APIRouter(dependencies=[Depends(tick_rate_limiter)])


@video_router.get(
    InternalURIs.VIDEO_TICK,
    response_model=TickResponse,
    status_code=status.HTTP_200_OK,
)
async def tick(service: TickService = Depends(get_tick_service)) -> TickResponse:
    """Polled by the gallery page; advances the video queue once."""
    try:
        report = await service.run_within_budget()
    except SnapshotError as e:
        logger.error("tick.snapshot.error err=%s", e)
        raise AppError(ErrorMessage.SNAPSHOT_FAILED, str(e))
    except asyncio.TimeoutError:
        logger.error("tick.timeout")
        raise AppError(ErrorMessage.TICK_TIMEOUT)
    except Exception as e:
        logger.exception("tick.error")
        raise AppError(ErrorMessage.INTERNAL_ERROR, str(e) or type(e).__name__)
    return TickResponse(ok=True, report=report)
