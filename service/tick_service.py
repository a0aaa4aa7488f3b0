# service/tick_service.py
import asyncio
import logging
from typing import Optional
from config.tick_config import TickConfig
from core.generation_request import build_generation_request
from core.response_shapes import (
    TaskOutcome,
    classify_status,
    extract_task_id,
    extract_task_status,
    extract_video_url,
)
from core.seedance_client import SeedanceClient
from model.api import StoreWriteResult, TickReport
from model.video_job import VideoJob, VideoStatus
from repository.gallery_repository import GalleryRepository
from service.archive_tracker import ArchiveTracker
from util.enums import ArchiveMode
from util.errors import ProviderError, StoreError
from util.timing import timed

logger = logging.getLogger(__name__)


class TickService:
    """
    One tick of the video queue:
      1) snapshot the gallery (fatal on failure)
      2) reconcile jobs already handed to the provider
      3) admit queued jobs into the free concurrency slots
      4) report counts plus non-fatal errors
    Calls are awaited one at a time; failures never cross job boundaries.
    """

    def __init__(
        self,
        config: TickConfig,
        store: GalleryRepository,
        provider: SeedanceClient,
        archives: Optional[ArchiveTracker] = None,
    ) -> None:
        self._config = config
        self._store = store
        self._provider = provider
        self._archives = archives

    async def run_within_budget(self) -> TickReport:
        """Raises asyncio.TimeoutError when the tick outlives its budget."""
        return await asyncio.wait_for(self.run(), timeout=self._config.tick_max_seconds)

    async def run(self) -> TickReport:
        with timed(logger, "tick.snapshot"):
            jobs = await self._store.list_jobs()

        processing = [j for j in jobs if j.has_status(VideoStatus.processing)]
        queued = [j for j in jobs if j.has_status(VideoStatus.queued)]
        report = TickReport()

        with timed(logger, "tick.reconcile", jobs=len(processing)):
            for job in processing:
                if not job.videoTaskId:
                    continue
                await self._reconcile(job, report)

        # Pre-tick count on purpose: writes made above may not be visible yet.
        active_count = len(processing)
        slots = self.available_slots(active_count)

        if slots > 0 and queued:
            with timed(logger, "tick.admit", slots=slots, queued=len(queued)):
                for job in queued[:slots]:
                    await self._admit(job, report)

        logger.info(
            "tick.done processed=%d started=%d errors=%d active=%d queued=%d",
            report.processed,
            report.started,
            len(report.errors),
            active_count,
            len(queued),
        )
        return report

    def available_slots(self, active_count: int) -> int:
        return max(0, self._config.max_concurrent - active_count)

    # ---------------- Reconciliation ----------------

    async def _reconcile(self, job: VideoJob, report: TickReport) -> None:
        try:
            body = await self._provider.get_task(job.videoTaskId)
        except ProviderError as e:
            # Job stays processing and is re-queried next tick.
            logger.warning(
                "tick.status.skip photo=%s task=%s err=%s", job.id, job.videoTaskId, e
            )
            return

        status = extract_task_status(body)
        outcome = classify_status(status)

        if outcome is TaskOutcome.SUCCEEDED:
            video_url = extract_video_url(body)
            if not video_url:
                logger.warning(
                    "tick.status.no_url photo=%s task=%s", job.id, job.videoTaskId
                )
                return
            await self._resolve_ready(job, video_url, report)
        elif outcome is TaskOutcome.FAILED:
            logger.info("tick.status.failed photo=%s status=%s", job.id, status)
            await self._write_status(job, VideoStatus.failed, report)

    async def _resolve_ready(
        self, job: VideoJob, video_url: str, report: TickReport
    ) -> None:
        # Publish the provider URL first so the gallery can play it right away.
        if not await self._write_status(
            job, VideoStatus.ready_url, report, provider_url=video_url
        ):
            return

        detached = self._config.archive_mode is ArchiveMode.BACKGROUND
        if detached and self._archives is not None:
            self._archives.schedule(
                self._archive_detached(job, video_url), label=job.id
            )
        else:
            await self._archive(job, video_url, report)
        report.processed += 1

    async def _archive(self, job: VideoJob, video_url: str, report: TickReport) -> None:
        """Best effort: outcome goes to the report, the ready_url write stands."""
        try:
            result = await self._store.finalize_video_upload(
                job.id, video_url, job.sessionFolderId
            )
        except StoreError as e:
            logger.error("tick.archive.trigger_error photo=%s err=%s", job.id, e)
            report.errors.append(f"Trigger Error: {e}")
            return

        if not result.ok:
            logger.error("tick.archive.failed photo=%s err=%s", job.id, result.error)
            report.errors.append(f"Upload Failed: {result.error}")
            return
        logger.info("tick.archive.ok photo=%s file=%s", job.id, result.fileId)

    async def _archive_detached(self, job: VideoJob, video_url: str) -> StoreWriteResult:
        result = await self._store.finalize_video_upload(
            job.id, video_url, job.sessionFolderId
        )
        if result.ok:
            logger.info("archive.ok photo=%s file=%s", job.id, result.fileId)
        else:
            logger.error("archive.failed photo=%s err=%s", job.id, result.error)
        return result

    # ---------------- Admission ----------------

    async def _admit(self, job: VideoJob, report: TickReport) -> None:
        request = build_generation_request(job, self._config)
        try:
            body = await self._provider.create_task(request)
        except ProviderError as e:
            # Left queued; picked up again next tick.
            logger.error("tick.start.failed photo=%s err=%s", job.id, e)
            return

        task_id = extract_task_id(body)
        if not task_id:
            logger.error("tick.start.no_task_id photo=%s", job.id)
            return

        if await self._write_status(job, VideoStatus.processing, report, task_id=task_id):
            logger.info(
                "tick.start.ok photo=%s task=%s model=%s",
                job.id,
                task_id,
                request.model,
            )
            report.started += 1

    # ---------------- Store writes ----------------

    async def _write_status(
        self,
        job: VideoJob,
        status: VideoStatus,
        report: TickReport,
        *,
        provider_url: Optional[str] = None,
        task_id: Optional[str] = None,
    ) -> bool:
        try:
            result = await self._store.update_video_status(
                job.id, status.value, provider_url=provider_url, task_id=task_id
            )
        except StoreError as e:
            logger.error(
                "tick.write.error photo=%s status=%s err=%s", job.id, status.value, e
            )
            report.errors.append(f"Status Write Error ({job.id}): {e}")
            return False

        if not result.ok:
            report.errors.append(
                f"Status Write Failed ({job.id} -> {status.value}): {result.error}"
            )
            return False
        return True
