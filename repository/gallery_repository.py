# repository/gallery_repository.py
import time
from typing import Optional
import httpx
import logging
from pydantic import BaseModel, ValidationError
from model.api import (
    FinalizeVideoUploadRequest,
    GallerySnapshot,
    StoreWriteResult,
    UpdateVideoStatusRequest,
)
from model.video_job import VideoJob
from util.errors import SnapshotError, StoreError
from util.functions import clip_text

logger = logging.getLogger(__name__)


class GalleryRepository:
    """
    Flow:
    - The Apps Script web app in front of the gallery sheet is the system of record.
    - Reads are GET ?action=gallery with a cache-busting timestamp.
    - Writes are POSTs of a JSON body sent as text/plain (no CORS preflight on GAS).
    """

    def __init__(self, http: httpx.AsyncClient, *, base_url: str) -> None:
        self._http = http
        self._url = base_url

    async def list_jobs(self) -> list[VideoJob]:
        params = {"action": "gallery", "t": str(int(time.time() * 1000))}
        try:
            res = await self._http.get(self._url, params=params)
        except httpx.RequestError as e:
            raise SnapshotError(f"Failed to fetch Gallery: {type(e).__name__}") from e

        if res.status_code // 100 != 2:
            raise SnapshotError(f"Failed to fetch Gallery: {res.status_code}")

        try:
            snapshot = GallerySnapshot.model_validate(res.json())
        except (ValueError, ValidationError) as e:
            raise SnapshotError("Failed to fetch Gallery: malformed body") from e

        jobs: list[VideoJob] = []
        for row in snapshot.items:
            if not isinstance(row, dict):
                logger.warning("gallery.row.not_object type=%s", type(row).__name__)
                continue
            try:
                jobs.append(VideoJob.model_validate(row))
            except ValidationError:
                # Skip malformed rows instead of failing the whole snapshot
                logger.warning("gallery.row.invalid id=%s", row.get("id"))
        logger.info("gallery.snapshot items=%d", len(jobs))
        return jobs

    async def _post(self, body: BaseModel) -> StoreWriteResult:
        payload = body.model_dump_json(exclude_none=True)
        try:
            res = await self._http.post(
                self._url, content=payload, headers={"Content-Type": "text/plain"}
            )
        except httpx.RequestError as e:
            raise StoreError(f"{type(e).__name__}: {e}") from e

        if res.status_code // 100 != 2:
            return StoreWriteResult(ok=False, error=f"HTTP {res.status_code}")
        try:
            return StoreWriteResult.model_validate(res.json())
        except (ValueError, ValidationError):
            return StoreWriteResult(
                ok=False, error=f"unreadable response: {clip_text(res.text, 120)}"
            )

    async def update_video_status(
        self,
        photo_id: str,
        status: str,
        *,
        provider_url: Optional[str] = None,
        task_id: Optional[str] = None,
    ) -> StoreWriteResult:
        result = await self._post(
            UpdateVideoStatusRequest(
                photoId=photo_id, status=status, providerUrl=provider_url, taskId=task_id
            )
        )
        if not result.ok:
            logger.warning(
                "gallery.status.rejected photo=%s status=%s err=%s",
                photo_id,
                status,
                result.error,
            )
        return result

    async def finalize_video_upload(
        self, photo_id: str, video_url: str, session_folder_id: Optional[str]
    ) -> StoreWriteResult:
        return await self._post(
            FinalizeVideoUploadRequest(
                photoId=photo_id, videoUrl=video_url, sessionFolderId=session_folder_id
            )
        )
