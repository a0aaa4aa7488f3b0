# model/video_job.py
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator


class VideoStatus(str, Enum):
    queued = "queued"
    processing = "processing"
    ready_url = "ready_url"
    failed = "failed"
    done = "done"


class VideoJob(BaseModel):
    """
    One gallery row as returned by the store. Extra sheet columns are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    videoStatus: Optional[str] = None
    videoTaskId: Optional[str] = None
    videoPrompt: Optional[str] = None
    videoModel: Optional[str] = None
    videoResolution: Optional[str] = None
    sessionFolderId: Optional[str] = None

    # Sheets hand back numbers for numeric-looking cells
    @field_validator(
        "id", "videoStatus", "videoTaskId", "videoPrompt", "videoModel",
        "videoResolution", "sessionFolderId", mode="before",
    )
    @classmethod
    def _stringify(cls, v: object) -> Optional[str]:
        if v is None:
            return None
        return v if isinstance(v, str) else str(v)

    def has_status(self, status: VideoStatus) -> bool:
        return self.videoStatus == status.value
