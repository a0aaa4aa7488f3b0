# model/api.py
from typing import Any, Literal, Optional
from pydantic import BaseModel, Field, field_validator


class TickReport(BaseModel):
    processed: int = 0
    started: int = 0
    errors: list[str] = Field(default_factory=list)


class TickResponse(BaseModel):
    ok: bool = True
    report: TickReport


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
    message: str


# ---------------- Store (Apps Script) ----------------


class GallerySnapshot(BaseModel):
    items: list[Any] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def _none_is_empty(cls, v: object) -> object:
        return [] if v is None else v


class UpdateVideoStatusRequest(BaseModel):
    action: Literal["updateVideoStatus"] = "updateVideoStatus"
    photoId: str
    status: str
    providerUrl: Optional[str] = None
    taskId: Optional[str] = None


class FinalizeVideoUploadRequest(BaseModel):
    action: Literal["finalizeVideoUpload"] = "finalizeVideoUpload"
    photoId: str
    videoUrl: str
    sessionFolderId: Optional[str] = None


class StoreWriteResult(BaseModel):
    ok: bool = False
    error: Optional[str] = None
    fileId: Optional[str] = None


# ---------------- Provider (Seedance) ----------------


class ImageUrl(BaseModel):
    url: str


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageContent(BaseModel):
    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl


class GenerationParameters(BaseModel):
    duration: int
    resolution: str
    audio: bool = False


class GenerationTaskRequest(BaseModel):
    model: str
    content: list[TextContent | ImageContent]
    parameters: GenerationParameters
