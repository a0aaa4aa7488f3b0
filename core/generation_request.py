# core/generation_request.py
from typing import Optional, Sequence
from config.tick_config import TickConfig
from model.api import (
    GenerationParameters,
    GenerationTaskRequest,
    ImageContent,
    ImageUrl,
    TextContent,
)
from model.video_job import VideoJob


def pick_resolution(value: Optional[str], allowed: Sequence[str], default: str) -> str:
    return value if value in allowed else default


def image_url_for(job_id: str, template: str) -> str:
    """
    The job id doubles as the Drive file id of the source photo.
    """
    return template.format(job_id=job_id)


def build_generation_request(job: VideoJob, config: TickConfig) -> GenerationTaskRequest:
    return GenerationTaskRequest(
        model=job.videoModel or config.default_model,
        content=[
            TextContent(text=job.videoPrompt or config.default_prompt),
            ImageContent(
                image_url=ImageUrl(url=image_url_for(job.id, config.image_url_template))
            ),
        ],
        parameters=GenerationParameters(
            duration=config.duration_seconds,
            resolution=pick_resolution(
                job.videoResolution,
                config.allowed_resolutions,
                config.default_resolution,
            ),
            audio=config.audio,
        ),
    )
