# core/response_shapes.py
from enum import Enum
from typing import Any, Final, Optional, Sequence, Tuple

# Precedence tables. Earlier entries win.
CONTAINER_KEYS: Final[Tuple[Optional[str], ...]] = ("Result", "result", "data", None)
VIDEO_URL_PATHS: Final[Tuple[Tuple[str, ...], ...]] = (
    ("content", "video_url"),
    ("output", "video_url"),
    ("video_url",),
)
TASK_ID_PATHS: Final[Tuple[Tuple[str, ...], ...]] = (
    ("id",),
    ("Result", "id"),
)

DEFAULT_STATUS: Final[str] = "processing"
SUCCESS_STATUSES: Final[frozenset[str]] = frozenset({"succeeded", "success"})
FAILURE_STATUSES: Final[frozenset[str]] = frozenset(
    {"failed", "error", "canceled"}
)


class TaskOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    PENDING = "pending"


def dig(body: Any, path: Sequence[str]) -> Any:
    """Walk nested dicts along `path`; None as soon as a hop is missing."""
    node = body
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def containers(body: Any) -> list[dict]:
    """
    Candidate objects that may carry the task fields, in precedence order:
    Result, result, data, then the body itself.
    """
    out: list[dict] = []
    for key in CONTAINER_KEYS:
        node = body if key is None else dig(body, (key,))
        if isinstance(node, dict):
            out.append(node)
    return out


def extract_task_status(body: Any) -> str:
    for node in containers(body):
        value = node.get("status")
        if isinstance(value, str) and value.strip():
            return value.strip().lower()
    return DEFAULT_STATUS


def extract_video_url(body: Any) -> Optional[str]:
    for node in containers(body):
        for path in VIDEO_URL_PATHS:
            value = dig(node, path)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


def extract_task_id(body: Any) -> Optional[str]:
    for path in TASK_ID_PATHS:
        value = dig(body, path)
        # bool is an int; never a task id
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def classify_status(status: str) -> TaskOutcome:
    if status in SUCCESS_STATUSES:
        return TaskOutcome.SUCCEEDED
    if status in FAILURE_STATUSES:
        return TaskOutcome.FAILED
    return TaskOutcome.PENDING
