import os

# Settings are read at import time; give them a complete environment first.
os.environ["APP_ENV"] = "test"
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")
os.environ.setdefault("ARK_API_KEY", "test-key")
os.environ.setdefault("ARK_BASE_URL", "https://ark.example.test/api/v3/")
os.environ.setdefault("APPS_SCRIPT_BASE_URL", "https://script.example.test/exec")

import pytest

from config.tick_config import TickConfig
from model.api import StoreWriteResult
from model.video_job import VideoJob
from util.errors import ProviderError, SnapshotError


class FakeStore:
    """In-memory stand-in for GalleryRepository that records every call in order."""

    def __init__(self, jobs=None, snapshot_error=None):
        self.jobs = [VideoJob.model_validate(j) for j in (jobs or [])]
        self.snapshot_error = snapshot_error
        self.calls = []
        self.status_results = {}
        self.finalize_result = StoreWriteResult(ok=True, fileId="drive-file-1")
        self.finalize_error = None

    async def list_jobs(self):
        self.calls.append(("list_jobs",))
        if self.snapshot_error is not None:
            raise self.snapshot_error
        return list(self.jobs)

    async def update_video_status(self, photo_id, status, *, provider_url=None, task_id=None):
        self.calls.append(("update", photo_id, status, provider_url, task_id))
        outcome = self.status_results.get((photo_id, status))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome or StoreWriteResult(ok=True)

    async def finalize_video_upload(self, photo_id, video_url, session_folder_id):
        self.calls.append(("finalize", photo_id, video_url, session_folder_id))
        if self.finalize_error is not None:
            raise self.finalize_error
        return self.finalize_result

    def updates(self):
        return [c for c in self.calls if c[0] == "update"]

    def finalizes(self):
        return [c for c in self.calls if c[0] == "finalize"]


class FakeProvider:
    """Answers status queries from a dict; hands out sequential task ids on create."""

    def __init__(self, statuses=None, create_responses=None):
        self.statuses = statuses or {}
        self.create_responses = list(create_responses or [])
        self.queried = []
        self.created = []

    async def get_task(self, task_id):
        self.queried.append(task_id)
        answer = self.statuses.get(task_id, {"status": "running"})
        if isinstance(answer, Exception):
            raise answer
        return answer

    async def create_task(self, request):
        self.created.append(request)
        if self.create_responses:
            answer = self.create_responses.pop(0)
        else:
            answer = {"id": f"task-new-{len(self.created)}"}
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture()
def tick_config():
    return TickConfig(
        api_key="test-key",
        provider_base_url="https://ark.example.test/api/v3",
        store_base_url="https://script.example.test/exec",
        default_model="seedance-default",
    )


@pytest.fixture()
def fake_store_factory():
    return FakeStore


@pytest.fixture()
def fake_provider_factory():
    return FakeProvider


@pytest.fixture()
def provider_error():
    return ProviderError("status=500 body=boom", status_code=500)


@pytest.fixture()
def snapshot_error():
    return SnapshotError("Failed to fetch Gallery: 500")
