# core/seedance_client.py
from typing import Any, Dict
import httpx
import logging
from model.api import GenerationTaskRequest
from util.errors import ProviderError
from util.functions import clip_text, join_url

logger = logging.getLogger(__name__)

TASKS_PATH = "/contents/generations/tasks"


class SeedanceClient:
    """
    Thin client for the Ark content-generation task API.
    Raises ProviderError for transport failures, non-2xx answers and non-JSON bodies.
    """

    def __init__(self, http: httpx.AsyncClient, *, api_key: str, base_url: str) -> None:
        self._http = http
        self._api_key = api_key
        self._tasks_url = join_url(base_url, TASKS_PATH)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    async def _send(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            res = await self._http.request(method, url, headers=self._headers(), **kwargs)
        except httpx.RequestError as e:
            raise ProviderError(f"{type(e).__name__}: {e}") from e

        if res.status_code // 100 != 2:
            raise ProviderError(
                f"status={res.status_code} body={clip_text(res.text)}",
                status_code=res.status_code,
            )
        try:
            data = res.json()
        except ValueError as e:
            raise ProviderError("non-JSON response", status_code=res.status_code) from e
        if not isinstance(data, dict):
            raise ProviderError("unexpected response shape", status_code=res.status_code)
        return data

    async def create_task(self, request: GenerationTaskRequest) -> Dict[str, Any]:
        return await self._send(
            "POST", self._tasks_url, json=request.model_dump(exclude_none=True)
        )

    async def get_task(self, task_id: str) -> Dict[str, Any]:
        return await self._send("GET", join_url(self._tasks_url, task_id))
