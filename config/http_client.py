# config/http_client.py
from typing import Optional
import httpx

_client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    """
    Process-wide client shared by the store and provider clients.
    Per-call timeouts are off; the tick budget bounds every call instead.
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(timeout=httpx.Timeout(None), follow_redirects=True)
    return _client


async def close_http_client() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
