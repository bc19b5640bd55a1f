import logging
from typing import Any

import httpx

from xwoba_matchups.ingest._retry import RetryDecorator, default_http_retry

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://statsapi.mlb.com/api/v1"

_DEFAULT_RETRY = default_http_retry("MLB Stats API request")


def default_client(timeout: float = 10.0) -> httpx.Client:
    return httpx.Client(timeout=httpx.Timeout(timeout, connect=5.0))


class MLBApiSource:
    """Shared plumbing for MLB Stats API sources: one client, one retry policy, JSON out."""

    _source_detail: str

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        retry: RetryDecorator = _DEFAULT_RETRY,
    ) -> None:
        self._client = client or default_client()
        self._base_url = base_url.rstrip("/")
        self._get_with_retry = retry(self._do_get)

    @property
    def source_type(self) -> str:
        return "mlb_api"

    @property
    def source_detail(self) -> str:
        return self._source_detail

    def _do_get(self, url: str, params: dict[str, Any]) -> httpx.Response:
        response = self._client.get(url, params=params)
        response.raise_for_status()
        return response

    def _get_json(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self._base_url}/{path.lstrip('/')}"
        logger.debug("GET %s %s", url, params or {})
        response = self._get_with_retry(url, params or {})
        logger.debug("MLB API responded %d", response.status_code)
        return response.json()
