"""Workers AI binding reached over the Cloudflare REST API."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from blogai.ai.errors import AIProviderHTTPError
from blogai.core.config import settings

logger = logging.getLogger(__name__)


class CloudflareAIRuntime:
    def __init__(
        self,
        account_id: str,
        api_token: str,
        base_url: str = "https://api.cloudflare.com/client/v4",
        timeout_s: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._account_id = account_id
        self._api_token = api_token
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._http_client = http_client

    def _endpoint(self, model: str) -> str:
        return f"{self._base_url}/accounts/{self._account_id}/ai/run/{model}"

    async def _post(self, client: httpx.AsyncClient, model: str, inputs: Mapping[str, Any]) -> httpx.Response:
        try:
            return await client.post(
                self._endpoint(model),
                json=dict(inputs),
                headers={"Authorization": f"Bearer {self._api_token}"},
                timeout=self._timeout_s,
            )
        except httpx.HTTPError as exc:
            raise AIProviderHTTPError.from_network(exc) from exc

    async def run(self, model: str, inputs: Mapping[str, Any]) -> Any:
        if self._http_client is not None:
            response = await self._post(self._http_client, model, inputs)
        else:
            async with httpx.AsyncClient() as client:
                response = await self._post(client, model, inputs)

        if response.status_code >= 400:
            raise AIProviderHTTPError.from_status(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError:
            return response.text
        if isinstance(data, dict) and "result" in data:
            return data["result"]
        return data


def runtime_from_settings() -> CloudflareAIRuntime | None:
    if not settings.cf_account_id or not settings.cf_api_token:
        return None
    return CloudflareAIRuntime(
        account_id=settings.cf_account_id,
        api_token=settings.cf_api_token,
        base_url=settings.cf_api_base_url,
        timeout_s=settings.ai_timeout_s,
    )


def get_inference_runtime() -> CloudflareAIRuntime | None:
    runtime = runtime_from_settings()
    if runtime is None:
        logger.debug("worker_ai_runtime_unbound")
    return runtime
