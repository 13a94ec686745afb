"""
Replicate Prediction Client - image (Flux Schnell) and video (Minimax) generation.

API: https://api.replicate.com/v1

Uses the async prediction API:
1. Create prediction -> get id + status
2. Fetch prediction by id until it reaches a terminal status
"""
import logging
from typing import Any, Dict, Optional

import httpx

from admaker.config import config
from admaker.jobs.models import GenerationJob, JobKind

from .exceptions import ProviderRequestError, ProviderUnavailable

logger = logging.getLogger(__name__)


class ReplicateClient:
    """
    Thin async wrapper over Replicate's predictions endpoints.

    Every method issues exactly one HTTP call. Non-2xx answers are logged with
    the provider's body and raised as ProviderRequestError; the body never
    leaves this layer in the exception message.
    """

    PROVIDER = "replicate"

    def __init__(
        self,
        api_token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Replicate client.

        Args:
            api_token: Replicate API token (falls back to config)
            base_url: API root (falls back to config)
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_token = api_token if api_token is not None else (config.providers.replicate_api_token or "")
        self.base_url = (base_url or config.providers.replicate_base_url).rstrip("/")
        self.client = httpx.AsyncClient(
            timeout=timeout or config.providers.http_timeout,
            transport=transport,
        )

        if not self.api_token:
            logger.warning("[REPLICATE] No API token configured - calls will fail authentication")

    def _get_headers(self) -> Dict[str, str]:
        """Get authorization headers."""
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }

    async def create_prediction(
        self,
        model: str,
        model_input: Dict[str, Any],
        kind: JobKind = JobKind.IMAGE,
    ) -> GenerationJob:
        """
        Submit a prediction for ``model`` (``owner/name``).

        Returns:
            GenerationJob carrying the provider's id and initial status
        """
        url = f"{self.base_url}/models/{model}/predictions"
        logger.info(f"[REPLICATE] Creating {kind.value} prediction on {model}")

        response = await self._send("POST", url, json={"input": model_input})
        job = GenerationJob.from_prediction(kind, response.json())

        logger.info(f"[REPLICATE] Prediction created: {job.id} ({job.status})")
        return job

    async def get_prediction(self, prediction_id: str, kind: JobKind = JobKind.IMAGE) -> GenerationJob:
        """Fetch the current state of a prediction by its id."""
        url = f"{self.base_url}/predictions/{prediction_id}"
        response = await self._send("GET", url)
        job = GenerationJob.from_prediction(kind, response.json())

        logger.debug(f"[REPLICATE] Prediction {prediction_id}: {job.status}")
        return job

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self.client.request(method, url, headers=self._get_headers(), **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"[REPLICATE] Request failed: {e}")
            raise ProviderUnavailable(self.PROVIDER, str(e)) from e

        if response.is_error:
            logger.error(f"[REPLICATE] HTTP {response.status_code}: {response.text}")
            raise ProviderRequestError(self.PROVIDER, response.status_code, response.text)

        return response

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
        logger.info("[REPLICATE] Client closed")
