"""
Async HTTP client for the experiments API.

Each call is awaited once and its outcome folded into one of the tagged
states in ``client.states``. Failures are logged here; callers only ever see
the user-facing message carried by the state.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from .models import ExperimentListItem, ExperimentRecord
from .states import (
    Loaded,
    LoadFailed,
    LoadState,
    NotFound,
    SubmitFailed,
    Submitted,
    SubmitState,
)

logger = logging.getLogger(__name__)

EXPERIMENTS_PATH = "/api/experiments"

GENERIC_SUBMIT_ERROR = "Something went wrong"
LIST_LOAD_ERROR = "Could not load experiments. Please try again later."
DETAIL_LOAD_ERROR = "Could not load experiment. Please try again later."


class ExperimentApiClient:
    """
    Thin client over the experiment store endpoint.

    Args:
        base_url: Root URL of the API, e.g. ``http://localhost:8000``
        transport: Optional httpx transport (ASGI app, mock) used instead of the network
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            transport=self.transport,
            timeout=self.timeout,
        )

    async def create_experiment(self, payload: Dict[str, Any]) -> SubmitState:
        """Submit a new experiment and report the assigned id or the failure reason."""
        try:
            async with self._client() as client:
                response = await client.post(EXPERIMENTS_PATH, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Error submitting experiment: {str(e)}")
            return SubmitFailed(GENERIC_SUBMIT_ERROR)

        if not response.is_success:
            message = _error_message(response) or f"Request failed with {response.status_code}"
            logger.error(f"Experiment submission failed: {response.status_code} - {response.text}")
            return SubmitFailed(message)

        try:
            experiment_id = int(response.json()["id"])
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Malformed create response: {str(e)}")
            return SubmitFailed(GENERIC_SUBMIT_ERROR)

        return Submitted(experiment_id)

    async def list_experiments(self) -> LoadState:
        """Fetch the most recent experiments."""
        try:
            async with self._client() as client:
                response = await client.get(EXPERIMENTS_PATH)
            response.raise_for_status()

            data = response.json()
            if not isinstance(data, dict) or "experiments" not in data:
                raise ValueError("Malformed response from server")

            rows = data["experiments"] if isinstance(data["experiments"], list) else []
            return Loaded([ExperimentListItem.model_validate(row) for row in rows])
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error loading experiments: {str(e)}")
            return LoadFailed(LIST_LOAD_ERROR)

    async def get_experiment(self, experiment_id: str) -> LoadState:
        """Fetch one experiment, separating not-found from other failures."""
        try:
            async with self._client() as client:
                response = await client.get(f"{EXPERIMENTS_PATH}/{experiment_id}")

            if response.status_code == 404:
                return NotFound()
            response.raise_for_status()

            data = response.json()
            if not isinstance(data, dict) or "experiment" not in data:
                raise ValueError("Malformed response from server")

            return Loaded(ExperimentRecord.model_validate(data["experiment"]))
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error loading experiment {experiment_id}: {str(e)}")
            return LoadFailed(DETAIL_LOAD_ERROR)


def _error_message(response: httpx.Response) -> Optional[str]:
    """Extract the server's ``error`` string from a failed response, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return None
