import httpx
from typing import Optional, Dict, Any, List
from urllib.parse import quote
import logging

from pydantic import ValidationError

from . import config
from .exceptions import TrainingSubmissionError
from .schemas import FluxTrainingInput, TrainingJob, TrainingRequest

logger = logging.getLogger(__name__)


def _auth_headers() -> Dict[str, str]:
    if not config.REPLICATE_API_TOKEN:
        raise TrainingSubmissionError("REPLICATE_API_TOKEN is not set")
    return {"Authorization": f"Bearer {config.REPLICATE_API_TOKEN}"}


async def _send(client: httpx.AsyncClient, method: str, url: str, payload: Optional[Dict[str, Any]] = None) -> TrainingJob:
    try:
        response = await client.request(method, url, headers=_auth_headers(), json=payload)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error(f"HTTP error on {method} {url}: {e.response.status_code} - {e.response.text}")
        raise TrainingSubmissionError(
            f"Training API returned {e.response.status_code} for {method} {url}",
            status_code=e.response.status_code,
            detail=e.response.text,
        ) from e
    except httpx.RequestError as e:
        logger.error(f"Request error on {method} {url}: {e}")
        raise TrainingSubmissionError(f"Could not reach training API at {url}: {e}") from e

    try:
        return TrainingJob.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        # ValueError covers a non-JSON body
        logger.error(f"Unexpected response body on {method} {url}: {response.status_code} - {response.text}")
        raise TrainingSubmissionError(
            f"Training API returned an unreadable training for {method} {url}",
            status_code=response.status_code,
            detail=response.text,
        ) from e


async def _request(method: str, url: str, payload: Optional[Dict[str, Any]] = None, client: Optional[httpx.AsyncClient] = None) -> TrainingJob:
    if client is not None:
        return await _send(client, method, url, payload)
    async with httpx.AsyncClient(timeout=config.REPLICATE_REQUEST_TIMEOUT) as own_client:
        return await _send(own_client, method, url, payload)


async def create_flux_training(
    training_input: FluxTrainingInput,
    destination: str,
    *,
    version: Optional[str] = None,
    webhook: Optional[str] = None,
    webhook_events_filter: Optional[List[str]] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> TrainingJob:
    """
    Starts a Flux LoRA training run and returns the created training job.

    The body is serialized before anything is sent, so an EncodingError
    surfaces without a network call.
    """
    version = version or config.FLUX_TRAINER_VERSION
    if not version:
        raise TrainingSubmissionError("No trainer version given and FLUX_TRAINER_VERSION is not set")

    payload = TrainingRequest(
        destination=destination,
        input=training_input,
        webhook=webhook,
        webhook_events_filter=webhook_events_filter,
    ).to_wire_format()
    url = f"{config.REPLICATE_API_BASE_URL}/models/{config.FLUX_TRAINER_MODEL}/versions/{version}/trainings"

    job = await _request("POST", url, payload=payload, client=client)
    logger.info(f"Created training {job.id} for destination {destination}, status: {job.status}")
    return job


async def get_training(training_id: str, *, client: Optional[httpx.AsyncClient] = None) -> TrainingJob:
    # Ids are a single path segment
    url = f"{config.REPLICATE_API_BASE_URL}/trainings/{quote(training_id, safe='')}"
    job = await _request("GET", url, client=client)
    logger.info(f"Fetched training {training_id}, status: {job.status}")
    return job
