"""
Gateway-to-HTTP translation shared by the generation routes.

Missing input becomes a 400 with the gateway's message; a provider error
(non-2xx answer or transport failure) becomes a 500 with a fixed message. Provider bodies
are logged by the clients and never returned.
"""
import logging
from typing import Awaitable

from admaker.jobs.models import GenerationJob
from admaker.providers.exceptions import ProviderError
from admaker.services.gateway import MissingInputError

from .exceptions import InternalError, ValidationError
from .schemas import PredictionResponse, SubmissionResponse

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch prediction"


async def relay_submission(call: Awaitable[GenerationJob], failure_message: str) -> SubmissionResponse:
    try:
        job = await call
    except MissingInputError as e:
        raise ValidationError(e.message)
    except ProviderError as e:
        logger.error(f"{failure_message}: {e}")
        raise InternalError(failure_message)

    return SubmissionResponse(id=job.id, status=job.status)


async def relay_status(call: Awaitable[GenerationJob]) -> PredictionResponse:
    try:
        job = await call
    except MissingInputError as e:
        raise ValidationError(e.message)
    except ProviderError as e:
        logger.error(f"{FETCH_FAILED}: {e}")
        raise InternalError(FETCH_FAILED)

    return PredictionResponse(
        id=job.id,
        status=job.status,
        output=job.output,
        error=job.error,
    )
