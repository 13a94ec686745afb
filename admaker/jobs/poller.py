"""
Job Poller - fixed-interval status checks with an attempt ceiling.

The loop sleeps, fetches, and stops on the first terminal status. It never
backs off. A cancellation event and an optional deadline let callers stop a
stale poll; both make the poll resolve to None.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from admaker.providers.exceptions import ProviderError

from .models import GenerationJob

logger = logging.getLogger(__name__)

FetchStatus = Callable[[str], Awaitable[GenerationJob]]
AttemptCallback = Callable[[int], None]


@dataclass(frozen=True)
class PollPolicy:
    """Delay between fetches (seconds) and the maximum number of fetches."""
    interval: float
    max_attempts: int


IMAGE_POLL = PollPolicy(interval=2.0, max_attempts=30)
VIDEO_POLL = PollPolicy(interval=5.0, max_attempts=60)


async def _wait(delay: float, cancel: Optional[asyncio.Event]) -> bool:
    """Sleep for ``delay``; True if ``cancel`` fired meanwhile."""
    if cancel is None:
        await asyncio.sleep(delay)
        return False
    if cancel.is_set():
        return True
    try:
        await asyncio.wait_for(cancel.wait(), timeout=delay)
    except asyncio.TimeoutError:
        return False
    return True


class JobPoller:
    """
    Poll one job until it is terminal.

    Example:
        poller = JobPoller(gateway.fetch_image_status, IMAGE_POLL)
        url = await poller.poll(job.id)
    """

    def __init__(self, fetch: FetchStatus, policy: PollPolicy):
        self.fetch = fetch
        self.policy = policy

    async def poll(
        self,
        job_id: str,
        cancel: Optional[asyncio.Event] = None,
        deadline: Optional[float] = None,
        on_attempt: Optional[AttemptCallback] = None,
    ) -> Optional[str]:
        """
        Wait for ``job_id`` to finish.

        Args:
            job_id: Id returned at submission, passed through unchanged
            cancel: Event that stops the loop when set
            deadline: Seconds from now after which the loop gives up
            on_attempt: Called with the attempt number after each non-terminal fetch

        Returns:
            Output URL on success; None on failure, cancellation, deadline or ceiling
        """
        loop = asyncio.get_running_loop()
        expires_at = loop.time() + deadline if deadline is not None else None

        for attempt in range(1, self.policy.max_attempts + 1):
            if await _wait(self.policy.interval, cancel):
                logger.info(f"Poll cancelled: {job_id}")
                return None

            if expires_at is not None and loop.time() >= expires_at:
                logger.warning(f"Poll deadline reached: {job_id} after {attempt - 1} attempts")
                return None

            try:
                job = await self.fetch(job_id)
            except ProviderError as e:
                logger.error(f"Status fetch failed for {job_id}: {e}")
                return None

            if job.succeeded and job.output_url:
                logger.info(f"Job {job_id} succeeded after {attempt} attempts")
                return job.output_url
            if job.failed:
                logger.error(f"Job {job_id} {job.status}: {job.error}")
                return None

            logger.debug(f"Polling {job_id}: {job.status} (attempt {attempt})")
            if on_attempt:
                on_attempt(attempt)

        logger.warning(f"Job {job_id} not finished after {self.policy.max_attempts} attempts")
        return None
