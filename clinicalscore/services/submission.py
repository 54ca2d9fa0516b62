"""Result submission collaborators.

After a calculation completes locally, a summary is posted to a remote
result log. Submission is best effort: a failure is reported back to the
framework as SubmissionFailure and never undoes the local result.
"""

import asyncio
import logging
from typing import Any, Protocol

import httpx

from clinicalscore.core.config import Settings, settings
from clinicalscore.core.errors import SubmissionFailure

logger = logging.getLogger(__name__)


class Submitter(Protocol):
    """Anything that can accept a result payload."""

    async def submit(self, payload: dict[str, Any]) -> None: ...


class NullSubmitter:
    """Submitter used when no result log is configured."""

    enabled = False

    async def submit(self, payload: dict[str, Any]) -> None:
        logger.debug("Submission disabled, payload dropped")


class HttpSubmitter:
    """Posts result payloads as JSON with bounded retries.

    Args:
        url: Endpoint receiving the payload.
        timeout: Request timeout in seconds.
        max_retries: Retries after the first attempt.
        retry_delay: Fixed delay between attempts in seconds.
        transport: Optional httpx transport (used by tests).
    """

    enabled = True

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._transport = transport

    async def submit(self, payload: dict[str, Any]) -> None:
        """Post the payload, retrying on transport errors and non-2xx responses.

        Raises:
            SubmissionFailure: After the last attempt failed.
        """
        last_error: Exception | None = None
        attempts = 0

        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            headers={"Content-Type": "application/json"},
        ) as client:
            for attempt in range(self.max_retries + 1):
                attempts = attempt + 1
                try:
                    response = await client.post(self.url, json=payload)
                    response.raise_for_status()
                    logger.debug(f"Result submitted to {self.url} on attempt {attempts}")
                    return
                except httpx.HTTPError as e:
                    last_error = e
                    logger.warning(f"Submission attempt {attempts} to {self.url} failed: {e}")
                    if attempt < self.max_retries:
                        await asyncio.sleep(self.retry_delay)

        raise SubmissionFailure(
            f"Submission failed after {attempts} attempt(s): {last_error}",
            attempts=attempts,
            cause=last_error,
        )


def build_submitter(config: Settings | None = None) -> Submitter:
    """Create the submitter described by the settings."""
    config = config or settings
    if not config.submission_url:
        return NullSubmitter()
    return HttpSubmitter(
        url=config.submission_url,
        timeout=config.submission_timeout,
        max_retries=config.submission_max_retries,
        retry_delay=config.submission_retry_delay,
    )
