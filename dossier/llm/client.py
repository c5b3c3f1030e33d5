"""Resilient wrapper around a generative backend: retry, backoff, error classification."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable

from ..exceptions import FatalRequestError, TransientError
from ..settings import INITIAL_RETRY_DELAY, MAX_RETRIES
from .protocols import (
    GenerationRequest,
    GenerationResponse,
    GenerativeBackend,
    MediaRequest,
    MediaResponse,
)

logger = logging.getLogger(__name__)

FATAL_STATUS_CODES = frozenset({400, 403})


class ErrorKind(Enum):
    """How the ServiceClient treats a failed attempt."""

    FATAL = "fatal"
    TRANSIENT = "transient"


def extract_status_code(error: BaseException) -> int | None:
    """Best-effort HTTP status lookup across SDK exception shapes."""
    for attr in ("status_code", "status", "code"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value

    response = getattr(error, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int):
        return value

    return None


def classify_error(error: BaseException) -> ErrorKind:
    """
    Classify a failed call as fatal or transient.

    Status codes are authoritative: 400 and 403 are fatal, everything else
    (429, 5xx, other codes) is transient. Only when no status code is
    available does the message heuristic apply ("permission" or "403",
    matched case-sensitively).
    """
    status = extract_status_code(error)
    if status is not None:
        return ErrorKind.FATAL if status in FATAL_STATUS_CODES else ErrorKind.TRANSIENT

    message = str(error)
    if "permission" in message or "403" in message:
        return ErrorKind.FATAL

    return ErrorKind.TRANSIENT


class ServiceClient:
    """
    Single shared entry point for every call to the generative service.

    Holds no per-call state, so one instance is safely shared by all
    concurrently running agents.

    Usage:
        async with OpenRouterAdapter() as backend:
            client = ServiceClient(backend)
            response = await client.generate(request)
    """

    def __init__(
        self,
        backend: GenerativeBackend,
        *,
        max_retries: int = MAX_RETRIES,
        initial_delay: float = INITIAL_RETRY_DELAY,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize the client.

        Args:
            backend: Generative backend making single attempts
            max_retries: Default retry budget for transient failures
            initial_delay: Default first backoff delay in seconds
            sleep: Awaitable used to wait between attempts
        """
        if max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if initial_delay < 0:
            raise ValueError("initial_delay must be non-negative")

        self.backend = backend
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self._sleep = sleep

    async def generate(
        self,
        request: GenerationRequest,
        max_retries: int | None = None,
        initial_delay: float | None = None,
    ) -> GenerationResponse:
        """
        Generate content, retrying transient failures with exponential backoff.

        Args:
            request: The generation request
            max_retries: Override of the retry budget for this call
            initial_delay: Override of the first backoff delay for this call

        Returns:
            The backend response, unmodified

        Raises:
            FatalRequestError: On 400/403-class errors, without retrying
            TransientError: When transient failures outlast the retry budget
        """
        retries = self.max_retries if max_retries is None else max_retries
        delay = self.initial_delay if initial_delay is None else initial_delay
        attempt = 0

        while True:
            attempt += 1
            try:
                return await self.backend.generate(request)
            except Exception as e:
                status = extract_status_code(e)

                if classify_error(e) is ErrorKind.FATAL:
                    logger.error(f"Fatal service error ({status or 'no status'}): {e}")
                    raise FatalRequestError(
                        f"Request rejected by service: {e}",
                        status_code=status,
                        details={"model": request.model, "attempts": attempt},
                    ) from e

                if retries <= 0:
                    logger.error(f"Service call failed after {attempt} attempt(s): {e}")
                    raise TransientError(
                        f"Service call failed after {attempt} attempt(s): {e}",
                        status_code=status,
                        attempts=attempt,
                        details={"model": request.model},
                    ) from e

                logger.warning(
                    f"Service call failed ({status or 'unknown'}), "
                    f"retrying in {delay}s ({retries} retries left): {e}"
                )
                await self._sleep(delay)
                delay *= 2
                retries -= 1

    async def generate_media(self, request: MediaRequest) -> MediaResponse:
        """Generate non-text output. Single attempt, no retry."""
        return await self.backend.generate_media(request)
