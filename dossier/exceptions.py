"""
Exception hierarchy for the dossier engine.

Categories:
- Service errors raised by the ServiceClient (fatal vs. retries exhausted)
- Agent failures, recorded by the coordinator and never re-raised
- Structured-output validation failures, fatal to the whole operation

Usage:
    from dossier.exceptions import FatalRequestError, SynthesisValidationError

    try:
        research = await coordinator.execute(topic)
    except SynthesisValidationError as e:
        logger.error(f"{e.stage} failed: {e}")
"""

from __future__ import annotations

from typing import Optional


class DossierError(Exception):
    """
    Base exception for all dossier engine errors.

    Catch `DossierError` to handle any engine-specific failure.
    """

    def __init__(self, message: str, *, details: Optional[dict] = None):
        super().__init__(message)
        self.details = details or {}


# ── Service Errors ────────────────────────────────────────────────


class ServiceError(DossierError):
    """Raised when a call to the generative service cannot be completed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.status_code = status_code


class FatalRequestError(ServiceError):
    """
    A request the service will never accept (400 bad request, 403 forbidden).

    Never retried. The original SDK exception is available as `__cause__`.
    """


class TransientError(ServiceError):
    """
    A rate-limit, server or network failure that survived every retry.

    The last underlying exception is available as `__cause__`.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        attempts: int = 0,
        details: Optional[dict] = None,
    ):
        super().__init__(message, status_code=status_code, details=details)
        self.attempts = attempts


# ── Agent Failures ────────────────────────────────────────────────


class AgentFailure(DossierError):
    """
    Any error raised inside an agent's investigation.

    The coordinator records it against the agent and substitutes a
    placeholder report; it is never surfaced from `execute`.
    """

    def __init__(
        self,
        message: str,
        *,
        agent_name: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.agent_name = agent_name


# ── Structured Output ─────────────────────────────────────────────


class SynthesisValidationError(DossierError):
    """
    Raised when structured model output is not valid JSON or does not match
    the expected schema.

    Fatal to the operation: no partially-populated object is returned.
    """

    def __init__(
        self,
        message: str,
        *,
        stage: str = "synthesis",
        raw_text: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details=details)
        self.stage = stage
        self.raw_text = raw_text
