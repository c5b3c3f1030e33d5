"""Test doubles for the generative backend and the backoff sleep.

Usage::

    backend = ScriptedBackend({
        AuditorAgent.system_instruction: [StatusError(429), "audit report"],
        RESEARCH_SYSTEM_PROMPT: [json.dumps(DEMO_RESEARCH)],
    })
    sleep = RecordingSleep()
    client = ServiceClient(backend, sleep=sleep)

Each script is consumed step by step; its last step repeats forever.
Exceptions in a script are raised, strings become the response text.
"""

from __future__ import annotations

from collections import Counter
from typing import Union

from .llm.protocols import (
    GenerationRequest,
    GenerationResponse,
    MediaRequest,
    MediaResponse,
)

Step = Union[str, None, BaseException]


class StatusError(Exception):
    """Stand-in for an SDK error carrying an HTTP status code."""

    def __init__(self, status_code: int | None, message: str = ""):
        super().__init__(message or f"HTTP {status_code}")
        self.status_code = status_code


class ScriptedBackend:
    """Backend whose answers are scripted per system instruction."""

    def __init__(
        self,
        scripts: dict[str | None, list[Step]] | None = None,
        default: Step = "Mock report.",
    ):
        self.scripts = {key: list(steps) for key, steps in (scripts or {}).items()}
        self.default = default
        self.requests: list[GenerationRequest] = []
        self.attempts: Counter = Counter()

    @staticmethod
    def key_for(request: GenerationRequest) -> str | None:
        return request.config.system_instruction if request.config else None

    def _next_step(self, key: str | None) -> Step:
        script = self.scripts.get(key)
        if not script:
            return self.default
        return script.pop(0) if len(script) > 1 else script[0]

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        key = self.key_for(request)
        self.requests.append(request)
        self.attempts[key] += 1

        step = self._next_step(key)
        if isinstance(step, BaseException):
            raise step
        return GenerationResponse(text=step)

    async def generate_media(self, request: MediaRequest) -> MediaResponse:
        return MediaResponse(images=[])

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class RecordingSleep:
    """Awaitable replacement for asyncio.sleep that records each delay."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)

    @property
    def total(self) -> float:
        return sum(self.delays)
