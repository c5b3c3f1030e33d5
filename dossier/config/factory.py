"""Factory functions to create backends and orchestration components from configuration."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from ..llm.protocols import (
    GenerationRequest,
    GenerationResponse,
    MediaRequest,
    MediaResponse,
)

if TYPE_CHECKING:
    from ..agents import BaseAgent
    from ..llm.client import ServiceClient
    from ..llm.protocols import GenerativeBackend
    from ..orchestration import AuthorAgent, ResearchCoordinator
    from .loader import ProfileConfig, ResearchConfig, RetryConfig, ServiceConfig

logger = logging.getLogger(__name__)

MOCK_MODEL = "mock"


class MockBackend:
    """Offline backend for tests and demos.

    Structured requests get the demo dossier or draft, depending on which
    schema is asked for; plain requests get a short canned report.
    """

    def __init__(self):
        self.requests: list[GenerationRequest] = []

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        from ..demo import DEMO_DRAFT, DEMO_RESEARCH

        self.requests.append(request)
        schema = request.config.response_schema if request.config else None
        properties = (schema or {}).get("properties", {})

        if "chapters" in properties:
            text = json.dumps(DEMO_DRAFT)
        elif "summary" in properties:
            text = json.dumps(DEMO_RESEARCH)
        else:
            text = f"[Mock report for: {request.contents[:50]}...]"

        return GenerationResponse(text=text)

    async def generate_media(self, request: MediaRequest) -> MediaResponse:
        return MediaResponse(images=[])

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


def default_model(config: ServiceConfig) -> str:
    """Model used when a component does not override it."""
    if config.model:
        return config.model

    if config.backend == "openrouter":
        from ..settings import OPENROUTER_DEFAULT_MODEL

        return OPENROUTER_DEFAULT_MODEL

    elif config.backend == "anthropic":
        from ..settings import ANTHROPIC_DEFAULT_MODEL

        return ANTHROPIC_DEFAULT_MODEL

    return MOCK_MODEL


def create_backend(config: ServiceConfig) -> GenerativeBackend:
    """Create a generative backend from configuration.

    Args:
        config: Service configuration

    Returns:
        GenerativeBackend instance (OpenRouterAdapter, AnthropicAdapter, or Mock)

    Raises:
        ValueError: If backend type is not supported
    """
    if config.backend == "openrouter":
        from ..llm import OpenRouterAdapter

        return OpenRouterAdapter(
            api_key=config.api_key,
            base_url=config.base_url,
        )

    elif config.backend == "anthropic":
        from ..llm import AnthropicAdapter

        return AnthropicAdapter(api_key=config.api_key)

    elif config.backend == "mock":
        return MockBackend()

    else:
        raise ValueError(f"Unsupported service backend: {config.backend}")


def create_service_client(
    backend: GenerativeBackend,
    config: RetryConfig,
) -> ServiceClient:
    """Wrap a backend in the retrying ServiceClient."""
    from ..llm.client import ServiceClient

    return ServiceClient(
        backend,
        max_retries=config.max_retries,
        initial_delay=config.initial_delay,
    )


def create_agents(
    client: ServiceClient,
    config: ResearchConfig,
    model: str,
) -> list[BaseAgent]:
    """Create the configured research agents, in configured order."""
    from ..agents import AGENT_TYPES

    return [
        AGENT_TYPES[kind](client, model=model, use_search=config.use_search)
        for kind in config.agents
    ]


def create_coordinator(
    client: ServiceClient,
    profile: ProfileConfig,
) -> ResearchCoordinator:
    """Create a ResearchCoordinator with its agents from a profile."""
    from ..orchestration import ResearchCoordinator

    model = default_model(profile.service)
    agents = create_agents(client, profile.research, model)

    return ResearchCoordinator(
        client,
        agents,
        model=profile.research.synthesis_model or model,
    )


def create_author(
    client: ServiceClient,
    profile: ProfileConfig,
) -> AuthorAgent:
    """Create the draft generator from a profile."""
    from ..orchestration import AuthorAgent

    return AuthorAgent(client, model=profile.author.model or default_model(profile.service))


def create_from_profile(
    profile: ProfileConfig,
) -> tuple[GenerativeBackend, ResearchCoordinator, AuthorAgent]:
    """Create all components from a configuration profile.

    The backend must be entered (`async with backend:`) before the
    coordinator or author make calls.

    Args:
        profile: Profile configuration

    Returns:
        Tuple of (backend, coordinator, author)
    """
    backend = create_backend(profile.service)
    client = create_service_client(backend, profile.retry)
    coordinator = create_coordinator(client, profile)
    author = create_author(client, profile)

    logger.info(
        f"Created components: backend={profile.service.backend}, "
        f"agents={len(coordinator.agents)}, retries={profile.retry.max_retries}"
    )

    return backend, coordinator, author
