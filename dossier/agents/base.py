"""Base class for research agents."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..llm.protocols import WEB_SEARCH_TOOL, GenerationConfig, GenerationRequest
from ..settings import OPENROUTER_DEFAULT_MODEL

if TYPE_CHECKING:
    from ..llm.client import ServiceClient

logger = logging.getLogger(__name__)


class BaseAgent(ABC):
    """
    A stateless researcher that investigates a topic from one fixed perspective.

    Variants differ only in their role instruction and query wording. Errors
    from the ServiceClient (fatal or retries exhausted) propagate to the
    caller untouched.

    Usage:
        agent = DetectiveAgent(client)
        report = await agent.investigate("dropshipping")
    """

    name: str = "BaseAgent"
    report_label: str = "AGENT"
    system_instruction: str = ""

    def __init__(
        self,
        client: ServiceClient,
        *,
        model: str | None = None,
        use_search: bool = True,
    ):
        """
        Initialize the agent.

        Args:
            client: Shared ServiceClient
            model: Model identifier. Defaults to OPENROUTER_DEFAULT_MODEL.
            use_search: Enable search augmentation for this agent's requests
        """
        self.client = client
        self.model = model or OPENROUTER_DEFAULT_MODEL
        self.use_search = use_search

    @abstractmethod
    def build_query(self, topic: str) -> str:
        """Return the topic-scoped research query for this perspective."""

    def build_request(self, topic: str) -> GenerationRequest:
        return GenerationRequest(
            model=self.model,
            contents=self.build_query(topic),
            config=GenerationConfig(
                system_instruction=self.system_instruction,
                tools=[WEB_SEARCH_TOOL] if self.use_search else [],
            ),
        )

    async def investigate(self, topic: str) -> str:
        """
        Investigate `topic` and return a textual report.

        Returns:
            The response text, or "[<name>] No data found." if it is empty
        """
        logger.info(f"[{self.name}] Investigating '{topic}'")
        response = await self.client.generate(self.build_request(topic))

        if not response.text:
            logger.warning(f"[{self.name}] Empty response")
            return f"[{self.name}] No data found."

        return response.text

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model!r}, use_search={self.use_search})"
