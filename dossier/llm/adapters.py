"""Adapter implementations for generative backends."""

import json
import logging
from typing import Any

from openai import AsyncOpenAI

from ..settings import (
    ANTHROPIC_API_KEY,
    ANTHROPIC_DEFAULT_MODEL,
    OPENROUTER_API_KEY,
    OPENROUTER_BASE_URL,
    REQUEST_TIMEOUT_SECONDS,
)
from .protocols import (
    Candidate,
    GenerationRequest,
    GenerationResponse,
    GenerativeBackend,
    MediaRequest,
    MediaResponse,
    Part,
)

logger = logging.getLogger(__name__)

STRUCTURED_OUTPUT_TOOL = "structured_output"


class OpenRouterAdapter(GenerativeBackend):
    """
    Adapter for OpenRouter API.

    OpenRouter provides access to many models (Gemini included) through an
    OpenAI-compatible API. SDK-level retries are disabled: the ServiceClient
    owns the retry policy.

    Usage:
        async with OpenRouterAdapter() as backend:
            response = await backend.generate(request)
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
    ):
        """
        Initialize the OpenRouter adapter.

        Args:
            api_key: Optional API key. If not provided, uses OPENROUTER_API_KEY env var.
            base_url: Optional endpoint. Defaults to OPENROUTER_BASE_URL.
        """
        self.api_key = api_key or OPENROUTER_API_KEY
        self.base_url = base_url or OPENROUTER_BASE_URL
        self._client: AsyncOpenAI | None = None

        if not self.api_key:
            raise ValueError(
                "OpenRouter API key required. Set OPENROUTER_API_KEY in .env"
            )

        logger.info(f"OpenRouter adapter initialized for {self.base_url}")

    async def __aenter__(self) -> "OpenRouterAdapter":
        self._client = AsyncOpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            max_retries=0,
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._client:
            await self._client.close()
            self._client = None

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with' context manager."
            )
        return self._client

    def build_params(self, request: GenerationRequest) -> dict[str, Any]:
        """Translate a GenerationRequest into chat completion parameters."""
        config = request.config
        messages: list[dict] = []

        if config and config.system_instruction:
            messages.append({"role": "system", "content": config.system_instruction})

        messages.append({"role": "user", "content": request.contents})

        params: dict[str, Any] = {"model": request.model, "messages": messages}

        if config is None:
            return params

        if config.response_schema is not None:
            params["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": STRUCTURED_OUTPUT_TOOL,
                    "schema": config.response_schema,
                    "strict": False,
                },
            }
        elif config.wants_json:
            params["response_format"] = {"type": "json_object"}

        if config.uses_web_search:
            params["extra_body"] = {"plugins": [{"id": "web"}]}

        return params

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Issue one chat completion request."""
        params = self.build_params(request)

        logger.info(
            f"Generating with {request.model} ({len(request.contents)} chars, "
            f"json={'response_format' in params}, search={'extra_body' in params})"
        )

        response = await self.client.chat.completions.create(**params)

        candidates = [
            Candidate(
                parts=[Part(text=choice.message.content)] if choice.message.content else [],
                finish_reason=choice.finish_reason,
            )
            for choice in response.choices
        ]
        text = response.choices[0].message.content if response.choices else None

        logger.info(f"Response received ({len(text or '')} chars)")
        logger.debug(f"Usage: {response.usage}")

        return GenerationResponse(text=text, candidates=candidates, raw=response)

    async def generate_media(self, request: MediaRequest) -> MediaResponse:
        """Generate images through the OpenAI-compatible images endpoint."""
        logger.info(f"Generating {request.count} image(s) with {request.model}")

        response = await self.client.images.generate(
            model=request.model,
            prompt=request.prompt,
            n=request.count,
            response_format="b64_json",
        )

        images = [item.b64_json or item.url for item in (response.data or [])]
        return MediaResponse(images=[i for i in images if i], raw=response)


class AnthropicAdapter(GenerativeBackend):
    """
    Adapter for Anthropic API (direct).

    Structured output is obtained by forcing a single tool call whose input
    schema is the requested response schema.

    Usage:
        async with AnthropicAdapter() as backend:
            response = await backend.generate(request)
    """

    def __init__(
        self,
        api_key: str | None = None,
        max_tokens: int = 8192,
    ):
        """
        Initialize the Anthropic adapter.

        Args:
            api_key: Optional API key. If not provided, uses ANTHROPIC_API_KEY env var.
            max_tokens: Output token ceiling per request.
        """
        self.api_key = api_key or ANTHROPIC_API_KEY
        self.max_tokens = max_tokens
        self._client = None

        if not self.api_key:
            raise ValueError(
                "Anthropic API key required. Set ANTHROPIC_API_KEY in .env"
            )

        logger.info("Anthropic adapter initialized")

    async def __aenter__(self) -> "AnthropicAdapter":
        import anthropic

        self._client = anthropic.AsyncAnthropic(
            api_key=self.api_key,
            max_retries=0,
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._client:
            await self._client.close()
            self._client = None

    @property
    def client(self):
        if self._client is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with' context manager."
            )
        return self._client

    def build_params(self, request: GenerationRequest) -> dict[str, Any]:
        """Translate a GenerationRequest into Messages API parameters."""
        config = request.config
        params: dict[str, Any] = {
            "model": request.model or ANTHROPIC_DEFAULT_MODEL,
            "max_tokens": self.max_tokens,
            "system": (config.system_instruction if config else None) or "",
            "messages": [{"role": "user", "content": request.contents}],
        }

        if config is None:
            return params

        tools: list[dict] = []
        if config.uses_web_search:
            tools.append({"type": "web_search_20250305", "name": "web_search", "max_uses": 5})

        if config.response_schema is not None:
            tools.append({
                "name": STRUCTURED_OUTPUT_TOOL,
                "description": "Return the final answer as a structured object.",
                "input_schema": config.response_schema,
            })
            params["tool_choice"] = {"type": "tool", "name": STRUCTURED_OUTPUT_TOOL}
        elif config.wants_json:
            params["system"] += "\n\nRespond with a single JSON object and nothing else."

        if tools:
            params["tools"] = tools

        return params

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Issue one Messages API request."""
        params = self.build_params(request)

        logger.info(f"Generating with {params['model']} ({len(request.contents)} chars)")

        message = await self.client.messages.create(**params)

        text_parts: list[str] = []
        structured: str | None = None
        for block in message.content:
            if block.type == "text":
                text_parts.append(block.text)
            elif block.type == "tool_use" and block.name == STRUCTURED_OUTPUT_TOOL:
                structured = json.dumps(block.input)

        text = structured if structured is not None else ("".join(text_parts) or None)

        logger.info(f"Response received ({len(text or '')} chars), stop_reason={message.stop_reason}")
        logger.debug(f"Usage: input={message.usage.input_tokens}, output={message.usage.output_tokens}")

        return GenerationResponse(
            text=text,
            candidates=[
                Candidate(parts=[Part(text=text)] if text else [], finish_reason=message.stop_reason)
            ],
            raw=message,
        )

    async def generate_media(self, request: MediaRequest) -> MediaResponse:
        raise NotImplementedError("Anthropic backend does not generate images")
