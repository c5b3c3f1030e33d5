"""Protocol and request/response models for generative backends."""

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

JSON_MIME_TYPE = "application/json"

# Tool declaration that enables search-augmented generation
WEB_SEARCH_TOOL: dict[str, Any] = {"web_search": {}}


class GenerationConfig(BaseModel):
    """Optional configuration block sent with a generation request."""

    system_instruction: str | None = None
    response_mime_type: str | None = None
    response_schema: dict[str, Any] | None = None
    tools: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def wants_json(self) -> bool:
        return self.response_mime_type == JSON_MIME_TYPE or self.response_schema is not None

    @property
    def uses_web_search(self) -> bool:
        return any("web_search" in tool for tool in self.tools)


class GenerationRequest(BaseModel):
    """A single request/response call to the generative service."""

    model: str
    contents: str
    config: GenerationConfig | None = None


class Part(BaseModel):
    """One part of a candidate's content (text or inline data)."""

    text: str | None = None
    inline_data: bytes | None = None
    mime_type: str | None = None


class Candidate(BaseModel):
    """A candidate answer returned by the service."""

    parts: list[Part] = Field(default_factory=list)
    finish_reason: str | None = None


class GenerationResponse(BaseModel):
    """Normalized service response.

    `raw` keeps the provider's own response object for callers that need it.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    text: str | None = None
    candidates: list[Candidate] = Field(default_factory=list)
    raw: Any = None


class MediaRequest(BaseModel):
    """Request for non-text output (images)."""

    model: str
    prompt: str
    count: int = 1


class MediaResponse(BaseModel):
    """Images produced by a media request, as base64 strings or URLs."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    images: list[str] = Field(default_factory=list)
    raw: Any = None


@runtime_checkable
class GenerativeBackend(Protocol):
    """Protocol for generative service backends.

    Implement this protocol to add support for new APIs. Backends make
    exactly one attempt per call; retries belong to the ServiceClient.
    """

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """
        Issue one generation request.

        Args:
            request: Model, contents and optional config

        Returns:
            The normalized response
        """
        ...

    async def generate_media(self, request: MediaRequest) -> MediaResponse:
        """
        Issue one media generation request.

        Args:
            request: Model, prompt and image count

        Returns:
            The generated images
        """
        ...
