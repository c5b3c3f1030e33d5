"""Dossier engine: concurrent research agents synthesized into validated dossiers and book drafts."""

from .exceptions import (
    AgentFailure,
    DossierError,
    FatalRequestError,
    ServiceError,
    SynthesisValidationError,
    TransientError,
)
from .llm import ServiceClient
from .orchestration import (
    AgentState,
    AgentStatus,
    AuthorAgent,
    DraftGenerator,
    GenerationSettings,
    ResearchCoordinator,
    SynthesizedResearch,
    ValidatedDraft,
)

__all__ = [
    "ServiceClient",
    "ResearchCoordinator",
    "AuthorAgent",
    "DraftGenerator",
    "AgentState",
    "AgentStatus",
    "GenerationSettings",
    "SynthesizedResearch",
    "ValidatedDraft",
    "DossierError",
    "ServiceError",
    "FatalRequestError",
    "TransientError",
    "AgentFailure",
    "SynthesisValidationError",
]
