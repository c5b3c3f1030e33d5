"""Orchestration of research agents and draft generation.

- ResearchCoordinator: fan-out to all agents, settle-all, validated synthesis
- AuthorAgent: validated book draft from a research dossier
"""

from .models import (
    AgentOutcome,
    AgentState,
    AgentStatus,
    Affiliate,
    BackCover,
    CaseStudy,
    Chapter,
    FrontCover,
    GenerationSettings,
    PosiBotQuote,
    Stat,
    SynthesizedResearch,
    ValidatedDraft,
    Visual,
)
from .schemas import DRAFT_SCHEMA, RESEARCH_SCHEMA
from .coordinator import ResearchCoordinator, placeholder_report
from .author import (
    AuthorAgent,
    DraftGenerator,
    build_constraints,
    image_directive,
    length_directive,
)

__all__ = [
    # Models
    "AgentStatus",
    "AgentState",
    "AgentOutcome",
    "SynthesizedResearch",
    "Stat",
    "CaseStudy",
    "Affiliate",
    "GenerationSettings",
    "ValidatedDraft",
    "FrontCover",
    "BackCover",
    "Chapter",
    "PosiBotQuote",
    "Visual",
    # Schemas
    "RESEARCH_SCHEMA",
    "DRAFT_SCHEMA",
    # Coordinator
    "ResearchCoordinator",
    "placeholder_report",
    # Author
    "AuthorAgent",
    "DraftGenerator",
    "build_constraints",
    "length_directive",
    "image_directive",
]
