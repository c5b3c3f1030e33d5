"""Data models for research orchestration and draft generation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ..exceptions import AgentFailure


class AgentStatus(str, Enum):
    """Lifecycle status of one agent within a run."""

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (AgentStatus.COMPLETED, AgentStatus.FAILED)


_ALLOWED_TRANSITIONS = {
    AgentStatus.PENDING: {AgentStatus.RUNNING},
    AgentStatus.RUNNING: {AgentStatus.COMPLETED, AgentStatus.FAILED},
    AgentStatus.COMPLETED: set(),
    AgentStatus.FAILED: set(),
}


@dataclass
class AgentState:
    """Progress of a single agent, owned by the coordinator for one run."""

    name: str
    status: AgentStatus = AgentStatus.PENDING
    message: str | None = None

    def transition(self, status: AgentStatus, message: str | None = None) -> None:
        """Move to `status`. Only PENDING→RUNNING→COMPLETED|FAILED is allowed."""
        if status not in _ALLOWED_TRANSITIONS[self.status]:
            raise ValueError(
                f"Invalid transition for {self.name}: {self.status.value} -> {status.value}"
            )
        self.status = status
        if message is not None:
            self.message = message


@dataclass(frozen=True)
class AgentOutcome:
    """Settled result of one agent: exactly one of `report` or `error` is set."""

    agent_name: str
    report: str | None = None
    error: AgentFailure | None = None

    def __post_init__(self):
        if (self.report is None) == (self.error is None):
            raise ValueError("AgentOutcome needs exactly one of report or error")

    @classmethod
    def success(cls, agent_name: str, report: str) -> AgentOutcome:
        return cls(agent_name=agent_name, report=report)

    @classmethod
    def failure(cls, agent_name: str, error: AgentFailure) -> AgentOutcome:
        return cls(agent_name=agent_name, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ── Synthesized research ──────────────────────────────────────────


class Stat(_FrozenModel):
    """A labelled figure with context (market statistic or hidden cost)."""

    label: str
    value: str
    context: str


class CaseStudy(_FrozenModel):
    """A participant who won or lost."""

    name: str
    type: Literal["WINNER", "LOSER"]
    background: str
    strategy: str
    outcome: str
    revenue: str


class Affiliate(_FrozenModel):
    """An affiliate program relevant to participants or writers."""

    program: str
    potential: str
    type: Literal["PARTICIPANT", "WRITER"]
    commission: str
    notes: str


class SynthesizedResearch(_FrozenModel):
    """Validated research dossier. Only built via schema validation of model output."""

    summary: str
    ethical_rating: float = Field(..., alias="ethicalRating")  # 0-10 requested, not enforced
    profit_potential: str = Field(..., alias="profitPotential")
    market_stats: list[Stat] = Field(..., alias="marketStats")
    hidden_costs: list[Stat] = Field(..., alias="hiddenCosts")
    case_studies: list[CaseStudy] = Field(..., alias="caseStudies")
    affiliates: list[Affiliate]


# ── Generation settings ───────────────────────────────────────────


class GenerationSettings(_FrozenModel):
    """Caller-supplied, immutable draft generation preferences."""

    length_level: Literal[1, 2, 3] = Field(2, alias="lengthLevel")
    image_density: Literal[1, 2, 3] = Field(2, alias="imageDensity")
    target_word_count: str | None = Field(None, alias="targetWordCount")
    tone: str | None = None
    visual_style: str | None = Field(None, alias="visualStyle")
    tech_level: int = Field(2, alias="techLevel", ge=0, le=5)
    custom_spec: str | None = Field(None, alias="customSpec")
    front_cover_prompt: str | None = Field(None, alias="frontCoverPrompt")
    back_cover_prompt: str | None = Field(None, alias="backCoverPrompt")


# ── Draft content tree ────────────────────────────────────────────


class FrontCover(_FrozenModel):
    title_text: str = Field(..., alias="titleText")
    subtitle_text: str = Field(..., alias="subtitleText")
    visual_description: str = Field(..., alias="visualDescription")


class BackCover(_FrozenModel):
    blurb: str
    visual_description: str = Field(..., alias="visualDescription")


class PosiBotQuote(_FrozenModel):
    """Side-quote callout placed beside the chapter text."""

    position: Literal["LEFT", "RIGHT"]
    text: str


class Visual(_FrozenModel):
    """Typed placeholder for an illustration."""

    type: Literal["HERO", "CHART", "CALLOUT", "PORTRAIT", "DIAGRAM"]
    description: str
    caption: str = ""


class Chapter(_FrozenModel):
    number: int
    title: str
    content: str
    posi_bot_quotes: list[PosiBotQuote] = Field(default_factory=list, alias="posiBotQuotes")
    visuals: list[Visual] = Field(default_factory=list)


class ValidatedDraft(_FrozenModel):
    """Validated book draft. Only built via schema validation of model output."""

    title: str
    subtitle: str
    front_cover: FrontCover = Field(..., alias="frontCover")
    back_cover: BackCover = Field(..., alias="backCover")
    chapters: list[Chapter]
