"""Author step: turns a validated research dossier into a book draft."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from ..exceptions import ServiceError
from ..llm.protocols import JSON_MIME_TYPE, GenerationConfig, GenerationRequest
from ..llm.structured import parse_structured
from ..settings import OPENROUTER_DEFAULT_MODEL
from .models import GenerationSettings, SynthesizedResearch, ValidatedDraft
from .schemas import DRAFT_SCHEMA

if TYPE_CHECKING:
    from ..llm.client import ServiceClient

logger = logging.getLogger(__name__)

AUTHOR_SYSTEM_PROMPT = """You are the lead author of the Y-It book series: satirical,
research-backed exposés of get-rich-quick trends. Write in Markdown. Every claim
must trace back to the research you are given. Each chapter has a number, a
title, its full content, optional PosiBot quotes (a relentlessly upbeat robot
whose cheerful one-liners contrast with the facts) and typed visual placeholders
(HERO, CHART, CALLOUT, PORTRAIT, DIAGRAM). Also write the front and back cover
copy with a visual description for each."""

DRAFT_STAGE = "draft generation"

DEFAULT_TONE = "Default Y-It Satire"
DEFAULT_VISUAL_STYLE = "Default Forensic/Gritty"
DEFAULT_FRONT_COVER = "Auto-generate based on Y-It Brand (Yellow/Black/Bold)"
DEFAULT_BACK_COVER = "Auto-generate based on Y-It Brand"


def length_directive(length_level: int) -> str:
    if length_level == 1:
        return "Keep chapters short (Nano-sized)."
    if length_level == 3:
        return "Write extensive, deep chapters."
    return "Standard chapter length."


def image_directive(image_density: int) -> str:
    if image_density == 3:
        return "Include 3-4 visual descriptions per chapter."
    if image_density == 1:
        return "Minimal visuals, text focused."
    return "Include 1-2 visual descriptions per chapter."


def build_constraints(settings: GenerationSettings) -> str:
    """Map generation settings to natural-language directives."""
    return "\n".join([
        f"Target Word Count: {settings.target_word_count or 'Default'}",
        f"Tone: {settings.tone or DEFAULT_TONE}",
        f"Visual Style: {settings.visual_style or DEFAULT_VISUAL_STYLE}",
        length_directive(settings.length_level),
        image_directive(settings.image_density),
        f"Tech Level: {settings.tech_level}",
    ])


def _dump(items) -> str:
    return json.dumps([item.model_dump(by_alias=True) for item in items])


class AuthorAgent:
    """
    Generates a validated book draft from research and user settings.

    One structured request per draft; a response that fails parsing or
    validation raises SynthesisValidationError and is not retried here.

    Usage:
        author = AuthorAgent(client)
        draft = await author.generate_draft(topic, research, GenerationSettings())
    """

    def __init__(self, client: ServiceClient, *, model: str | None = None):
        self.client = client
        self.model = model or OPENROUTER_DEFAULT_MODEL

    def build_prompt(
        self,
        topic: str,
        research: SynthesizedResearch,
        settings: GenerationSettings,
    ) -> str:
        return f"""Topic: {topic}
Research Summary: {json.dumps(research.summary)}
Market Stats: {_dump(research.market_stats)}
Case Studies: {_dump(research.case_studies)}
User Constraints:
{build_constraints(settings)}
Custom Spec: {settings.custom_spec or "Use Standard Spec"}
Cover Art Instructions:
Front: {settings.front_cover_prompt or DEFAULT_FRONT_COVER}
Back: {settings.back_cover_prompt or DEFAULT_BACK_COVER}"""

    async def generate_draft(
        self,
        topic: str,
        research: SynthesizedResearch,
        settings: GenerationSettings,
    ) -> ValidatedDraft:
        """
        Generate a book draft.

        Args:
            topic: Book topic
            research: Validated research dossier
            settings: Generation preferences

        Returns:
            The validated draft

        Raises:
            SynthesisValidationError: If the output is not valid JSON or
                does not match the draft schema
            FatalRequestError, TransientError: If the call itself fails;
                `details["stage"]` names this stage
        """
        request = GenerationRequest(
            model=self.model,
            contents=self.build_prompt(topic, research, settings),
            config=GenerationConfig(
                system_instruction=AUTHOR_SYSTEM_PROMPT,
                response_mime_type=JSON_MIME_TYPE,
                response_schema=DRAFT_SCHEMA,
            ),
        )

        logger.info(
            f"Generating draft on '{topic}' (length={settings.length_level}, "
            f"images={settings.image_density}, tech={settings.tech_level})"
        )
        try:
            response = await self.client.generate(request)
        except ServiceError as e:
            e.details["stage"] = DRAFT_STAGE
            raise

        draft = parse_structured(response.text, ValidatedDraft, stage=DRAFT_STAGE)
        logger.info(f"Draft '{draft.title}' generated with {len(draft.chapters)} chapters")
        return draft


# Name used by callers that think of this step as the draft generator
DraftGenerator = AuthorAgent
