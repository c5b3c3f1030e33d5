"""
Draft Generator Tests

Settings-to-directive mapping, prompt context and draft validation.
"""

import asyncio
import json

import pytest

from dossier.demo import DEMO_DRAFT, DEMO_RESEARCH
from dossier.exceptions import FatalRequestError, SynthesisValidationError
from dossier.llm import ServiceClient
from dossier.orchestration import (
    AuthorAgent,
    DraftGenerator,
    GenerationSettings,
    SynthesizedResearch,
    ValidatedDraft,
)
from dossier.orchestration.author import (
    AUTHOR_SYSTEM_PROMPT,
    build_constraints,
    image_directive,
    length_directive,
)
from dossier.orchestration.schemas import DRAFT_SCHEMA
from dossier.testing import RecordingSleep, ScriptedBackend, StatusError

RESEARCH = SynthesizedResearch.model_validate(DEMO_RESEARCH)


def _author(steps):
    backend = ScriptedBackend({AUTHOR_SYSTEM_PROMPT: steps})
    client = ServiceClient(backend, sleep=RecordingSleep())
    return AuthorAgent(client, model="test-model"), backend


@pytest.mark.parametrize(
    "level,expected",
    [
        (1, "Keep chapters short (Nano-sized)."),
        (2, "Standard chapter length."),
        (3, "Write extensive, deep chapters."),
    ],
)
def test_length_directive(level, expected):
    assert length_directive(level) == expected


@pytest.mark.parametrize(
    "density,expected",
    [
        (1, "Minimal visuals, text focused."),
        (2, "Include 1-2 visual descriptions per chapter."),
        (3, "Include 3-4 visual descriptions per chapter."),
    ],
)
def test_image_directive(density, expected):
    assert image_directive(density) == expected


def test_constraints_use_defaults_for_missing_fields():
    constraints = build_constraints(GenerationSettings())

    assert "Target Word Count: Default" in constraints
    assert "Tone: Default Y-It Satire" in constraints
    assert "Visual Style: Default Forensic/Gritty" in constraints
    assert "Standard chapter length." in constraints
    assert "Tech Level: 2" in constraints


def test_constraints_use_caller_values():
    settings = GenerationSettings(
        lengthLevel=3,
        imageDensity=1,
        targetWordCount="15,000",
        tone="Deadpan",
        visualStyle="Blueprint",
        techLevel=5,
    )

    constraints = build_constraints(settings)

    assert "Target Word Count: 15,000" in constraints
    assert "Tone: Deadpan" in constraints
    assert "Visual Style: Blueprint" in constraints
    assert "Write extensive, deep chapters." in constraints
    assert "Minimal visuals, text focused." in constraints
    assert "Tech Level: 5" in constraints


def test_settings_reject_out_of_range_levels():
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        GenerationSettings(length_level=4)
    with pytest.raises(ValidationError):
        GenerationSettings(tech_level=6)


def test_prompt_carries_research_context():
    author, _ = _author([json.dumps(DEMO_DRAFT)])
    settings = GenerationSettings(custom_spec="Three chapters only", front_cover_prompt="Neon")

    prompt = author.build_prompt("dropshipping", RESEARCH, settings)

    assert "Topic: dropshipping" in prompt
    assert json.dumps(RESEARCH.summary) in prompt
    assert "Failure Rate (Year 1)" in prompt
    assert "Mike T." in prompt
    assert "Custom Spec: Three chapters only" in prompt
    assert "Front: Neon" in prompt
    assert "Back: Auto-generate based on Y-It Brand" in prompt


def test_generate_draft_returns_validated_draft():
    author, backend = _author([json.dumps(DEMO_DRAFT)])

    draft = asyncio.run(author.generate_draft("dropshipping", RESEARCH, GenerationSettings()))

    assert isinstance(draft, ValidatedDraft)
    assert draft.title == "The Dropshipping Delusion"
    assert [c.number for c in draft.chapters] == [1, 2, 3]

    request = backend.requests[0]
    assert request.model == "test-model"
    assert request.config.response_mime_type == "application/json"
    assert request.config.response_schema == DRAFT_SCHEMA
    assert request.config.tools == []


def test_fenced_draft_accepted():
    author, _ = _author([f"```json\n{json.dumps(DEMO_DRAFT)}\n```"])

    draft = asyncio.run(author.generate_draft("topic", RESEARCH, GenerationSettings()))

    assert draft == ValidatedDraft.model_validate(DEMO_DRAFT)


def test_markdown_code_blocks_survive_draft_generation():
    """Fenced code inside chapter content comes back unchanged."""
    payload = json.loads(json.dumps(DEMO_DRAFT))
    payload["chapters"][0]["content"] = "Run this:\n```bash\npip install riches\n```\nDone."
    author, _ = _author([json.dumps(payload)])

    draft = asyncio.run(author.generate_draft("topic", RESEARCH, GenerationSettings()))

    assert draft.chapters[0].content == "Run this:\n```bash\npip install riches\n```\nDone."
    assert draft == ValidatedDraft.model_validate(payload)


def test_invalid_draft_is_not_retried():
    """Schema mismatch raises SynthesisValidationError after one attempt."""
    broken = {k: v for k, v in DEMO_DRAFT.items() if k != "chapters"}
    author, backend = _author([json.dumps(broken)])

    with pytest.raises(SynthesisValidationError) as exc_info:
        asyncio.run(author.generate_draft("topic", RESEARCH, GenerationSettings()))

    assert exc_info.value.stage == "draft generation"
    assert backend.attempts[AUTHOR_SYSTEM_PROMPT] == 1


def test_non_json_draft_rejected():
    author, _ = _author(["Once upon a time..."])

    with pytest.raises(SynthesisValidationError):
        asyncio.run(author.generate_draft("topic", RESEARCH, GenerationSettings()))


def test_draft_transport_errors_propagate():
    author, _ = _author([StatusError(400)])

    with pytest.raises(FatalRequestError) as exc_info:
        asyncio.run(author.generate_draft("topic", RESEARCH, GenerationSettings()))

    assert exc_info.value.details["stage"] == "draft generation"


def test_draft_generator_alias():
    assert DraftGenerator is AuthorAgent


def main():
    """Run all tests."""
    test_constraints_use_defaults_for_missing_fields()
    test_prompt_carries_research_context()
    test_generate_draft_returns_validated_draft()
    test_invalid_draft_is_not_retried()
    print("\nALL TESTS PASSED!")


if __name__ == "__main__":
    main()
