"""Parsing and validation of structured model output."""

from __future__ import annotations

import json
import logging
import re
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import SynthesisValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_LEADING_FENCE = re.compile(r"^\s*```[\w-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?```\s*$")


def strip_code_fences(text: str) -> str:
    """
    Remove a markdown code fence (```json ... ```) surrounding model output.

    The service is asked for bare JSON but does not always comply. Applying
    this to already-clean text returns it unchanged apart from surrounding
    whitespace. Fences inside the payload (e.g. in Markdown string values)
    are left alone.
    """
    text = text.strip()
    if text.startswith("```"):
        text = _TRAILING_FENCE.sub("", _LEADING_FENCE.sub("", text, count=1), count=1)
    return text.strip()


def parse_structured(text: str | None, model: type[T], stage: str) -> T:
    """
    Strip fences, parse JSON and validate against a pydantic model.

    Args:
        text: Raw response text (None is treated as an empty object)
        model: Pydantic model the payload must satisfy
        stage: Name of the operation, used in errors and logs

    Returns:
        A validated instance of `model`

    Raises:
        SynthesisValidationError: If the text is not JSON or fails validation
    """
    raw = text or "{}"
    cleaned = strip_code_fences(raw)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"{stage}: response is not valid JSON: {e}")
        raise SynthesisValidationError(
            f"Failed to parse {stage} output as JSON: {e}",
            stage=stage,
            raw_text=raw,
        ) from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"{stage}: {e.error_count()} validation error(s)")
        raise SynthesisValidationError(
            f"Failed to validate {stage} output structure: {e.error_count()} error(s)",
            stage=stage,
            raw_text=raw,
            details={"errors": e.errors(include_url=False)},
        ) from e
