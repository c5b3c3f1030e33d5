"""Response schemas sent to the service to constrain structured output.

Every field and enum is spelled out so the service can only emit objects
that the pydantic models in `models.py` accept.
"""

from typing import Any


def _string(**extra: Any) -> dict[str, Any]:
    return {"type": "string", **extra}


def _object(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": required if required is not None else list(properties),
    }


def _array(items: dict[str, Any]) -> dict[str, Any]:
    return {"type": "array", "items": items}


_STAT = _object({
    "label": _string(),
    "value": _string(),
    "context": _string(),
})

RESEARCH_SCHEMA: dict[str, Any] = _object({
    "summary": _string(),
    "ethicalRating": {"type": "number"},
    "profitPotential": _string(),
    "marketStats": _array(_STAT),
    "hiddenCosts": _array(_STAT),
    "caseStudies": _array(_object({
        "name": _string(),
        "type": _string(enum=["WINNER", "LOSER"]),
        "background": _string(),
        "strategy": _string(),
        "outcome": _string(),
        "revenue": _string(),
    })),
    "affiliates": _array(_object({
        "program": _string(),
        "potential": _string(),
        "type": _string(enum=["PARTICIPANT", "WRITER"]),
        "commission": _string(),
        "notes": _string(),
    })),
})

DRAFT_SCHEMA: dict[str, Any] = _object({
    "title": _string(),
    "subtitle": _string(),
    "frontCover": _object({
        "titleText": _string(),
        "subtitleText": _string(),
        "visualDescription": _string(),
    }),
    "backCover": _object({
        "blurb": _string(),
        "visualDescription": _string(),
    }),
    "chapters": _array(_object(
        {
            "number": {"type": "integer"},
            "title": _string(),
            "content": _string(),
            "posiBotQuotes": _array(_object({
                "position": _string(enum=["LEFT", "RIGHT"]),
                "text": _string(),
            })),
            "visuals": _array(_object(
                {
                    "type": _string(enum=["HERO", "CHART", "CALLOUT", "PORTRAIT", "DIAGRAM"]),
                    "description": _string(),
                    "caption": _string(),
                },
                required=["type", "description"],
            )),
        },
        required=["number", "title", "content"],
    )),
})
