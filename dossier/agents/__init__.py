"""Research agents: one stateless investigator per perspective."""

from .base import BaseAgent
from .specialized import (
    AGENT_TYPES,
    DEFAULT_AGENT_ORDER,
    AuditorAgent,
    DetectiveAgent,
    InsiderAgent,
    StatAgent,
    default_agents,
)

__all__ = [
    "BaseAgent",
    "DetectiveAgent",
    "AuditorAgent",
    "InsiderAgent",
    "StatAgent",
    "AGENT_TYPES",
    "DEFAULT_AGENT_ORDER",
    "default_agents",
]
