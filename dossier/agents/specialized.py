"""The four research perspectives used to build a dossier."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import BaseAgent

if TYPE_CHECKING:
    from ..llm.client import ServiceClient


class DetectiveAgent(BaseAgent):
    """Looks for misconduct, scams and the people selling the dream."""

    name = "DetectiveAgent"
    report_label = "DETECTIVE"
    system_instruction = """You are a forensic investigator of money-making schemes.
Find lawsuits, regulator actions, refund complaints, fake testimonials and the
gurus or companies profiting from newcomers. Cite sources and dates. Separate
verified facts from allegations."""

    def build_query(self, topic: str) -> str:
        return (
            f"Investigate \"{topic}\". Who promotes it, how is it marketed, and what "
            f"complaints, legal actions or deceptive practices are documented?"
        )


class AuditorAgent(BaseAgent):
    """Counts the money: startup costs, recurring fees and margins."""

    name = "AuditorAgent"
    report_label = "AUDITOR"
    system_instruction = """You are a skeptical financial auditor.
Itemize the real costs of participating: startup capital, tools, subscriptions,
advertising, fees, refunds and time. Give numeric ranges and state your sources.
Be conservative; never repeat marketing claims as fact."""

    def build_query(self, topic: str) -> str:
        return (
            f"Audit the economics of \"{topic}\". List every upfront and hidden cost, "
            f"typical margins, and the realistic break-even timeline."
        )


class InsiderAgent(BaseAgent):
    """Collects first-hand stories from people who tried it."""

    name = "InsiderAgent"
    report_label = "INSIDER"
    system_instruction = """You are an industry insider who has seen many people try this.
Collect concrete participant stories, both successes and failures: background,
strategy, outcome and revenue. Mention affiliate programs that pay participants
or writers, with commission terms."""

    def build_query(self, topic: str) -> str:
        return (
            f"Find real case studies of people who tried \"{topic}\": who won, who lost, "
            f"and why. Include affiliate programs connected to it."
        )


class StatAgent(BaseAgent):
    """Gathers hard market statistics."""

    name = "StatAgent"
    report_label = "STATISTICIAN"
    system_instruction = """You are a market statistician.
Report failure rates, median and mean earnings, market size, growth and
saturation. Every figure needs a value, a unit and a source or context line.
Flag numbers you could not verify."""

    def build_query(self, topic: str) -> str:
        return (
            f"Provide the key market statistics for \"{topic}\": failure rates, "
            f"earnings distribution, market size and saturation."
        )


AGENT_TYPES: dict[str, type[BaseAgent]] = {
    "detective": DetectiveAgent,
    "auditor": AuditorAgent,
    "insider": InsiderAgent,
    "statistician": StatAgent,
}

DEFAULT_AGENT_ORDER = ["detective", "auditor", "insider", "statistician"]


def default_agents(
    client: ServiceClient,
    *,
    model: str | None = None,
    use_search: bool = True,
) -> list[BaseAgent]:
    """Create the four research agents in their fixed report order."""
    return [
        AGENT_TYPES[key](client, model=model, use_search=use_search)
        for key in DEFAULT_AGENT_ORDER
    ]
