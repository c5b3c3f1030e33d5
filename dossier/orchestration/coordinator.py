"""
Research Coordinator: fan-out to every research agent, fan-in to one
validated research dossier.

Agent failures degrade gracefully into placeholder reports; only a synthesis
result that cannot be parsed or validated fails the run.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import TYPE_CHECKING, Callable

from ..exceptions import AgentFailure, ServiceError
from ..llm.protocols import JSON_MIME_TYPE, GenerationConfig, GenerationRequest
from ..llm.structured import parse_structured
from ..settings import OPENROUTER_DEFAULT_MODEL
from .models import AgentOutcome, AgentState, AgentStatus, SynthesizedResearch
from .schemas import RESEARCH_SCHEMA

if TYPE_CHECKING:
    from ..agents.base import BaseAgent
    from ..llm.client import ServiceClient

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[list[AgentState]], None]

RESEARCH_SYSTEM_PROMPT = """You are the lead analyst compiling a forensic research dossier.
You receive reports from several independent investigators. They may disagree,
overlap or be missing. Reconcile them into one object:
- summary: a blunt, factual overview of the topic
- ethicalRating: 0 (predatory) to 10 (entirely ethical)
- profitPotential: who realistically profits and how much
- marketStats and hiddenCosts: labelled figures with context
- caseStudies: concrete WINNER and LOSER stories
- affiliates: programs paying PARTICIPANTs or WRITERs
Prefer conservative numbers. Never invent precision the reports do not support."""

SYNTHESIS_STAGE = "research synthesis"


def placeholder_report(agent_name: str) -> str:
    """Report text substituted for an agent that failed."""
    return f"[{agent_name} Error] Failed to retrieve data. Proceed with caution."


class ResearchCoordinator:
    """
    Runs all research agents concurrently and synthesizes their reports.

    Flow per run:
    1. One AgentState per agent, all PENDING
    2. Every agent launched at once (RUNNING)
    3. Settle-all: each agent ends COMPLETED or FAILED; failures become
       placeholder reports, never exceptions
    4. Reports joined in agent-list order
    5. Exactly one structured synthesis request
    6. Fence stripping, JSON parsing and schema validation

    Usage:
        coordinator = ResearchCoordinator(client)
        research = await coordinator.execute("dropshipping", on_progress=print)
    """

    def __init__(
        self,
        client: ServiceClient,
        agents: list[BaseAgent] | None = None,
        *,
        model: str | None = None,
    ):
        """
        Initialize the coordinator.

        Args:
            client: Shared ServiceClient, also used by the agents
            agents: Agents in report order. Defaults to the four research variants.
            model: Model used for the synthesis call
        """
        if agents is None:
            from ..agents import default_agents
            agents = default_agents(client)

        if not agents:
            raise ValueError("ResearchCoordinator needs at least one agent")

        self.client = client
        self.agents = list(agents)
        self.model = model or OPENROUTER_DEFAULT_MODEL

    async def execute(
        self,
        topic: str,
        on_progress: ProgressCallback | None = None,
    ) -> SynthesizedResearch:
        """
        Research `topic` with every agent and return the validated dossier.

        Args:
            topic: Research topic
            on_progress: Called with a snapshot of all agent states after
                every status change. Call order follows real completion order.

        Returns:
            The validated SynthesizedResearch

        Raises:
            SynthesisValidationError: If the synthesis output is not valid
            FatalRequestError, TransientError: If the synthesis call itself fails
        """
        logger.info(f"Starting research on '{topic}' with {len(self.agents)} agents")

        reports = await self.gather_reports(topic, on_progress)
        research = await self.synthesize(topic, reports)

        logger.info(
            f"Research on '{topic}' synthesized: {len(research.market_stats)} stats, "
            f"{len(research.case_studies)} case studies"
        )
        return research

    async def gather_reports(
        self,
        topic: str,
        on_progress: ProgressCallback | None = None,
    ) -> list[str]:
        """
        Run every agent concurrently and wait for all of them to settle.

        Returns:
            One report per agent, in agent-list order. Failed agents are
            represented by their placeholder report.
        """
        states = [AgentState(name=agent.name) for agent in self.agents]
        outcomes: list[AgentOutcome | None] = [None] * len(self.agents)

        def emit() -> None:
            if on_progress is None:
                return
            snapshot = [dataclasses.replace(state) for state in states]
            try:
                on_progress(snapshot)
            except Exception as e:
                logger.warning(f"Progress callback raised: {e}")

        async def run_agent(index: int, agent: BaseAgent) -> None:
            states[index].transition(AgentStatus.RUNNING)
            emit()

            try:
                report = await agent.investigate(topic)
            except Exception as e:
                logger.error(f"{agent.name} failed: {e}")
                failure = AgentFailure(f"{agent.name} failed: {e}", agent_name=agent.name)
                failure.__cause__ = e
                outcomes[index] = AgentOutcome.failure(agent.name, failure)
                states[index].transition(AgentStatus.FAILED, message=str(e))
                emit()
                return

            outcomes[index] = AgentOutcome.success(agent.name, report)
            states[index].transition(AgentStatus.COMPLETED)
            emit()

        emit()
        await asyncio.gather(*(run_agent(i, agent) for i, agent in enumerate(self.agents)))

        failed = [o.agent_name for o in outcomes if o is not None and not o.ok]
        if failed:
            logger.warning(f"{len(failed)}/{len(self.agents)} agents failed: {', '.join(failed)}")

        return [
            outcome.report if outcome.ok else placeholder_report(outcome.agent_name)
            for outcome in outcomes
        ]

    def build_synthesis_prompt(self, topic: str, reports: list[str]) -> str:
        """Join the reports, in agent order, into the synthesis prompt."""
        dossier = "\n".join(
            f"{agent.report_label} REPORT: {report}"
            for agent, report in zip(self.agents, reports)
        )
        return f"""Analyze the following FORENSIC DOSSIER on "{topic}".
Synthesize the conflicting reports into a single, cohesive research object.
If reports are missing or contain errors, estimate conservatively based on the topic context.

FORENSIC DOSSIER:
{dossier}"""

    async def synthesize(self, topic: str, reports: list[str]) -> SynthesizedResearch:
        """
        Issue the single structured synthesis request and validate the result.

        Raises:
            SynthesisValidationError: If the output is not valid JSON or
                does not match the research schema
            FatalRequestError, TransientError: If the call itself fails;
                `details["stage"]` names this stage
        """
        if len(reports) != len(self.agents):
            raise ValueError(f"Expected {len(self.agents)} reports, got {len(reports)}")

        request = GenerationRequest(
            model=self.model,
            contents=self.build_synthesis_prompt(topic, reports),
            config=GenerationConfig(
                system_instruction=RESEARCH_SYSTEM_PROMPT,
                response_mime_type=JSON_MIME_TYPE,
                response_schema=RESEARCH_SCHEMA,
            ),
        )

        logger.info(f"Synthesizing {len(reports)} reports on '{topic}'")
        try:
            response = await self.client.generate(request)
        except ServiceError as e:
            e.details["stage"] = SYNTHESIS_STAGE
            raise

        return parse_structured(response.text, SynthesizedResearch, stage=SYNTHESIS_STAGE)
