"""
Research Agent Tests

Request construction, placeholder on empty output, error propagation.
"""

import asyncio

import pytest

from dossier.agents import (
    AuditorAgent,
    DetectiveAgent,
    InsiderAgent,
    StatAgent,
    default_agents,
)
from dossier.exceptions import FatalRequestError, TransientError
from dossier.llm import WEB_SEARCH_TOOL, ServiceClient
from dossier.testing import RecordingSleep, ScriptedBackend, StatusError


def _client(scripts=None, default="Mock report."):
    backend = ScriptedBackend(scripts, default=default)
    return ServiceClient(backend, sleep=RecordingSleep()), backend


def test_default_agents_fixed_order():
    client, _ = _client()
    agents = default_agents(client)

    assert [a.name for a in agents] == ["DetectiveAgent", "AuditorAgent", "InsiderAgent", "StatAgent"]
    assert [a.report_label for a in agents] == ["DETECTIVE", "AUDITOR", "INSIDER", "STATISTICIAN"]


def test_variants_differ_by_role_instruction():
    instructions = {
        cls.system_instruction for cls in (DetectiveAgent, AuditorAgent, InsiderAgent, StatAgent)
    }
    assert len(instructions) == 4


def test_request_embeds_role_topic_and_search_tool():
    client, _ = _client()
    agent = AuditorAgent(client, model="some-model")

    request = agent.build_request("dropshipping")

    assert request.model == "some-model"
    assert "dropshipping" in request.contents
    assert request.config.system_instruction == AuditorAgent.system_instruction
    assert request.config.tools == [WEB_SEARCH_TOOL]
    assert request.config.uses_web_search


def test_search_can_be_disabled():
    client, _ = _client()
    request = StatAgent(client, use_search=False).build_request("x")

    assert request.config.tools == []
    assert not request.config.uses_web_search


def test_investigate_returns_response_text():
    client, _ = _client({DetectiveAgent.system_instruction: ["detective findings"]})

    report = asyncio.run(DetectiveAgent(client).investigate("dropshipping"))

    assert report == "detective findings"


@pytest.mark.parametrize("empty", [None, ""])
def test_investigate_empty_response_placeholder(empty):
    client, _ = _client({InsiderAgent.system_instruction: [empty]})

    report = asyncio.run(InsiderAgent(client).investigate("dropshipping"))

    assert report == "[InsiderAgent] No data found."


def test_investigate_inherits_retry():
    client, backend = _client({StatAgent.system_instruction: [StatusError(429), "stats"]})

    report = asyncio.run(StatAgent(client).investigate("dropshipping"))

    assert report == "stats"
    assert backend.attempts[StatAgent.system_instruction] == 2


def test_investigate_does_not_catch_errors():
    client, _ = _client({DetectiveAgent.system_instruction: [StatusError(403)]})
    with pytest.raises(FatalRequestError):
        asyncio.run(DetectiveAgent(client).investigate("x"))

    client, _ = _client({AuditorAgent.system_instruction: [StatusError(500)]})
    with pytest.raises(TransientError):
        asyncio.run(AuditorAgent(client).investigate("x"))
