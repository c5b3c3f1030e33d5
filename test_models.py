"""
Orchestration Model Tests

Agent lifecycle transitions and settled outcomes.
"""

import pytest

from dossier.exceptions import AgentFailure
from dossier.orchestration import AgentOutcome, AgentState, AgentStatus


def test_state_starts_pending():
    state = AgentState(name="DetectiveAgent")

    assert state.status is AgentStatus.PENDING
    assert state.message is None
    assert not state.status.is_terminal


@pytest.mark.parametrize("terminal", [AgentStatus.COMPLETED, AgentStatus.FAILED])
def test_state_forward_transitions(terminal):
    state = AgentState(name="AuditorAgent")

    state.transition(AgentStatus.RUNNING)
    state.transition(terminal, message="done")

    assert state.status is terminal
    assert state.status.is_terminal
    assert state.message == "done"


@pytest.mark.parametrize(
    "path",
    [
        [AgentStatus.COMPLETED],
        [AgentStatus.PENDING],
        [AgentStatus.RUNNING, AgentStatus.RUNNING],
        [AgentStatus.RUNNING, AgentStatus.FAILED, AgentStatus.COMPLETED],
        [AgentStatus.RUNNING, AgentStatus.COMPLETED, AgentStatus.RUNNING],
    ],
)
def test_state_rejects_backward_or_skipped_transitions(path):
    state = AgentState(name="InsiderAgent")

    with pytest.raises(ValueError):
        for status in path:
            state.transition(status)


def test_outcome_success():
    outcome = AgentOutcome.success("StatAgent", "numbers")

    assert outcome.ok
    assert outcome.report == "numbers"
    assert outcome.error is None


def test_outcome_failure():
    error = AgentFailure("StatAgent failed: boom", agent_name="StatAgent")
    outcome = AgentOutcome.failure("StatAgent", error)

    assert not outcome.ok
    assert outcome.error is error
    assert outcome.report is None


def test_outcome_needs_exactly_one_side():
    with pytest.raises(ValueError):
        AgentOutcome(agent_name="StatAgent")
    with pytest.raises(ValueError):
        AgentOutcome(
            agent_name="StatAgent",
            report="x",
            error=AgentFailure("boom", agent_name="StatAgent"),
        )
