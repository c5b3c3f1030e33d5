"""
Configuration System Tests

Tests for the YAML configuration loader and factory functions.
"""

import asyncio
from pathlib import Path

import pytest

from dossier.config import (
    MockBackend,
    ProfileConfig,
    ServiceConfig,
    create_agents,
    create_backend,
    create_from_profile,
    create_service_client,
    list_profiles,
    load_config,
    load_config_from_env,
    load_config_from_yaml,
)
from dossier.config.loader import DEFAULT_CONFIG_PATH, ResearchConfig, RetryConfig
from dossier.orchestration import GenerationSettings, SynthesizedResearch, ValidatedDraft


def test_load_test_profile_from_yaml():
    profile = load_config_from_yaml(DEFAULT_CONFIG_PATH, "test")

    assert profile.service.backend == "mock"
    assert profile.retry.max_retries == 3
    assert profile.retry.initial_delay == 0.0
    assert profile.research.use_search is False
    assert profile.research.agents == ["detective", "auditor", "insider", "statistician"]
    print("\n[PASS] test profile loaded correctly")


def test_load_dev_profile_without_api_key(monkeypatch):
    """An unset ${VAR} is treated as a missing value, not a literal string."""
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)

    profile = load_config_from_yaml(DEFAULT_CONFIG_PATH, "dev")

    assert profile.service.backend == "openrouter"
    assert profile.service.api_key is None
    assert profile.service.base_url == "https://openrouter.ai/api/v1"


def test_env_vars_expanded(tmp_path, monkeypatch):
    monkeypatch.setenv("DOSSIER_TEST_KEY", "sk-test-123")
    config_path = tmp_path / "models.yaml"
    config_path.write_text(
        "profiles:\n"
        "  custom:\n"
        "    service:\n"
        "      backend: openrouter\n"
        "      api_key: ${DOSSIER_TEST_KEY}\n"
        "    research:\n"
        "      agents: [statistician, detective]\n"
    )

    profile = load_config_from_yaml(config_path, "custom")

    assert profile.service.api_key == "sk-test-123"
    assert profile.research.agents == ["statistician", "detective"]
    assert profile.retry == RetryConfig()


def test_unknown_profile_raises():
    with pytest.raises(KeyError):
        load_config(profile="does-not-exist")


def test_profile_from_environment(monkeypatch):
    monkeypatch.setenv("DOSSIER_PROFILE", "test")

    profile = load_config()

    assert profile.service.backend == "mock"


def test_default_profile_is_dev(monkeypatch):
    monkeypatch.delenv("DOSSIER_PROFILE", raising=False)

    profile = load_config()

    assert profile.service.backend == "openrouter"
    assert profile.retry.max_retries == 3


def test_missing_file_falls_back_to_env(tmp_path, monkeypatch):
    monkeypatch.setenv("DOSSIER_BACKEND", "mock")

    profile = load_config(profile="test", config_path=tmp_path / "missing.yaml")

    assert profile.service.backend == "mock"
    assert profile.retry == RetryConfig()


def test_invalid_file_falls_back_to_env(tmp_path, monkeypatch):
    monkeypatch.delenv("DOSSIER_BACKEND", raising=False)
    config_path = tmp_path / "models.yaml"
    config_path.write_text("profiles:\n  broken:\n    retry:\n      max_retries: -1\n")

    profile = load_config(profile="broken", config_path=config_path)

    assert profile == load_config_from_env()
    assert profile.service.backend == "openrouter"


def test_retry_config_rejects_negative_values():
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        RetryConfig(max_retries=-1)
    with pytest.raises(ValidationError):
        RetryConfig(initial_delay=-0.5)


def test_list_profiles():
    profiles = list_profiles()

    assert {"dev", "quality", "anthropic", "test"} <= set(profiles)
    assert profiles["quality"].author.model == "google/gemini-2.5-pro"


def test_factory_create_backend_mock():
    backend = create_backend(ServiceConfig(backend="mock"))

    assert isinstance(backend, MockBackend)


def test_factory_agents_follow_configured_order():
    client = create_service_client(MockBackend(), RetryConfig())
    agents = create_agents(
        client,
        ResearchConfig(agents=["statistician", "insider"], use_search=False),
        model="mock",
    )

    assert [a.name for a in agents] == ["StatAgent", "InsiderAgent"]
    assert all(a.use_search is False for a in agents)


def test_factory_service_client_uses_retry_config():
    client = create_service_client(MockBackend(), RetryConfig(max_retries=5, initial_delay=0.5))

    assert client.max_retries == 5
    assert client.initial_delay == 0.5


def test_factory_create_from_profile():
    """Full research + draft run against the offline mock backend."""
    profile = load_config(profile="test")
    backend, coordinator, author = create_from_profile(profile)

    async def run():
        async with backend:
            research = await coordinator.execute("dropshipping")
            draft = await author.generate_draft("dropshipping", research, GenerationSettings())
        return research, draft

    research, draft = asyncio.run(run())

    assert isinstance(research, SynthesizedResearch)
    assert isinstance(draft, ValidatedDraft)
    assert len(coordinator.agents) == 4
    # four agent reports, one synthesis, one draft
    assert len(backend.requests) == 6
    assert all(r.config.tools == [] for r in backend.requests)
    print("\n[PASS] create_from_profile works correctly")


def test_profile_config_requires_service():
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        ProfileConfig()


def main():
    """Run all tests."""
    test_load_test_profile_from_yaml()
    test_unknown_profile_raises()
    test_list_profiles()
    test_factory_create_from_profile()
    print("\nALL TESTS PASSED!")


if __name__ == "__main__":
    main()
