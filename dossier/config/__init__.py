"""Configuration system for backends, retry policy and orchestration."""

from .loader import (
    load_config,
    load_config_from_yaml,
    load_config_from_env,
    list_profiles,
    ProfileConfig,
    ServiceConfig,
    RetryConfig,
    ResearchConfig,
    AuthorConfig,
)
from .factory import (
    MockBackend,
    create_backend,
    create_service_client,
    create_agents,
    create_coordinator,
    create_author,
    create_from_profile,
)

__all__ = [
    # Loader
    "load_config",
    "load_config_from_yaml",
    "load_config_from_env",
    "list_profiles",
    "ProfileConfig",
    "ServiceConfig",
    "RetryConfig",
    "ResearchConfig",
    "AuthorConfig",
    # Factory
    "MockBackend",
    "create_backend",
    "create_service_client",
    "create_agents",
    "create_coordinator",
    "create_author",
    "create_from_profile",
]
