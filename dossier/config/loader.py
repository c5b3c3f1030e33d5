"""Configuration loader with Pydantic validation and env var expansion."""

import logging
import os
import re
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

AgentKind = Literal["detective", "auditor", "insider", "statistician"]

DEFAULT_CONFIG_PATH = Path(__file__).parent / "models.yaml"
DEFAULT_PROFILE = "dev"


class ServiceConfig(BaseModel):
    """Configuration for the generative backend."""

    backend: Literal["openrouter", "anthropic", "mock"] = "openrouter"
    model: str | None = None
    api_key: str | None = None
    base_url: str | None = None  # OpenRouter only


class RetryConfig(BaseModel):
    """Retry policy for the ServiceClient."""

    max_retries: int = Field(3, ge=0)
    initial_delay: float = Field(2.0, ge=0)  # Seconds, doubled per retry


class ResearchConfig(BaseModel):
    """Configuration for the research coordinator and its agents."""

    agents: list[AgentKind] = ["detective", "auditor", "insider", "statistician"]
    use_search: bool = True
    synthesis_model: str | None = None  # Falls back to service.model


class AuthorConfig(BaseModel):
    """Configuration for the draft generator."""

    model: str | None = None  # Falls back to service.model


class ProfileConfig(BaseModel):
    """Configuration profile containing all component configs."""

    service: ServiceConfig
    retry: RetryConfig = RetryConfig()
    research: ResearchConfig = ResearchConfig()
    author: AuthorConfig = AuthorConfig()


class ConfigFile(BaseModel):
    """Root configuration file structure."""

    profiles: dict[str, ProfileConfig]


def expand_env_vars(value: str) -> str:
    """Expand ${VAR} references in string with environment variables.

    Unset variables are left as-is.
    """
    if not isinstance(value, str):
        return value

    pattern = r"\$\{([^}]+)\}"

    def replacer(match):
        var_name = match.group(1)
        return os.environ.get(var_name, match.group(0))

    return re.sub(pattern, replacer, value)


def expand_env_vars_recursive(data):
    """Recursively expand env vars in nested dict/list structures."""
    if isinstance(data, dict):
        return {k: expand_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def _drop_unexpanded(data):
    """Treat values still holding an unexpanded ${VAR} as unset."""
    if isinstance(data, dict):
        return {
            k: _drop_unexpanded(v)
            for k, v in data.items()
            if not (isinstance(v, str) and re.fullmatch(r"\$\{[^}]+\}", v))
        }
    elif isinstance(data, list):
        return [_drop_unexpanded(item) for item in data]
    return data


def load_config_from_yaml(config_path: Path, profile_name: str) -> ProfileConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config YAML file
        profile_name: Name of profile to load

    Returns:
        ProfileConfig for the requested profile

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config is invalid
        KeyError: If profile doesn't exist
    """
    with open(config_path) as f:
        raw_data = yaml.safe_load(f)

    expanded_data = _drop_unexpanded(expand_env_vars_recursive(raw_data))

    config_file = ConfigFile(**expanded_data)

    if profile_name not in config_file.profiles:
        available = ", ".join(config_file.profiles.keys())
        raise KeyError(
            f"Profile '{profile_name}' not found. " f"Available profiles: {available}"
        )

    return config_file.profiles[profile_name]


def load_config_from_env() -> ProfileConfig:
    """Load configuration from environment variables (fallback mode).

    Returns:
        ProfileConfig constructed from environment variables
    """
    service = ServiceConfig(
        backend=os.environ.get("DOSSIER_BACKEND", "openrouter"),
        model=os.environ.get("OPENROUTER_DEFAULT_MODEL"),
        api_key=os.environ.get("OPENROUTER_API_KEY"),
        base_url=os.environ.get("OPENROUTER_BASE_URL"),
    )

    return ProfileConfig(service=service)


def load_config(
    profile: str | None = None,
    config_path: Path | None = None,
) -> ProfileConfig:
    """Load configuration from YAML file or environment variables.

    Tries the YAML profile file first and falls back to environment
    variables if the file is missing or unreadable.

    Args:
        profile: Profile name to load. If None, uses DOSSIER_PROFILE env var
                or "dev" as default.
        config_path: Path to config file. If None, uses the models.yaml
                    shipped next to this module.

    Returns:
        ProfileConfig with all component configurations

    Raises:
        KeyError: If requested profile doesn't exist in the YAML file
    """
    if profile is None:
        profile = os.environ.get("DOSSIER_PROFILE", DEFAULT_PROFILE)

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        logger.warning(f"Config file {config_path} not found, using environment variables")
        return load_config_from_env()

    try:
        return load_config_from_yaml(config_path, profile)
    except KeyError:
        raise
    except Exception as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.warning("Falling back to environment variables...")
        return load_config_from_env()


def list_profiles(config_path: Path | None = None) -> dict[str, ProfileConfig]:
    """Return every profile defined in the YAML file."""
    with open(config_path or DEFAULT_CONFIG_PATH) as f:
        raw_data = yaml.safe_load(f)
    return ConfigFile(**_drop_unexpanded(expand_env_vars_recursive(raw_data))).profiles
