"""Configuration for the resolver.

Hierarchical configuration with the following priority order
(highest to lowest):
1. Runtime Parameters (passed directly to ``load_config``)
2. Environment Variables (prefixed with LOADERCHAIN_)
3. Project Config ([tool.loaderchain] in pyproject.toml)
4. Defaults (hardcoded fallbacks)
"""

import logging
import os
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

_TRUTHY = ("true", "1", "yes", "on")


class ResolverConfig(BaseModel):
    """Configuration model for ``Resolver`` instances."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Level of the loaderchain loggers",
    )

    empty_resources_fall_through: bool = Field(
        default=True,
        description=(
            "Treat an empty resource list as absent and try the next provider. "
            "When False only a None result falls through."
        ),
    )

    rich_logging: bool = Field(
        default=True,
        description="Use a Rich handler instead of a plain stderr handler",
    )

    model_config = {
        "extra": "forbid",
    }

    @property
    def level(self) -> int:
        """Numeric logging level."""
        return int(getattr(logging, self.log_level))


def _load_from_pyproject_toml() -> dict[str, Any]:
    """Load configuration from [tool.loaderchain] section in pyproject.toml.

    Returns:
        Dictionary with config values, or empty dict if not found.
    """
    import tomllib
    from pathlib import Path

    current_dir = Path.cwd()
    for path in [current_dir] + list(current_dir.parents):
        pyproject_path = path / "pyproject.toml"
        if pyproject_path.exists():
            try:
                with open(pyproject_path, "rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError):
                continue
            if "tool" in data and "loaderchain" in data["tool"]:
                result: dict[str, Any] = dict(data["tool"]["loaderchain"])
                return result

    return {}


def _load_from_env() -> dict[str, Any]:
    """Load configuration from environment variables (prefixed with LOADERCHAIN_).

    Returns:
        Dictionary with config values from environment.
    """
    config: dict[str, Any] = {}

    env_mapping = {
        "LOADERCHAIN_LOG_LEVEL": "log_level",
        "LOADERCHAIN_EMPTY_RESOURCES_FALL_THROUGH": "empty_resources_fall_through",
        "LOADERCHAIN_RICH_LOGGING": "rich_logging",
    }

    for env_var, config_key in env_mapping.items():
        value = os.getenv(env_var)
        if value is None:
            continue
        if config_key == "log_level":
            config[config_key] = value.upper()
        else:
            config[config_key] = value.lower() in _TRUTHY

    return config


def load_config(
    log_level: Optional[str] = None,
    empty_resources_fall_through: Optional[bool] = None,
    rich_logging: Optional[bool] = None,
) -> ResolverConfig:
    """Load configuration with hierarchical priority.

    Priority order (highest to lowest):
    1. Runtime Parameters (passed to this function)
    2. Environment Variables (LOADERCHAIN_*)
    3. Project Config ([tool.loaderchain] in pyproject.toml)
    4. Defaults (hardcoded in ResolverConfig)

    Args:
        log_level: Level name for the loaderchain loggers.
        empty_resources_fall_through: Whether an empty resource list falls
            through to the next provider.
        rich_logging: Use Rich log formatting.

    Returns:
        ResolverConfig instance with merged configuration.
    """
    runtime_config: dict[str, Any] = {}
    if log_level is not None:
        runtime_config["log_level"] = log_level.upper()
    if empty_resources_fall_through is not None:
        runtime_config["empty_resources_fall_through"] = empty_resources_fall_through
    if rich_logging is not None:
        runtime_config["rich_logging"] = rich_logging

    merged_config = ResolverConfig().model_dump()
    merged_config.update(_load_from_pyproject_toml())
    merged_config.update(_load_from_env())
    merged_config.update(runtime_config)

    return ResolverConfig(**merged_config)
