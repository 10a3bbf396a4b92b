"""
Configuration models for RepoCloner.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..infrastructure.error_handler import ConfigurationError


def default_parallelism() -> int:
    """Number of processing units on this host, never less than one."""

    return os.cpu_count() or 1


def _positive_int(env: Mapping[str, str], name: str) -> int:
    value = env[name]
    try:
        number = int(value)
    except ValueError as e:
        raise ConfigurationError(name, value) from e
    if number <= 0:
        raise ConfigurationError(name, value)
    return number


@dataclass
class ClonerConfig:
    """
    Process-wide settings resolved once at startup.

    Values here are defaults; the CLI and the Python API pass the resolved
    numbers explicitly into the orchestrator.
    """

    # Credentials (usually supplied on the command line)
    username: Optional[str] = None
    token: Optional[str] = None

    # Batch settings
    max_parallelism: int = field(default_factory=default_parallelism)
    max_retries: int = 3

    # GitHub API settings
    api_base_url: str = "https://api.github.com"
    user_agent: str = "RepoCloner/1.0"
    per_page: int = 100
    timeout: float = 30.0

    # External tool
    git_executable: str = "git"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ClonerConfig:
        """
        Build a config, letting environment variables override defaults.

        Raises:
            ConfigurationError: If a numeric override is not a positive integer
        """

        env = os.environ if environ is None else environ
        config = cls(
            username=env.get("GITHUB_USERNAME") or None,
            token=env.get("GITHUB_TOKEN") or None,
        )
        if env.get("REPOCLONER_PARALLELISM"):
            config.max_parallelism = _positive_int(env, "REPOCLONER_PARALLELISM")
        if env.get("REPOCLONER_RETRIES"):
            config.max_retries = _positive_int(env, "REPOCLONER_RETRIES")
        if env.get("REPOCLONER_GIT"):
            config.git_executable = env["REPOCLONER_GIT"]
        return config


__all__ = [
    "ClonerConfig",
    "default_parallelism",
]
