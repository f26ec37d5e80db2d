"""Configuration management for loadgen.

Centralizes all environment variable access. Worker code never reads the
environment; it receives a settings object built here.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loadgen.core.errors import ConfigError

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"
DEFAULT_OWNER = "spraints"
DEFAULT_REPO = "silver-eureka"

DEFAULT_TICK_URL = "https://github.com/spraints/silver-eureka"
REVIEW_LAB_URL = "https://spraints.review-lab.github.com/spraints/silver-eureka"
GARAGE_URL = "https://garage.github.com/spraints/silver-eureka"

TOKEN_FILE_PREFIX = "GITHUB_TOKEN="


class Config:
    """Application configuration loaded from environment variables."""

    @staticmethod
    def github_token() -> Optional[str]:
        """Get GitHub token from environment, falling back to ~/.github-token."""
        return os.environ.get("GITHUB_TOKEN") or read_token_file()

    @staticmethod
    def github_api_url() -> str:
        """Get GitHub API base URL from environment."""
        return os.environ.get("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/")

    @staticmethod
    def owner() -> str:
        return os.environ.get("LOADGEN_OWNER", DEFAULT_OWNER)

    @staticmethod
    def repo() -> str:
        return os.environ.get("LOADGEN_REPO", DEFAULT_REPO)

    @staticmethod
    def is_configured() -> bool:
        """Check if all required configuration is present."""
        return not Config.get_missing_config()

    @staticmethod
    def get_missing_config() -> list[str]:
        """Get list of missing required configuration keys."""
        missing = []
        if not Config.github_token():
            missing.append("GITHUB_TOKEN")
        return missing


def read_token_file(path: Optional[Path] = None) -> Optional[str]:
    """Read a token from a ``GITHUB_TOKEN=<value>`` line in ~/.github-token.

    Returns None when the file is missing or holds no such line.
    """
    if path is None:
        path = Path.home() / ".github-token"

    try:
        data = path.read_text()
    except OSError:
        return None

    start = data.find(TOKEN_FILE_PREFIX)
    if start == -1:
        return None

    value = data[start + len(TOKEN_FILE_PREFIX):].split("\n", 1)[0].strip()
    return value or None


@dataclass(frozen=True)
class PublisherSettings:
    """Everything the batch publisher and its HTTP client need."""

    token: str
    api_url: str = DEFAULT_API_URL
    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    object_count: int = 100
    batch_size: int = 10
    concurrency: int = 16  # <= 0 means unbounded
    timeout: float = 30.0
    api_version: str = DEFAULT_API_VERSION

    def __post_init__(self):
        if not self.token:
            raise ConfigError("GITHUB_TOKEN must be set.")
        if self.object_count < 0:
            raise ConfigError(f"object_count must be >= 0, got {self.object_count}")
        if self.batch_size < 1:
            raise ConfigError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be > 0, got {self.timeout}")

    @property
    def git_data_url(self) -> str:
        """Base URL of the repository's Git data endpoints."""
        return f"{self.api_url.rstrip('/')}/repos/{self.owner}/{self.repo}/git"

    @classmethod
    def from_env(cls, **overrides) -> "PublisherSettings":
        """Build settings from the environment, with explicit overrides winning.

        Raises:
            ConfigError: If no token is available
        """
        values = {
            "token": Config.github_token(),
            "api_url": Config.github_api_url(),
            "owner": Config.owner(),
            "repo": Config.repo(),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass(frozen=True)
class TickSettings:
    """Options for the clone/commit/push tick utility."""

    token: str
    url: str = DEFAULT_TICK_URL
    branch: str = "testing-123"
    user: str = "spraints"
    show_progress: bool = False
    verbose: bool = False

    def __post_init__(self):
        if not self.token:
            raise ConfigError("GITHUB_TOKEN must be set.")
        if not self.branch:
            raise ConfigError("branch must not be empty")

    @classmethod
    def from_env(cls, **overrides) -> "TickSettings":
        values = {"token": Config.github_token()}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
