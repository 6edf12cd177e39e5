"""Configuration management for relnote."""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_URL = "https://api.github.com"
DEFAULT_MILESTONE_SUFFIX = " Release"  # For example, "1.7 Release".


class Config(BaseSettings):
    """Configuration settings for relnote."""

    model_config = SettingsConfigDict(env_prefix="RELNOTE_", case_sensitive=False)

    github_api_url: str = DEFAULT_API_URL
    github_token: Optional[str] = None
    owner: Optional[str] = None
    repo: Optional[str] = None
    org: Optional[str] = None
    milestone_suffix: str = DEFAULT_MILESTONE_SUFFIX
    timeout: int = 300
    workers: int = 1
    config_file: Optional[str] = None

    @field_validator('github_api_url')
    @classmethod
    def normalize_api_url(cls, v):
        """Ensure the API URL has a protocol and no trailing slash."""
        if v and not v.startswith(('http://', 'https://')):
            v = f"https://{v}"
        return v.rstrip('/')

    @field_validator('workers')
    @classmethod
    def check_workers(cls, v):
        if v < 1:
            raise ValueError("workers must be at least 1")
        return v

    @property
    def members_org(self) -> Optional[str]:
        """Organization whose members are not credited, defaults to the owner."""
        return self.org or self.owner


def load_json_config(config_path: str) -> dict:
    """Load configuration from JSON file.

    Args:
        config_path: Path to JSON configuration file

    Returns:
        Configuration dictionary
    """
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        raise ValueError(f"Error loading config file {config_path}: {e}")


def find_config_file() -> Optional[str]:
    """Find configuration file in common locations.

    Returns:
        Path to config file or None if not found
    """
    search_paths = [
        "relnote.json",
        ".relnote.json",
        "~/.relnote.json",
        "~/.config/relnote/config.json",
    ]

    for path_str in search_paths:
        path = Path(path_str).expanduser()
        if path.exists() and path.is_file():
            return str(path)

    return None


def get_config(config_file: Optional[str] = None) -> Config:
    """Load configuration from a JSON file and ``RELNOTE_*`` environment variables.

    An explicitly requested file that cannot be read raises ``ValueError``;
    a discovered one that is broken is ignored.

    Args:
        config_file: Optional path to JSON config file

    Returns:
        Configuration object
    """
    config_data = {}

    json_config_path = config_file or find_config_file()
    if json_config_path:
        try:
            config_data.update(load_json_config(json_config_path))
            config_data['config_file'] = json_config_path
        except ValueError:
            if config_file:
                raise

    # Environment variables override JSON config
    env_config = {
        name: os.getenv(f"RELNOTE_{name.upper()}")
        for name in Config.model_fields
    }
    env_config = {k: v for k, v in env_config.items() if v is not None}
    config_data.update(env_config)

    return Config(**config_data)


def create_sample_config(path: str = "relnote.json") -> None:
    """Create a sample configuration file.

    Args:
        path: Path where to create the sample config file
    """
    sample_config = {
        "github_api_url": DEFAULT_API_URL,
        "github_token": "your-github-token-here",
        "owner": "grpc",
        "repo": "grpc-go",
        "org": "grpc",
        "milestone_suffix": DEFAULT_MILESTONE_SUFFIX,
    }

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(sample_config, f, indent=2)
