"""
Configuration settings for Gist Manager.

This module provides configuration management using Pydantic settings
with support for environment variables, .env files and hierarchical
settings files.
"""

import os
from typing import Optional, Dict, Any
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GistManagerSettings(BaseSettings):
    """
    Main configuration settings for Gist Manager.

    Settings are loaded from multiple sources in order of preference:
    1. Environment variables (prefixed with GIST_MANAGER_)
    2. Configuration files (.env, settings.json)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="GIST_MANAGER_",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    api_base_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the GitHub REST API"
    )

    api_version: str = Field(
        default="2022-11-28",
        description="Pinned GitHub REST API version"
    )

    token: Optional[str] = Field(
        default=None,
        description="GitHub token with the gist scope"
    )

    token_scope: str = Field(
        default="gist",
        description="Permission scope requested for the token"
    )

    # Authentication sources
    use_gh_cli: bool = Field(
        default=True,
        description="Ask the GitHub CLI for a token when none is configured"
    )

    interactive_login: bool = Field(
        default=True,
        description="Prompt for a token when no other source yields one"
    )

    timeout: Optional[float] = Field(
        default=None,
        description="Request timeout in seconds (None disables it)",
        gt=0
    )

    # UI Configuration
    theme: str = Field(
        default="monokai",
        description="Syntax highlighting theme for opened gists"
    )

    default_filename: str = Field(
        default="untitled.txt",
        description="Filename offered when creating a gist from an unsaved view"
    )

    # Directory Configuration
    config_dir: Path = Field(
        default_factory=lambda: Path.home() / ".config" / "gist-manager",
        description="Configuration directory path"
    )

    # Logging Configuration
    log_level: str = Field(
        default="WARNING",
        description="Logging level"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    @field_validator("theme")
    @classmethod
    def validate_theme(cls, v: str) -> str:
        """Validate theme name."""
        valid_themes = {
            "monokai", "dracula", "github-dark", "one-dark", "nord",
            "solarized-dark", "solarized-light", "default", "ansi_dark", "ansi_light"
        }
        if v not in valid_themes:
            raise ValueError(f"Invalid theme '{v}'. Valid themes: {', '.join(sorted(valid_themes))}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level '{v}'. Valid levels: {', '.join(sorted(valid_levels))}")
        return v_upper

    @field_validator("default_filename")
    @classmethod
    def validate_default_filename(cls, v: str) -> str:
        """Reject blank default filenames."""
        if not v.strip():
            raise ValueError("Default filename cannot be empty")
        return v

    def ensure_directories(self) -> None:
        """Ensure the configuration directory exists."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

    @property
    def effective_token(self) -> Optional[str]:
        """Configured token, falling back to GITHUB_TOKEN."""
        return self.token or os.environ.get("GITHUB_TOKEN") or None

    @property
    def effective_log_level(self) -> str:
        """Log level honouring the debug switch."""
        return "DEBUG" if self.debug else self.log_level

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary, excluding sensitive data."""
        data = self.model_dump()
        # Mask sensitive data
        if data.get("token"):
            data["token"] = "***masked***"
        return data


def get_settings(**overrides: Any) -> GistManagerSettings:
    """Get the current Gist Manager settings."""
    return GistManagerSettings(**overrides)
