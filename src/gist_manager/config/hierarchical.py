"""
Hierarchical configuration for Gist Manager.

Loads settings.json files (JSON with comments) from the user and project
configuration directories, overlays GIST_MANAGER_* environment variables
and merges everything into one GistManagerSettings instance.
"""

import os
from pathlib import Path
from typing import Dict, Any, List, Optional
import logging
from enum import Enum
from dataclasses import dataclass, field

import commentjson
from pydantic import ValidationError

from ..core.errors import ConfigurationError
from .settings import GistManagerSettings

logger = logging.getLogger(__name__)

ENV_PREFIX = "GIST_MANAGER_"


class SettingScope(Enum):
    """Configuration scope levels, lowest precedence first."""
    DEFAULT = "default"
    USER = "user"
    PROJECT = "project"
    ENVIRONMENT = "environment"


PRECEDENCE_ORDER = [
    SettingScope.DEFAULT,
    SettingScope.USER,
    SettingScope.PROJECT,
    SettingScope.ENVIRONMENT,
]


@dataclass
class SettingsFile:
    """Represents a settings source with its path and content."""
    path: Path
    settings: Dict[str, Any]
    scope: SettingScope
    exists: bool = True
    errors: List[str] = field(default_factory=list)


class HierarchicalConfigLoader:
    """
    Merges settings from multiple sources.

    Configuration precedence (later overrides earlier):
    1. Default values
    2. User settings (~/.config/gist-manager/settings.json)
    3. Project settings (.gist-manager/settings.json, searched upward)
    4. Environment variables (GIST_MANAGER_*)
    """

    CONFIG_DIR_NAME = ".gist-manager"
    SETTINGS_FILE_NAME = "settings.json"

    def __init__(self, working_directory: Optional[Path] = None):
        self.working_directory = Path(working_directory or Path.cwd()).resolve()
        self._settings_files: Dict[SettingScope, SettingsFile] = {}

    def load_all_settings(self) -> Dict[str, Any]:
        """Load and merge all configuration sources.

        Returns:
            Merged configuration dictionary
        """
        self._load_default_settings()
        self._settings_files[SettingScope.USER] = self._load_settings_file(
            self._get_user_config_dir() / self.SETTINGS_FILE_NAME, SettingScope.USER
        )
        self._settings_files[SettingScope.PROJECT] = self._load_settings_file(
            self._project_settings_path(), SettingScope.PROJECT
        )
        self._load_environment_variables()

        merged: Dict[str, Any] = {}
        for scope in PRECEDENCE_ORDER:
            settings_file = self._settings_files.get(scope)
            if settings_file and settings_file.settings:
                merged.update(settings_file.settings)
        return merged

    def build_settings(self) -> GistManagerSettings:
        """Load every source and validate the merged result.

        Raises:
            ConfigurationError: If the merged values do not validate
        """
        try:
            return GistManagerSettings(**self.load_all_settings())
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}", original_error=e) from e

    def get_all_settings_files(self) -> Dict[SettingScope, SettingsFile]:
        return self._settings_files.copy()

    def get_setting_sources(self, key: str) -> Dict[str, Any]:
        """Return the value a key has in each scope that defines it."""
        return {
            scope.value: settings_file.settings[key]
            for scope, settings_file in self._settings_files.items()
            if key in settings_file.settings
        }

    def save_setting(self, scope: SettingScope, key: str, value: Any) -> Path:
        """Write one key into the settings file of a scope.

        Args:
            scope: USER or PROJECT
            key: Setting name
            value: Raw value; validated when settings are next built

        Returns:
            Path of the written settings file

        Raises:
            ValueError: If the scope is not file backed or the key is unknown
        """
        if scope not in (SettingScope.USER, SettingScope.PROJECT):
            raise ValueError(f"Cannot save to {scope.value.upper()} scope")
        if key not in GistManagerSettings.model_fields:
            raise ValueError(f"Unknown setting '{key}'")

        if scope == SettingScope.USER:
            path = self._get_user_config_dir() / self.SETTINGS_FILE_NAME
        else:
            path = self.working_directory / self.CONFIG_DIR_NAME / self.SETTINGS_FILE_NAME

        current = self._load_settings_file(path, scope)
        if current.errors:
            raise ValueError(current.errors[0])
        current.settings[key] = value

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            commentjson.dump(current.settings, f, indent=2, ensure_ascii=False)

        self._settings_files[scope] = SettingsFile(path=path, settings=current.settings, scope=scope)
        logger.info(f"Saved {key} to {scope.value} settings: {path}")
        return path

    def _load_default_settings(self) -> None:
        defaults = {
            name: info.default
            for name, info in GistManagerSettings.model_fields.items()
            if info.default_factory is None
        }
        self._settings_files[SettingScope.DEFAULT] = SettingsFile(
            path=Path("(default)"),
            settings=defaults,
            scope=SettingScope.DEFAULT,
        )

    def _load_environment_variables(self) -> None:
        env_settings = {}
        for env_var, value in os.environ.items():
            if not env_var.upper().startswith(ENV_PREFIX):
                continue
            key = env_var[len(ENV_PREFIX):].lower()
            if key in GistManagerSettings.model_fields:
                env_settings[key] = value

        self._settings_files[SettingScope.ENVIRONMENT] = SettingsFile(
            path=Path("(environment)"),
            settings=env_settings,
            scope=SettingScope.ENVIRONMENT,
            exists=bool(env_settings),
        )

    def _load_settings_file(self, file_path: Path, scope: SettingScope) -> SettingsFile:
        settings_file = SettingsFile(
            path=file_path,
            settings={},
            scope=scope,
            exists=file_path.exists()
        )

        if not settings_file.exists:
            logger.debug(f"Settings file not found: {file_path}")
            return settings_file

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                parsed = commentjson.loads(f.read())
        except Exception as e:
            error_msg = f"Invalid JSON in {file_path}: {e}"
            logger.error(error_msg)
            settings_file.errors.append(error_msg)
            return settings_file

        if not isinstance(parsed, dict):
            settings_file.errors.append(f"Settings in {file_path} must be a JSON object")
            return settings_file

        settings_file.settings = parsed
        logger.debug(f"Loaded settings from {scope.value}: {file_path}")
        return settings_file

    def _get_user_config_dir(self) -> Path:
        # XDG_CONFIG_HOME if set, otherwise ~/.config
        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config_home:
            return Path(xdg_config_home) / "gist-manager"
        return Path.home() / ".config" / "gist-manager"

    def _project_settings_path(self) -> Path:
        current_dir = self.working_directory

        while current_dir != current_dir.parent:
            config_dir = current_dir / self.CONFIG_DIR_NAME
            if config_dir.is_dir():
                return config_dir / self.SETTINGS_FILE_NAME

            # Stop at git repository root
            if (current_dir / ".git").exists():
                break

            current_dir = current_dir.parent

        return self.working_directory / self.CONFIG_DIR_NAME / self.SETTINGS_FILE_NAME

    def get_config_summary(self) -> Dict[str, Any]:
        """Summarise every loaded source and its errors."""
        summary: Dict[str, Any] = {
            "sources": {},
            "errors": [],
            "working_directory": str(self.working_directory)
        }

        for scope, settings_file in self._settings_files.items():
            summary["sources"][scope.value] = {
                "path": str(settings_file.path),
                "exists": settings_file.exists,
                "settings_count": len(settings_file.settings),
                "errors": settings_file.errors
            }
            summary["errors"].extend(settings_file.errors)

        return summary
