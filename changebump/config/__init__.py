"""Configuration Management Package"""

import json
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from changebump.git.reader import DEFAULT_FALLBACK_COUNT

# Environment overrides, applied by the CLI between flags and the config file
ENV_VERSION_FILE = "BUMP_VERSION_FILE"
ENV_CHANGELOG = "BUMP_CHANGELOG"


@dataclass
class Config:
    """User configuration with sensible defaults."""
    version_file: str = "pyproject.toml"
    changelog_file: str = "CHANGELOG.md"
    fallback_commit_count: int = DEFAULT_FALLBACK_COUNT
    max_file_display: int = 8  # Max files shown before collapsing list

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        for name in ("version_file", "changelog_file"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                warnings.append(f"Invalid {name} '{value}', using '{getattr(defaults, name)}'")
                setattr(self, name, getattr(defaults, name))

        for name in ("fallback_commit_count", "max_file_display"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                warnings.append(f"Invalid {name} '{value}', using {getattr(defaults, name)}")
                setattr(self, name, getattr(defaults, name))

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Manages loading and saving configuration.

    Lookup order: .bumprc in the project directory, then ~/.bumprc, then defaults.
    """

    CONFIG_FILENAME = ".bumprc"

    def __init__(self, project_dir: Path | None = None):
        self.project_dir = project_dir
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        local_path = (self.project_dir or Path.cwd()) / self.CONFIG_FILENAME
        if local_path.exists():
            self._config = self._load_from_file(local_path)
            self._config_path = local_path
            return self._config

        home_path = Path.home() / self.CONFIG_FILENAME
        if home_path.exists():
            self._config = self._load_from_file(home_path)
            self._config_path = home_path
            return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top level must be an object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def save(self, config: Config, global_config: bool = True) -> Path:
        path = Path.home() / self.CONFIG_FILENAME if global_config else (self.project_dir or Path.cwd()) / self.CONFIG_FILENAME
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


def load_config(project_dir: Path | None = None) -> tuple[Config, Optional[Path]]:
    """Load configuration for a project directory; returns (config, source path)."""
    manager = ConfigManager(project_dir)
    return manager.load(), manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "ENV_VERSION_FILE",
    "ENV_CHANGELOG",
]
