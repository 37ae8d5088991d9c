"""
Interface to configuration as persisted in .yaml file.
"""
from __future__ import annotations

from logging import Logger
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError, field_validator

from ..core import Client, ConfigError
from .yaml_model import BaseYamlModel

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigStore",
]

CONFIG_FILENAME = "docbase-sync.yaml"
"""
Default config file, relative to the current folder.
"""


class Config(BaseYamlModel):
    """
    Encapsulates DocBase credentials. Both fields are required for an
    operation, but either may be empty while being set up.
    """

    access_token: str = ""
    """
    DocBase access token.
    """

    team_id: str = ""
    """
    DocBase team id, i.e. the subdomain of the team's DocBase URL.
    """

    @field_validator("access_token", "team_id", mode="before")
    def validate_str(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value.strip() if isinstance(value, str) else value

    def merge(
        self, *, access_token: str | None = None, team_id: str | None = None
    ) -> Config:
        """
        Get copy with the given values taking precedence.
        """
        return Config(
            access_token=access_token or self.access_token,
            team_id=team_id or self.team_id,
        )

    def require(self):
        """
        Ensure both token and team id are set.

        :raises ConfigError: Token or team id not set
        """
        missing = [
            name
            for name, value in [
                ("access token", self.access_token),
                ("team id", self.team_id),
            ]
            if not value
        ]

        if missing:
            raise ConfigError(f"DocBase {' and '.join(missing)} not configured")

    def create_client(self, *, logger: Logger | None = None) -> Client:
        """
        Get client from this config's fields.

        :raises ConfigError: Token or team id not set
        """
        self.require()
        return Client(self.access_token, self.team_id, logger=logger)


class ConfigStore:
    """
    Loads and saves {obj}`Config` at a fixed path.
    """

    path: Path

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> Config:
        """
        Load config, or get an empty config if the file doesn't exist yet.

        :raises ConfigError: File can't be parsed
        """
        if not self.path.exists():
            return Config()

        if not self.path.is_file():
            raise ConfigError(f"Config path is not a file: '{self.path}'")

        try:
            return Config.load_yaml(self.path)
        except (ValueError, ValidationError, yaml.YAMLError) as e:
            raise ConfigError(
                f"Failed to load config file '{self.path}': {e}"
            ) from e

    def save(self, config: Config):
        """
        Save config, creating parent folders as needed. The file holds the
        access token, so it's made readable by the owner only.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        config.dump_yaml(self.path, private=True)
