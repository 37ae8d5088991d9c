"""
Interface to create models with associated .yaml storage.
"""

from pathlib import Path
from typing import Self

import yaml
from pydantic import BaseModel

__all__ = [
    "BaseYamlModel",
]


class BaseYamlModel(BaseModel):
    """
    Base pydantic model with additional functionality to load from and dump
    to .yaml file.
    """

    @classmethod
    def load_yaml(cls, file: Path) -> Self:
        """
        Load model from .yaml file. An empty file loads as the model's
        defaults.
        """
        assert file.is_file()

        with file.open(encoding="utf-8") as fh:
            model = yaml.safe_load(fh)

        if model is None:
            model = {}

        if not isinstance(model, dict):
            raise ValueError(f"Invalid yaml contents: {model}")

        return cls(**model)

    def dump_yaml(self, file: Path, *, private: bool = False):
        """
        Dump model to .yaml file, readable only by the owner if `private` is
        set.
        """
        model = self.model_dump(by_alias=True)
        model_yaml = yaml.safe_dump(
            model, default_flow_style=False, sort_keys=False, allow_unicode=True
        )
        file.write_text(model_yaml, encoding="utf-8")

        if private:
            file.chmod(0o600)
