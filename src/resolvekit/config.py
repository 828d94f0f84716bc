# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model and loaders for the persistence engine."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

CONFIG_FILENAME: Final[str] = ".resolvekit.toml"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "resolvekit"


class DocumentFormat(str, Enum):
    """Enumerate the on-disk encodings supported for dependency documents."""

    YAML = "yml"
    JSON = "json"

    @property
    def suffix(self) -> str:
        """Return the filename suffix used for documents in this format."""

        return f".{self.value}"


class ResolveConfig(BaseModel):
    """Settings controlling where and how resolved state is persisted."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    document_stem: str = Field(default="dependencies", min_length=1)
    document_format: DocumentFormat = DocumentFormat.YAML
    overwrite_existing: bool = False

    @field_validator("document_stem")
    @classmethod
    def _reject_path_separators(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError("document_stem must be a bare file name")
        return value

    @property
    def document_name(self) -> str:
        """Return the file name of the persisted document, e.g. ``dependencies.yml``."""

        return f"{self.document_stem}{self.document_format.suffix}"


def _read_toml(path: Path) -> dict[str, Any]:
    """Return the parsed TOML table stored at ``path``.

    Args:
        path: TOML file to read.

    Returns:
        dict[str, Any]: Parsed top-level table.

    Raises:
        ConfigError: If the file is not valid TOML.
    """

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML ({exc})") from exc


def _pyproject_section(path: Path) -> Mapping[str, Any] | None:
    """Return the ``[tool.resolvekit]`` table from ``path`` when declared."""

    data = _read_toml(path)
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return None
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return None
    if not isinstance(section, Mapping):
        raise ConfigError(f"{path}: [tool.{PYPROJECT_SECTION_KEY}] must be a table")
    return section


def _normalise_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).replace("-", "_"): value for key, value in payload.items()}


def load_config(root: Path) -> ResolveConfig:
    """Load the configuration that applies to the project tree at ``root``.

    ``<root>/.resolvekit.toml`` takes precedence over the ``[tool.resolvekit]``
    table of ``<root>/pyproject.toml``. Defaults apply when neither exists.

    Args:
        root: Base directory of the root project.

    Returns:
        ResolveConfig: Validated configuration.

    Raises:
        ConfigError: If a configuration file is malformed or holds invalid values.
    """

    dedicated = root / CONFIG_FILENAME
    pyproject = root / PYPROJECT_FILENAME
    source: Path | None = None
    payload: Mapping[str, Any] | None = None
    if dedicated.is_file():
        source, payload = dedicated, _read_toml(dedicated)
    elif pyproject.is_file():
        source, payload = pyproject, _pyproject_section(pyproject)
    if payload is None:
        return ResolveConfig()
    try:
        return ResolveConfig.model_validate(_normalise_keys(payload))
    except ValidationError as exc:
        raise ConfigError(f"{source}: invalid configuration: {exc}") from exc


__all__ = [
    "CONFIG_FILENAME",
    "DocumentFormat",
    "ResolveConfig",
    "load_config",
]
