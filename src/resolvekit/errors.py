# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exceptions raised by the resolution and persistence engine."""

from __future__ import annotations


class ResolveError(RuntimeError):
    """Base class for every error raised by :mod:`resolvekit`."""


class RegistryError(ResolveError):
    """Raised when a resolver kind cannot be registered."""


class ProjectDefinitionError(ResolveError):
    """Raised when a project cannot be defined in a build session."""


class UnknownProjectError(ResolveError, KeyError):
    """Raised when a qualified project name does not match a defined project."""

    def __init__(self, name: str) -> None:
        """Create the error for the missing project ``name``.

        Args:
            name: Qualified project name that could not be found.
        """

        super().__init__(f"no project named '{name}' has been defined")
        self.name = name

    def __str__(self) -> str:
        return str(self.args[0])


class DocumentFormatError(ResolveError, TypeError):
    """Raised when a persisted dependency document has an unexpected shape."""


class DependencyWriteError(ResolveError):
    """Raised when resolved state cannot be written back to the store."""


class ConfigError(ResolveError):
    """Raised when configuration input is invalid."""


__all__ = (
    "ConfigError",
    "DependencyWriteError",
    "DocumentFormatError",
    "ProjectDefinitionError",
    "RegistryError",
    "ResolveError",
    "UnknownProjectError",
)
