# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Dependency resolution and persistence engine for project-oriented builds."""

from __future__ import annotations

from .config import DocumentFormat, ResolveConfig, load_config
from .engine import BuildSession, DependencySet
from .errors import (
    ConfigError,
    DependencyWriteError,
    DocumentFormatError,
    ProjectDefinitionError,
    RegistryError,
    ResolveError,
    UnknownProjectError,
)
from .project import Project
from .resolvers import OSGiResolver, Resolver, ResolverRegistry
from .store import DocumentCache, PersistenceStore

__version__ = "0.1.0"

__all__ = [
    "BuildSession",
    "ConfigError",
    "DependencySet",
    "DependencyWriteError",
    "DocumentCache",
    "DocumentFormat",
    "DocumentFormatError",
    "OSGiResolver",
    "PersistenceStore",
    "Project",
    "ProjectDefinitionError",
    "RegistryError",
    "ResolveConfig",
    "ResolveError",
    "Resolver",
    "ResolverRegistry",
    "UnknownProjectError",
    "__version__",
    "load_config",
]
