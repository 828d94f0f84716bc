# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Resolver strategies and the registry that selects them per project."""

from __future__ import annotations

from .base import Resolver
from .osgi import OSGiResolver
from .registry import ResolverKind, ResolverRegistry
from .stored import StoredResolver, stored_registry, stored_resolver_kind

__all__ = [
    "OSGiResolver",
    "Resolver",
    "ResolverKind",
    "ResolverRegistry",
    "StoredResolver",
    "stored_registry",
    "stored_resolver_kind",
]
