# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Replay-only resolver kinds used to inspect a persisted document."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .base import Resolver
from .registry import ResolverKind, ResolverRegistry

if TYPE_CHECKING:
    from ..project import Project


class StoredResolver(Resolver):
    """Resolver that applies to every project and never resolves live.

    Its state comes exclusively from the persisted document, which lets tools
    inspect a document without the build's real strategies installed.
    """

    @classmethod
    def applies_to(cls, project: Project) -> bool:
        del project
        return True


def stored_resolver_kind(resolver_id: str) -> ResolverKind:
    """Return a :class:`StoredResolver` subclass bound to ``resolver_id``."""

    class_name = f"StoredResolver[{resolver_id}]"
    return type(class_name, (StoredResolver,), {"id": resolver_id})


def stored_registry(resolver_ids: Iterable[str]) -> ResolverRegistry:
    """Return a frozen registry holding one stored kind per id in ``resolver_ids``."""

    registry = ResolverRegistry(stored_resolver_kind(resolver_id) for resolver_id in sorted(set(resolver_ids)))
    registry.freeze()
    return registry


__all__ = ["StoredResolver", "stored_registry", "stored_resolver_kind"]
