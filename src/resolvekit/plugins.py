# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Entry-point discovery for third-party resolver strategies.

Packages contribute strategies through the ``resolvekit.resolvers``
entry-point group. An entry point may reference a :class:`Resolver`
subclass directly or a zero-argument factory returning one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from importlib import metadata
from importlib.metadata import EntryPoint, EntryPoints
from typing import Final, TypeAlias, cast

from .resolvers.base import Resolver
from .resolvers.registry import ResolverKind

LOGGER = logging.getLogger(__name__)

RESOLVER_PLUGIN_GROUP: Final[str] = "resolvekit.resolvers"

_EntryPointSource: TypeAlias = EntryPoints | Mapping[str, Sequence[EntryPoint]]


def _select_entry_points(entries: _EntryPointSource, group: str) -> Iterable[EntryPoint]:
    """Return entry points exposed under ``group`` from ``entries``.

    Args:
        entries: Raw entry-point container returned by :func:`metadata.entry_points`.
        group: Name of the entry-point group to extract.

    Returns:
        Iterable[EntryPoint]: Entry points belonging to ``group``.
    """

    if isinstance(entries, Mapping):
        return entries.get(group, ())
    return entries.select(group=group)


def _as_resolver_kind(loaded: object) -> ResolverKind:
    """Return the resolver kind referenced by a loaded entry point.

    Raises:
        TypeError: If ``loaded`` is neither a resolver kind nor a factory for one.
    """

    if isinstance(loaded, type) and issubclass(loaded, Resolver):
        return loaded
    if callable(loaded):
        produced = loaded()
        if isinstance(produced, type) and issubclass(produced, Resolver):
            return produced
    raise TypeError(f"{loaded!r} does not provide a Resolver subclass")


def load_resolver_plugins(entries: _EntryPointSource | None = None) -> tuple[ResolverKind, ...]:
    """Return resolver kinds discovered via the ``resolvekit.resolvers`` group.

    Entries that fail to import or do not yield a resolver kind are skipped
    with a warning.

    Args:
        entries: Optional entry-point container; defaults to the installed
            distributions' entry points.

    Returns:
        tuple[ResolverKind, ...]: Kinds in entry-point order.
    """

    source = cast(_EntryPointSource, metadata.entry_points()) if entries is None else entries
    kinds: list[ResolverKind] = []
    for entry in _select_entry_points(source, RESOLVER_PLUGIN_GROUP):
        try:
            kinds.append(_as_resolver_kind(entry.load()))
        except (AttributeError, ImportError, TypeError, ValueError) as exc:
            LOGGER.warning("skipping resolver plugin %s: %s", entry.name, exc)
    return tuple(kinds)


__all__ = ["RESOLVER_PLUGIN_GROUP", "load_resolver_plugins"]
