# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Registry of resolver strategy kinds consulted when projects are finalized."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from ..errors import RegistryError
from .base import Resolver

if TYPE_CHECKING:
    from ..project import Project

LOGGER = logging.getLogger(__name__)

ResolverKind = type[Resolver]


class ResolverRegistry:
    """Hold resolver kinds in registration order.

    Kinds are registered during an initialization phase that ends with
    :meth:`freeze`. Predicates are evaluated in registration order and every
    kind whose predicate accepts a project is instantiated for it.
    """

    def __init__(self, kinds: Iterable[ResolverKind] = ()) -> None:
        self._kinds: list[ResolverKind] = []
        self._frozen = False
        self._evaluating = False
        for kind in kinds:
            self.register(kind)

    @classmethod
    def default(cls) -> ResolverRegistry:
        """Return a frozen registry with built-in and entry-point strategies.

        Returns:
            ResolverRegistry: Registry holding :class:`OSGiResolver` followed by
            kinds contributed through the ``resolvekit.resolvers`` group.
        """

        from ..plugins import load_resolver_plugins
        from .osgi import OSGiResolver

        registry = cls([OSGiResolver])
        for kind in load_resolver_plugins():
            if kind.id in registry:
                LOGGER.warning("ignoring plugin resolver %r: id already registered", kind.id)
                continue
            registry.register(kind)
        registry.freeze()
        return registry

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def kinds(self) -> tuple[ResolverKind, ...]:
        return tuple(self._kinds)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(kind.id for kind in self._kinds)

    def register(self, kind: ResolverKind) -> ResolverKind:
        """Append ``kind`` to the registry.

        Args:
            kind: Resolver subclass to register.

        Returns:
            ResolverKind: ``kind`` unchanged so the method works as a decorator.

        Raises:
            RegistryError: If the registry is frozen or evaluating predicates,
                ``kind`` is not a resolver, lacks an id, or reuses one.
        """

        if self._evaluating:
            raise RegistryError("resolver kinds cannot be registered while predicates are evaluated")
        if self._frozen:
            raise RegistryError(f"registry is frozen; cannot register {kind!r}")
        if not isinstance(kind, type) or not issubclass(kind, Resolver):
            raise RegistryError(f"{kind!r} is not a Resolver subclass")
        if not isinstance(kind.id, str) or not kind.id:
            raise RegistryError(f"{kind.__name__} must declare a non-empty string id")
        if kind.id in self:
            raise RegistryError(f"a resolver with id '{kind.id}' is already registered")
        self._kinds.append(kind)
        LOGGER.debug("registered resolver kind id=%s class=%s", kind.id, kind.__name__)
        return kind

    def freeze(self) -> None:
        """Close the initialization phase; later registrations are rejected."""

        self._frozen = True

    def applicable(self, project: Project) -> tuple[ResolverKind, ...]:
        """Return the kinds whose ``applies_to`` predicate accepts ``project``."""

        self._evaluating = True
        try:
            return tuple(kind for kind in self._kinds if kind.applies_to(project))
        finally:
            self._evaluating = False

    def __contains__(self, resolver_id: object) -> bool:
        return any(kind.id == resolver_id for kind in self._kinds)

    def __iter__(self) -> Iterator[ResolverKind]:
        return iter(tuple(self._kinds))

    def __len__(self) -> int:
        return len(self._kinds)

    def __repr__(self) -> str:
        return f"ResolverRegistry(ids=[{', '.join(self.ids)}], frozen={self._frozen})"


__all__ = ["ResolverKind", "ResolverRegistry"]
