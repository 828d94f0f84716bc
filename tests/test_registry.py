# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests covering resolver registration and applicability selection."""

from __future__ import annotations

import pytest

from resolvekit import BuildSession, OSGiResolver, RegistryError, Resolver, ResolverRegistry
from resolvekit import plugins as plugins_module
from resolvekit.project import Project


def test_resolvers_apply_selectively(session: BuildSession, dummy_kind: type[Resolver]) -> None:
    foo = session.define("foo")
    bar = session.define("bar")

    dummies = [resolver for resolver in foo.dependency_set.resolvers.values() if resolver.id == "dummy"]
    assert len(dummies) == 1
    assert isinstance(dummies[0], dummy_kind)
    assert dummies[0].project is foo
    assert "dummy" not in bar.dependency_set
    assert list(bar.dependency_set.resolvers) == ["all"]


def test_applicable_follows_registration_order(dummy_kind: type[Resolver], everywhere_kind: type[Resolver]) -> None:
    registry = ResolverRegistry([everywhere_kind, dummy_kind])
    session = BuildSession(registry)
    foo = session.define("foo")

    assert registry.applicable(foo) == (everywhere_kind, dummy_kind)
    assert list(foo.dependency_set.resolvers) == ["all", "dummy"]


def test_register_rejects_duplicate_and_missing_ids(dummy_kind: type[Resolver]) -> None:
    registry = ResolverRegistry([dummy_kind])

    class Anonymous(Resolver):
        pass

    class Clash(Resolver):
        id = "dummy"

    with pytest.raises(RegistryError, match="non-empty"):
        registry.register(Anonymous)
    with pytest.raises(RegistryError, match="already registered"):
        registry.register(Clash)
    with pytest.raises(RegistryError, match="not a Resolver"):
        registry.register(object)  # type: ignore[arg-type]
    assert registry.ids == ("dummy",)


def test_frozen_registry_rejects_registration(registry: ResolverRegistry) -> None:
    class Late(Resolver):
        id = "late"

    assert registry.frozen
    with pytest.raises(RegistryError, match="frozen"):
        registry.register(Late)


def test_predicates_cannot_mutate_registry() -> None:
    registry = ResolverRegistry()

    class Sneaky(Resolver):
        id = "sneaky"

        @classmethod
        def applies_to(cls, project: Project) -> bool:
            registry.register(type("Other", (Resolver,), {"id": "other"}))
            return True

    registry.register(Sneaky)
    session = BuildSession(registry)
    project = session.define("foo")

    with pytest.raises(RegistryError, match="predicates"):
        registry.applicable(project)
    assert registry.ids == ("sneaky",)


def test_register_works_as_decorator() -> None:
    registry = ResolverRegistry()

    @registry.register
    class Decorated(Resolver):
        id = "decorated"

    assert Decorated in registry.kinds
    assert "decorated" in registry


def test_default_registry_includes_builtin_and_plugins(monkeypatch: pytest.MonkeyPatch) -> None:
    class Maven(Resolver):
        id = "maven"

    class DuplicateOsgi(Resolver):
        id = "osgi"

    monkeypatch.setattr(plugins_module, "load_resolver_plugins", lambda: (Maven, DuplicateOsgi))

    registry = ResolverRegistry.default()

    assert registry.kinds == (OSGiResolver, Maven)
    assert registry.frozen
