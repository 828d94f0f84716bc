# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from resolvekit import BuildSession, Resolver, ResolverRegistry
from resolvekit.project import Project


class DummyResolver(Resolver):
    """Test strategy applying to every project whose id contains ``foo``."""

    id = "dummy"

    @classmethod
    def applies_to(cls, project: Project) -> bool:
        return "foo" in project.id

    def resolve(self) -> None:
        self.artifacts.extend(["com.example:foo:jar:1.1", "com.example:bar:jar:1.1"])


class EverywhereResolver(Resolver):
    """Test strategy applying to every project without live resolution."""

    id = "all"

    @classmethod
    def applies_to(cls, project: Project) -> bool:
        return True


@pytest.fixture
def registry() -> ResolverRegistry:
    """Return a frozen registry holding the test strategies."""

    registry = ResolverRegistry([DummyResolver, EverywhereResolver])
    registry.freeze()
    return registry


@pytest.fixture
def session(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, registry: ResolverRegistry) -> BuildSession:
    """Return a build session whose top-level projects live in ``tmp_path``."""

    monkeypatch.chdir(tmp_path)
    return BuildSession(registry)


@pytest.fixture
def write_document(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper writing ``dependencies.yml`` into ``tmp_path``."""

    def _write(text: str) -> Path:
        path = tmp_path / "dependencies.yml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def dummy_kind() -> type[Resolver]:
    return DummyResolver


@pytest.fixture
def everywhere_kind() -> type[Resolver]:
    return EverywhereResolver
