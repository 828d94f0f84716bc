# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Project model: the ownership tree addressed by the dependency document."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .engine.dependency_set import DependencySet, DependencyValue
    from .engine.session import BuildSession

NAME_SEPARATOR: Final[str] = ":"


class Project:
    """A buildable unit owned by at most one parent project.

    Projects are created through :meth:`BuildSession.define`. The qualified
    :attr:`name` joins the ids of every ancestor with ``:``; it is the key used
    for the project in the persisted dependency document.
    """

    def __init__(
        self,
        project_id: str,
        *,
        session: BuildSession,
        base_dir: Path,
        parent: Project | None = None,
    ) -> None:
        self._id = project_id
        self._session = session
        self._parent = parent
        self._children: list[Project] = []
        self.base_dir = base_dir
        if parent is not None:
            parent._children.append(self)

    @property
    def id(self) -> str:
        """Return the local identifier of the project within its parent."""

        return self._id

    @property
    def name(self) -> str:
        """Return the fully-qualified name, e.g. ``container:foo``."""

        if self._parent is None:
            return self._id
        return f"{self._parent.name}{NAME_SEPARATOR}{self._id}"

    @property
    def parent(self) -> Project | None:
        return self._parent

    @property
    def children(self) -> tuple[Project, ...]:
        return tuple(self._children)

    @property
    def root(self) -> Project:
        """Return the ancestor without a parent; it owns the dependency document."""

        project = self
        while project._parent is not None:
            project = project._parent
        return project

    @property
    def session(self) -> BuildSession:
        return self._session

    def walk(self) -> Iterator[Project]:
        """Yield the descendants of this project children-first, then itself."""

        for child in self._children:
            yield from child.walk()
        yield self

    def path_to(self, *parts: str) -> Path:
        """Return ``parts`` joined onto the project's base directory."""

        return self.base_dir.joinpath(*parts)

    @property
    def dependency_set(self) -> DependencySet:
        """Return the project's dependency set, finalizing the project if needed."""

        return self._session.dependency_set(self)

    def dependencies(self, resolver_id: str) -> list[DependencyValue]:
        """Return artifacts followed by contributing projects for ``resolver_id``.

        Args:
            resolver_id: Identifier of the resolver strategy, e.g. ``"osgi"``.

        Returns:
            list[DependencyValue]: Artifact coordinates then project references;
            empty when no strategy with that id applies to the project.
        """

        return self.dependency_set.lookup(resolver_id)

    def __repr__(self) -> str:
        return f"Project({self.name!r})"


__all__ = ["NAME_SEPARATOR", "Project"]
