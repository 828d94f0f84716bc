# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Base class shared by every resolver strategy."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from ..project import Project


class Resolver:
    """Populate artifact coordinates and contributing projects for one project.

    Subclasses declare a unique :attr:`id`, override :meth:`applies_to` to
    select the projects they handle, and override :meth:`resolve` to perform
    live resolution. ``artifacts`` and ``projects`` are only ever appended to;
    the owning :class:`~resolvekit.engine.dependency_set.DependencySet`
    normalizes them after each read or resolve pass.
    """

    id: ClassVar[str] = ""

    def __init__(self, project: Project) -> None:
        """Associate the resolver with its owning ``project``.

        Args:
            project: Project whose dependencies this instance resolves.
        """

        self._project = project
        self.artifacts: list[str] = []
        self.projects: list[Project] = []

    @classmethod
    def applies_to(cls, project: Project) -> bool:
        """Return whether this strategy handles ``project``.

        Args:
            project: Fully defined project, children included.

        Returns:
            bool: ``True`` to instantiate the strategy for the project.
        """

        del project
        return False

    @property
    def project(self) -> Project:
        """Return the project this resolver was created for."""

        return self._project

    def resolve(self) -> None:
        """Resolve the project's dependencies, appending to :attr:`artifacts`."""

    def add_project(self, project: Project) -> None:
        """Record ``project`` as a contributor unless it is already listed."""

        if project not in self.projects:
            self.projects.append(project)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, project={self._project.name!r})"


__all__ = ["Resolver"]
