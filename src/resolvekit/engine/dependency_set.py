# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Per-project resolver instances and the transitive read of persisted state."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeAlias

from ..errors import DocumentFormatError
from ..resolvers.base import Resolver
from ..resolvers.registry import ResolverRegistry
from ..store.serialization import ARTIFACTS_KEY, PROJECTS_KEY

if TYPE_CHECKING:
    from ..project import Project

LOGGER = logging.getLogger(__name__)

DependencyValue: TypeAlias = "str | Project"
ProjectLookup: TypeAlias = Callable[[str], "Project"]


def flatten_values(values: Any) -> Iterator[str]:
    """Yield the non-empty scalar entries of ``values``, descending into nested lists."""

    if values is None:
        return
    if isinstance(values, (list, tuple)):
        for value in values:
            yield from flatten_values(value)
        return
    text = values if isinstance(values, str) else str(values)
    if text:
        yield text


def merge_unique(target: list[str], values: Iterable[str]) -> None:
    """Append the entries of ``values`` missing from ``target``, keeping first occurrences."""

    seen = set(target)
    for value in values:
        if value not in seen:
            seen.add(value)
            target.append(value)


def normalize_artifacts(artifacts: Any) -> list[str]:
    """Return ``artifacts`` flattened, without empty entries and deduplicated."""

    normalized: list[str] = []
    merge_unique(normalized, flatten_values(artifacts))
    return normalized


class DependencySet:
    """Resolver instances applicable to one project.

    Construction instantiates one resolver per applicable kind and reads the
    persisted closure for each of them from ``document``, the snapshot current
    when the project is finalized.
    """

    def __init__(
        self,
        project: Project,
        *,
        registry: ResolverRegistry,
        document: Mapping[str, Any],
        lookup: ProjectLookup,
    ) -> None:
        """Build the resolvers for ``project`` and read its persisted state.

        Args:
            project: Project owning the set.
            registry: Registry consulted for applicable resolver kinds.
            document: Persisted document snapshot.
            lookup: Callable mapping a qualified project name to its project.
        """

        self._project = project
        self._document = document
        self._lookup = lookup
        self._resolvers: dict[str, Resolver] = {kind.id: kind(project) for kind in registry.applicable(project)}
        self.read()

    @property
    def project(self) -> Project:
        """Return the project whose dependencies this set holds."""

        return self._project

    @property
    def resolvers(self) -> Mapping[str, Resolver]:
        """Return a read-only view of the resolvers keyed by resolver id.

        Returns:
            Mapping[str, Resolver]: One resolver per applicable strategy, in
            registration order.
        """

        return MappingProxyType(self._resolvers)

    def read(self) -> None:
        """Merge the persisted closure of the project into every resolver."""

        if self._project.name not in self._document:
            return
        for resolver in self._resolvers.values():
            visited = {self._project.name}
            self._read_closure(resolver, self._project.name, visited, direct=True)
            resolver.artifacts = normalize_artifacts(resolver.artifacts)
            LOGGER.debug(
                "read project=%s resolver=%s artifacts=%d projects=%d",
                self._project.name,
                resolver.id,
                len(resolver.artifacts),
                len(resolver.projects),
            )

    def _state(self, project_name: str, resolver_id: str) -> Mapping[str, Any] | None:
        """Return the persisted state of ``resolver_id`` under ``project_name``."""

        entry = self._document.get(project_name)
        if entry is None:
            return None
        if not isinstance(entry, Mapping):
            raise DocumentFormatError(f"entry for project '{project_name}' must be a mapping")
        state = entry.get(resolver_id)
        if state is None:
            return None
        if not isinstance(state, Mapping):
            raise DocumentFormatError(f"entry '{project_name}' / '{resolver_id}' must be a mapping")
        return state

    def _read_closure(self, resolver: Resolver, project_name: str, visited: set[str], *, direct: bool) -> None:
        """Depth-first merge of ``project_name`` and its listed sub-projects.

        Only sub-projects listed under the project owning the set are recorded
        in ``resolver.projects``; deeper ones contribute their artifacts only.
        """

        state = self._state(project_name, resolver.id)
        if state is None:
            return
        merge_unique(resolver.artifacts, flatten_values(state.get(ARTIFACTS_KEY)))
        for sub_name in flatten_values(state.get(PROJECTS_KEY)):
            sub_project = self._lookup(sub_name)
            if direct and sub_project is not self._project:
                resolver.add_project(sub_project)
            if sub_name in visited or sub_project is self._project:
                continue
            visited.add(sub_name)
            self._read_closure(resolver, sub_name, visited, direct=False)

    def resolve(self) -> None:
        """Run live resolution for every resolver, then normalize their artifacts."""

        for resolver in self._resolvers.values():
            resolver.resolve()
            resolver.artifacts = normalize_artifacts(resolver.artifacts)

    def lookup(self, resolver_id: str) -> list[DependencyValue]:
        """Return artifacts followed by projects for ``resolver_id``, or ``[]``."""

        resolver = self._resolvers.get(resolver_id)
        if resolver is None:
            return []
        return [*resolver.artifacts, *resolver.projects]

    def __contains__(self, resolver_id: object) -> bool:
        return resolver_id in self._resolvers

    def __repr__(self) -> str:
        return f"DependencySet(project={self._project.name!r}, resolvers=[{', '.join(self._resolvers)}])"


__all__ = [
    "DependencySet",
    "DependencyValue",
    "ProjectLookup",
    "flatten_values",
    "merge_unique",
    "normalize_artifacts",
]
