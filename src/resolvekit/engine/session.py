# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Build session orchestrating project definition, reads, resolution and writes."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from ..config import ResolveConfig, load_config
from ..errors import ProjectDefinitionError, UnknownProjectError
from ..project import NAME_SEPARATOR, Project
from ..resolvers.registry import ResolverRegistry
from ..resolvers.stored import stored_registry
from ..store.document import PersistenceStore
from ..store.serialization import PROJECTS_KEY
from .dependency_set import DependencySet, flatten_values

LOGGER = logging.getLogger(__name__)


class BuildSession:
    """State of one build invocation.

    The session owns the resolver registry, the persistence store (and with it
    the document cache) and every project defined during the build. Dependency
    sets are built when a project is finalized, either through
    :meth:`finalize` or lazily on the first query.
    """

    def __init__(
        self,
        registry: ResolverRegistry | None = None,
        *,
        config: ResolveConfig | None = None,
        store: PersistenceStore | None = None,
    ) -> None:
        """Create a session.

        Args:
            registry: Resolver registry; :meth:`ResolverRegistry.default` when omitted.
            config: Persistence settings used when ``store`` is omitted.
            store: Persistence store; built from ``config`` when omitted.
        """

        self.registry = registry if registry is not None else ResolverRegistry.default()
        self.store = store if store is not None else PersistenceStore(config)
        self._projects: dict[str, Project] = {}
        self._dependency_sets: dict[str, DependencySet] = {}

    @classmethod
    def for_root(cls, root: Path, registry: ResolverRegistry | None = None) -> BuildSession:
        """Return a session configured from the configuration files under ``root``."""

        return cls(registry, config=load_config(root))

    @classmethod
    def from_document(
        cls,
        root: Path,
        *,
        config: ResolveConfig | None = None,
        registry: ResolverRegistry | None = None,
    ) -> BuildSession:
        """Return a session whose projects mirror the document stored under ``root``.

        Every project named in the document, as a key or as a sub-project
        reference, is defined and nested by its ``:``-separated name. Without
        an explicit ``registry`` each resolver id found in the document is
        replayed through a :class:`~resolvekit.resolvers.stored.StoredResolver`.

        Args:
            root: Base directory holding the document.
            config: Persistence settings; loaded from ``root`` when omitted.
            registry: Optional registry overriding the stored resolver kinds.

        Returns:
            BuildSession: Session with all referenced projects defined.
        """

        store = PersistenceStore(config or load_config(root))
        document = store.load(root)
        if registry is None:
            registry = stored_registry(_document_resolver_ids(document))
        session = cls(registry, store=store)
        names = sorted(_document_project_names(document), key=lambda value: (value.count(NAME_SEPARATOR), value))
        for name in names:
            session._ensure_defined(name, root)
        return session

    @property
    def config(self) -> ResolveConfig:
        return self.store.config

    @property
    def projects(self) -> tuple[Project, ...]:
        return tuple(self._projects.values())

    def define(self, project_id: str, *, parent: Project | None = None, base_dir: Path | None = None) -> Project:
        """Define a project, optionally nested under ``parent``.

        Args:
            project_id: Local identifier; must not contain ``:``.
            parent: Owning project defined in this session.
            base_dir: Project directory. Defaults to ``parent.base_dir / project_id``
                for children and the working directory for top-level projects.

        Returns:
            Project: The new project.

        Raises:
            ProjectDefinitionError: If the id is invalid, the qualified name is
                taken, or ``parent`` is foreign to the session or already finalized.
        """

        if not project_id or NAME_SEPARATOR in project_id:
            raise ProjectDefinitionError(f"invalid project id {project_id!r}")
        if parent is not None:
            if self._projects.get(parent.name) is not parent:
                raise ProjectDefinitionError(f"parent {parent.name!r} is not defined in this session")
            if self.is_finalized(parent):
                raise ProjectDefinitionError(f"cannot define {project_id!r}: parent {parent.name!r} is finalized")
        name = project_id if parent is None else f"{parent.name}{NAME_SEPARATOR}{project_id}"
        if name in self._projects:
            raise ProjectDefinitionError(f"project {name!r} is already defined")
        if base_dir is None:
            base_dir = parent.base_dir / project_id if parent is not None else Path.cwd()
        project = Project(project_id, session=self, base_dir=base_dir, parent=parent)
        self._projects[name] = project
        return project

    def _ensure_defined(self, name: str, root: Path) -> Project:
        """Define ``name`` and its missing ancestors, returning the project."""

        existing = self._projects.get(name)
        if existing is not None:
            return existing
        parent_name, sep, project_id = name.rpartition(NAME_SEPARATOR)
        if not sep:
            return self.define(name, base_dir=root)
        parent = self._ensure_defined(parent_name, root)
        return self.define(project_id, parent=parent)

    def project(self, name: str) -> Project:
        """Return the project with the qualified ``name``.

        Raises:
            UnknownProjectError: If no such project has been defined.
        """

        try:
            return self._projects[name]
        except KeyError:
            raise UnknownProjectError(name) from None

    def is_finalized(self, project: Project) -> bool:
        return project.name in self._dependency_sets

    def dependency_set(self, project: Project) -> DependencySet:
        """Return the dependency set of ``project``, building it on first use."""

        dependency_set = self._dependency_sets.get(project.name)
        if dependency_set is None:
            document = self.store.load(project.root.base_dir)
            dependency_set = DependencySet(
                project,
                registry=self.registry,
                document=document,
                lookup=self.project,
            )
            self._dependency_sets[project.name] = dependency_set
            LOGGER.debug("finalized project=%s resolvers=%s", project.name, list(dependency_set.resolvers))
        return dependency_set

    def finalize(self, projects: Iterable[Project] | None = None) -> None:
        """Build dependency sets for ``projects`` (all by default), children first."""

        ordered = self._select(projects)
        selected = set(ordered)
        roots = dict.fromkeys(project.root for project in ordered)
        for root in roots:
            for project in root.walk():
                if project in selected:
                    self.dependency_set(project)

    def resolve(self, projects: Iterable[Project] | None = None) -> None:
        """Run live resolution for ``projects`` (all by default).

        Exceptions raised by resolver strategies propagate to the caller.
        """

        for project in self._select(projects):
            self.dependency_set(project).resolve()

    def write(self, projects: Iterable[Project] | None = None, *, overwrite: bool | None = None) -> Path:
        """Persist the state of ``projects`` (all by default); see :meth:`PersistenceStore.write`."""

        return self.store.write(self._select(projects), overwrite=overwrite)

    def reset(self) -> None:
        """Invalidate the cached document; later finalizations read from disk."""

        self.store.invalidate()

    def _select(self, projects: Iterable[Project] | None) -> tuple[Project, ...]:
        return self.projects if projects is None else tuple(projects)

    def __repr__(self) -> str:
        return f"BuildSession(projects={len(self._projects)}, registry={self.registry!r})"


def _document_project_names(document: Mapping[str, Any]) -> set[str]:
    """Return every project named in ``document``, as key or sub-project reference."""

    names = {str(name) for name in document}
    for entry in document.values():
        if not isinstance(entry, Mapping):
            continue
        for state in entry.values():
            if isinstance(state, Mapping):
                names.update(flatten_values(state.get(PROJECTS_KEY)))
    return names


def _document_resolver_ids(document: Mapping[str, Any]) -> set[str]:
    """Return every resolver id used in ``document``."""

    ids: set[str] = set()
    for entry in document.values():
        if isinstance(entry, Mapping):
            ids.update(str(resolver_id) for resolver_id in entry)
    return ids


__all__ = ["BuildSession"]
