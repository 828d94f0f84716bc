# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Read cache and writer for the per-root dependency document."""

from __future__ import annotations

import logging
from collections.abc import Iterable, MutableMapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..config import ResolveConfig
from ..errors import DependencyWriteError, DocumentFormatError
from .serialization import ARTIFACTS_KEY, PROJECTS_KEY, PersistedDocument, dump_document, parse_document

if TYPE_CHECKING:
    from ..project import Project

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _CachedDocument:
    """Document loaded for ``root`` during the current build."""

    root: Path
    document: PersistedDocument


class DocumentCache:
    """Hold the single document active for a build session.

    The slot is filled on first load and kept until :meth:`invalidate` is
    called or a document for a different root is loaded.
    """

    def __init__(self) -> None:
        self._slot: _CachedDocument | None = None

    @property
    def root(self) -> Path | None:
        """Return the root directory of the cached document, if any."""

        return None if self._slot is None else self._slot.root

    def get(self, root: Path) -> PersistedDocument | None:
        """Return the cached document for ``root``.

        Args:
            root: Resolved base directory of the root project.

        Returns:
            PersistedDocument | None: Cached document, or ``None`` when the slot
            is empty or holds the document of another root.
        """

        if self._slot is None or self._slot.root != root:
            return None
        return self._slot.document

    def put(self, root: Path, document: PersistedDocument) -> None:
        """Store ``document`` as the active document, replacing any previous one.

        Args:
            root: Resolved base directory the document was read from.
            document: Parsed dependency document.
        """

        self._slot = _CachedDocument(root=root, document=document)

    def invalidate(self) -> None:
        """Forget the cached document so the next load reads from disk."""

        self._slot = None


def common_root_dir(projects: Iterable[Project]) -> Path:
    """Return the base directory shared by the roots of ``projects``.

    Args:
        projects: Projects whose resolved state is about to be written.

    Returns:
        Path: Resolved base directory of the common root.

    Raises:
        DependencyWriteError: If no projects are given or their roots live in
            different directories.
    """

    roots: dict[Path, list[str]] = {}
    for project in projects:
        roots.setdefault(project.root.base_dir.resolve(), []).append(project.name)
    if not roots:
        raise DependencyWriteError("at least one project is required to write dependencies")
    if len(roots) > 1:
        details = "; ".join(f"{root}: {', '.join(names)}" for root, names in sorted(roots.items()))
        raise DependencyWriteError(f"projects belong to different roots ({details})")
    return next(iter(roots))


def _child_mapping(parent: MutableMapping[str, Any], key: str, *, source: Path) -> dict[str, Any]:
    """Return the mapping stored under ``key``, creating it when absent."""

    value = parent.get(key)
    if value is None:
        value = {}
        parent[key] = value
    elif not isinstance(value, dict):
        raise DocumentFormatError(f"{source}: entry '{key}' must be a mapping, found {type(value).__name__}")
    return value


class PersistenceStore:
    """Load and write the dependency document stored under a root project."""

    def __init__(self, config: ResolveConfig | None = None, cache: DocumentCache | None = None) -> None:
        self.config = config or ResolveConfig()
        self.cache = cache or DocumentCache()

    def document_path(self, root: Path) -> Path:
        """Return the location of the document for the root directory ``root``."""

        return root / self.config.document_name

    def read(self, root: Path) -> PersistedDocument:
        """Read the document under ``root`` from disk, bypassing the cache.

        Args:
            root: Base directory of the root project.

        Returns:
            PersistedDocument: Parsed document; empty when the file is absent.
        """

        path = self.document_path(root)
        if not path.is_file():
            return {}
        return parse_document(path.read_text(encoding="utf-8"), self.config.document_format, source=str(path))

    def load(self, root: Path) -> PersistedDocument:
        """Return the cached document for ``root``, reading it on first use."""

        resolved = root.resolve()
        cached = self.cache.get(resolved)
        if cached is not None:
            return cached
        document = self.read(resolved)
        LOGGER.debug("loaded dependency document path=%s projects=%d", self.document_path(resolved), len(document))
        self.cache.put(resolved, document)
        return document

    def invalidate(self) -> None:
        self.cache.invalidate()

    def write(self, projects: Iterable[Project], *, overwrite: bool | None = None) -> Path:
        """Merge the resolved state of ``projects`` into the on-disk document.

        Existing entries for projects that are not written are left untouched.
        For the written projects an existing resolver value is kept unless it
        is null or ``overwrite`` is enabled; absent and null values are filled
        with the resolved state. Within one call the first value merged for a
        project/resolver pair wins.

        Args:
            projects: Projects sharing one root.
            overwrite: Replace existing resolver entries of the written
                projects. Defaults to ``config.overwrite_existing``.

        Returns:
            Path: Location of the written document.

        Raises:
            DependencyWriteError: If ``projects`` is empty or spans several roots.
        """

        selected = tuple(projects)
        root = common_root_dir(selected)
        path = self.document_path(root)
        replace = self.config.overwrite_existing if overwrite is None else overwrite
        document = self.read(root)
        merged: set[tuple[str, str]] = set()
        for project in selected:
            entry = _child_mapping(document, project.name, source=path)
            for resolver_id, resolver in project.dependency_set.resolvers.items():
                if (project.name, resolver_id) in merged:
                    continue
                merged.add((project.name, resolver_id))
                state = _child_mapping(entry, resolver_id, source=path)
                values = {
                    ARTIFACTS_KEY: list(resolver.artifacts),
                    PROJECTS_KEY: [contributor.name for contributor in resolver.projects],
                }
                for key, value in values.items():
                    if replace or state.get(key) is None:
                        state[key] = value
        path.write_text(dump_document(document, self.config.document_format), encoding="utf-8")
        LOGGER.debug("wrote dependency document path=%s projects=%d", path, len(selected))
        self.cache.invalidate()
        return path

    def is_canonical(self, root: Path) -> bool:
        """Return whether the document under ``root`` is stored in canonical form.

        An absent document counts as canonical.
        """

        path = self.document_path(root)
        if not path.is_file():
            return True
        text = path.read_text(encoding="utf-8")
        document = parse_document(text, self.config.document_format, source=str(path))
        return text == dump_document(document, self.config.document_format)

    def normalize(self, root: Path) -> Path:
        """Rewrite the document under ``root`` in canonical form.

        Raises:
            FileNotFoundError: If no document exists under ``root``.
        """

        path = self.document_path(root)
        if not path.is_file():
            raise FileNotFoundError(f"no dependency document at {path}")
        document = self.read(root)
        path.write_text(dump_document(document, self.config.document_format), encoding="utf-8")
        self.cache.invalidate()
        return path


__all__ = ["DocumentCache", "PersistenceStore", "common_root_dir"]
