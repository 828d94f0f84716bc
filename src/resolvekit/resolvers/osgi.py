# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""OSGi bundle strategy driven by the project's ``META-INF/MANIFEST.MF``."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Final

from .base import Resolver

if TYPE_CHECKING:
    from ..project import Project

LOGGER = logging.getLogger(__name__)

MANIFEST_PATH: Final[tuple[str, str]] = ("META-INF", "MANIFEST.MF")
REQUIRE_BUNDLE_HEADER: Final[str] = "Require-Bundle"
BUNDLE_VERSION_ATTRIBUTE: Final[str] = "bundle-version"
DEFAULT_BUNDLE_VERSION: Final[str] = "0.0.0"


def read_manifest(path: Path) -> dict[str, str]:
    """Parse a JAR manifest into a header mapping.

    Continuation lines start with a single space and are appended to the
    previous header value.

    Args:
        path: Manifest file to parse.

    Returns:
        dict[str, str]: Header names mapped to their unfolded values.
    """

    headers: dict[str, str] = {}
    current: str | None = None
    for line in path.read_text(encoding="utf-8").splitlines():
        if line.startswith(" ") and current is not None:
            headers[current] += line[1:]
            continue
        if ":" not in line:
            current = None
            continue
        key, _, value = line.partition(":")
        current = key.strip()
        headers[current] = value.strip()
    return headers


def _split_clauses(value: str) -> Iterator[str]:
    """Yield comma-separated clauses, ignoring commas inside quoted values."""

    start = 0
    quoted = False
    for index, char in enumerate(value):
        if char == '"':
            quoted = not quoted
        elif char == "," and not quoted:
            yield value[start:index].strip()
            start = index + 1
    tail = value[start:].strip()
    if tail:
        yield tail


def required_bundles(header: str) -> list[str]:
    """Return artifact coordinates for every clause of a ``Require-Bundle`` header.

    Args:
        header: Raw header value, e.g. ``org.a;bundle-version="[1.0,2.0)",org.b``.

    Returns:
        list[str]: Coordinates shaped ``osgi:<name>:bundle:<version>``.
    """

    coordinates: list[str] = []
    for clause in _split_clauses(header):
        name, *parameters = (part.strip() for part in clause.split(";"))
        if not name:
            continue
        version = DEFAULT_BUNDLE_VERSION
        for parameter in parameters:
            key, sep, raw = parameter.partition("=")
            if sep and key.strip() == BUNDLE_VERSION_ATTRIBUTE:
                version = raw.strip().strip('"')
        coordinates.append(f"osgi:{name}:bundle:{version}")
    return coordinates


class OSGiResolver(Resolver):
    """Resolve OSGi bundles declared in the project's manifest."""

    id = "osgi"

    @classmethod
    def applies_to(cls, project: Project) -> bool:
        return project.path_to(*MANIFEST_PATH).is_file()

    def resolve(self) -> None:
        manifest = self.project.path_to(*MANIFEST_PATH)
        header = read_manifest(manifest).get(REQUIRE_BUNDLE_HEADER, "")
        bundles = required_bundles(header)
        LOGGER.debug("project=%s bundles=%d", self.project.name, len(bundles))
        self.artifacts.extend(bundles)


__all__ = ["OSGiResolver", "read_manifest", "required_bundles"]
