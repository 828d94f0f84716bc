# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests covering the transitive read of persisted dependency state."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from resolvekit import BuildSession, DocumentFormatError, Resolver, ResolverRegistry, UnknownProjectError
from resolvekit.engine.dependency_set import normalize_artifacts

CONTAINER_DOCUMENT = """\
container:foo:
  dummy:
    artifacts:
    - com.example:art:jar:1.2.3
    - com.example:art2:jar:1.2.3
    projects:
    - container:foobar
    - container:foobarbar
container:foobar:
  dummy:
    artifacts:
    - com.example:art3:jar:1.2.4
    projects:
    - container:foobarbar
container:foobarbar:
  dummy:
     artifacts:
     - com.example:art4:jar:1.3.2
     projects: []
"""


def test_dependencies_follow_listed_sub_projects(
    session: BuildSession, write_document: Callable[[str], Path]
) -> None:
    write_document(CONTAINER_DOCUMENT)
    container = session.define("container")
    session.define("foo", parent=container)
    session.define("foobar", parent=container)
    session.define("foobarbar", parent=container)

    foo = session.project("container:foo")
    foobar = session.project("container:foobar")
    foobarbar = session.project("container:foobarbar")

    assert foobarbar.dependencies("dummy") == ["com.example:art4:jar:1.3.2"]
    assert foobar.dependencies("dummy") == [
        "com.example:art3:jar:1.2.4",
        "com.example:art4:jar:1.3.2",
        foobarbar,
    ]
    assert foo.dependencies("dummy") == [
        "com.example:art:jar:1.2.3",
        "com.example:art2:jar:1.2.3",
        "com.example:art3:jar:1.2.4",
        "com.example:art4:jar:1.3.2",
        foobar,
        foobarbar,
    ]


def test_diamond_references_contribute_once(session: BuildSession, write_document: Callable[[str], Path]) -> None:
    write_document(
        """\
a:
  all: {artifacts: [art-a], projects: [b, c]}
b:
  all: {artifacts: [art-b], projects: [d]}
c:
  all: {artifacts: [art-c], projects: [d]}
d:
  all: {artifacts: [art-d, art-shared], projects: []}
"""
    )
    a, b, c, d = (session.define(name) for name in "abcd")

    assert a.dependencies("all") == ["art-a", "art-b", "art-d", "art-shared", "art-c", b, c]
    assert d.dependencies("all") == ["art-d", "art-shared"]


def test_transitive_projects_contribute_artifacts_only(
    session: BuildSession, write_document: Callable[[str], Path]
) -> None:
    write_document(
        """\
a:
  all: {artifacts: [art-a], projects: [b]}
b:
  all: {artifacts: [art-b], projects: [c]}
c:
  all: {artifacts: [art-c], projects: []}
"""
    )
    a, b, _c = (session.define(name) for name in "abc")

    assert a.dependencies("all") == ["art-a", "art-b", "art-c", b]


@pytest.mark.parametrize(
    "document",
    [
        "x:\n  all: {artifacts: [art-x], projects: [x]}\n",
        "x:\n  all: {artifacts: [art-x], projects: [y]}\ny:\n  all: {artifacts: [art-y], projects: [x]}\n",
    ],
    ids=["self", "transitive"],
)
def test_cycles_terminate_without_duplicates(
    session: BuildSession, write_document: Callable[[str], Path], document: str
) -> None:
    write_document(document)
    x = session.define("x")
    session.define("y")

    artifacts = [value for value in x.dependencies("all") if isinstance(value, str)]
    assert artifacts.count("art-x") == 1
    assert x not in x.dependencies("all")


def test_persisted_duplicates_are_removed_in_order(
    session: BuildSession, write_document: Callable[[str], Path]
) -> None:
    write_document("foo:\n  dummy: {artifacts: [A, A, B, '', [C, [A]]], projects: []}\n")
    foo = session.define("foo")

    assert foo.dependencies("dummy") == ["A", "B", "C"]


def test_unknown_resolver_returns_empty(session: BuildSession, write_document: Callable[[str], Path]) -> None:
    write_document("foo:\n  dummy: {artifacts: [A], projects: []}\n")
    foo = session.define("foo")

    assert foo.dependencies("nonexistent") == []


def test_missing_resolver_entry_for_sub_project_is_skipped(
    session: BuildSession, write_document: Callable[[str], Path]
) -> None:
    write_document(
        """\
foo:
  dummy: {artifacts: [art-foo], projects: [bar]}
bar:
  other: {artifacts: [art-other], projects: []}
"""
    )
    foo = session.define("foo")
    bar = session.define("bar")

    assert foo.dependencies("dummy") == ["art-foo", bar]


def test_project_absent_from_document_reads_nothing(
    session: BuildSession, write_document: Callable[[str], Path]
) -> None:
    write_document("other:\n  dummy: {artifacts: [A], projects: []}\n")
    foo = session.define("foo")

    assert foo.dependencies("dummy") == []


def test_unknown_sub_project_surfaces_at_access(
    session: BuildSession, write_document: Callable[[str], Path]
) -> None:
    write_document("foo:\n  dummy: {artifacts: [A], projects: [ghost]}\n")
    foo = session.define("foo")

    with pytest.raises(UnknownProjectError, match="ghost"):
        foo.dependencies("dummy")


def test_malformed_entry_surfaces_at_access(session: BuildSession, write_document: Callable[[str], Path]) -> None:
    write_document("foo:\n  dummy: [not, a, mapping]\n")
    foo = session.define("foo")

    with pytest.raises(DocumentFormatError, match="foo"):
        foo.dependencies("dummy")


def test_resolve_appends_to_read_state(session: BuildSession, write_document: Callable[[str], Path]) -> None:
    write_document(
        """\
foo:
  dummy:
    artifacts:
    - com.example:foo:jar:1.1
    - persisted
    projects: []
"""
    )
    foo = session.define("foo")

    foo.dependency_set.resolve()
    foo.dependency_set.resolve()

    assert foo.dependencies("dummy") == ["com.example:foo:jar:1.1", "persisted", "com.example:bar:jar:1.1"]


def test_resolve_without_document(session: BuildSession) -> None:
    foo = session.define("foo")

    session.resolve([foo])

    assert foo.dependencies("dummy") == ["com.example:foo:jar:1.1", "com.example:bar:jar:1.1"]


def test_resolver_failures_propagate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    class Broken(Resolver):
        id = "broken"

        @classmethod
        def applies_to(cls, project: object) -> bool:
            return True

        def resolve(self) -> None:
            raise RuntimeError("external tool failed")

    session = BuildSession(ResolverRegistry([Broken]))
    project = session.define("foo")

    with pytest.raises(RuntimeError, match="external tool failed"):
        session.resolve()
    assert project.dependencies("broken") == []


def test_normalize_artifacts_flattens_and_deduplicates() -> None:
    assert normalize_artifacts([["a", None], "b", ["a", ["c", ""]]]) == ["a", "b", "c"]
