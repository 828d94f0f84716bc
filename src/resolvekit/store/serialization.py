# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Canonical encoding of persisted dependency documents."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any, Final, TypeAlias

import yaml

from ..config import DocumentFormat
from ..errors import DocumentFormatError

ARTIFACTS_KEY: Final[str] = "artifacts"
PROJECTS_KEY: Final[str] = "projects"

ResolverState: TypeAlias = dict[str, list[str]]
ProjectEntry: TypeAlias = dict[str, ResolverState]
PersistedDocument: TypeAlias = dict[str, ProjectEntry]


def _sort_key(value: Any) -> tuple[int, str]:
    """Order strings first, then any other value by its JSON rendering."""

    if isinstance(value, str):
        return (0, value)
    return (1, json.dumps(value, sort_keys=True, default=str))


def canonicalize(value: Any) -> Any:
    """Return a copy of ``value`` with mapping keys and list items sorted.

    Sorting is applied at every nesting level so two documents holding the
    same state always encode to the same text.

    Args:
        value: Document fragment to canonicalize.

    Returns:
        Any: Plain ``dict``/``list`` structure in canonical order.
    """

    if isinstance(value, Mapping):
        return {key: canonicalize(value[key]) for key in sorted(value, key=str)}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return sorted((canonicalize(item) for item in value), key=_sort_key)
    return value


def dump_document(document: Mapping[str, Any], fmt: DocumentFormat) -> str:
    """Encode ``document`` canonically in ``fmt``.

    Args:
        document: Persisted document to encode.
        fmt: Target encoding.

    Returns:
        str: Encoded text ending with a newline.
    """

    canonical = canonicalize(document)
    if fmt is DocumentFormat.JSON:
        return json.dumps(canonical, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
    return yaml.safe_dump(canonical, sort_keys=True, default_flow_style=False, allow_unicode=True)


def parse_document(text: str, fmt: DocumentFormat, *, source: str = "<document>") -> PersistedDocument:
    """Decode a persisted document.

    Args:
        text: Encoded document text.
        fmt: Encoding of ``text``.
        source: Label used in error messages.

    Returns:
        PersistedDocument: Decoded mapping; empty when ``text`` holds no data.

    Raises:
        DocumentFormatError: If the text cannot be decoded or its top level is
            not a mapping.
    """

    if not text.strip():
        return {}
    try:
        data = json.loads(text) if fmt is DocumentFormat.JSON else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise DocumentFormatError(f"{source}: cannot decode dependency document ({exc})") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DocumentFormatError(f"{source}: top level must be a mapping, found {type(data).__name__}")
    return data


__all__ = [
    "ARTIFACTS_KEY",
    "PROJECTS_KEY",
    "PersistedDocument",
    "ProjectEntry",
    "ResolverState",
    "canonicalize",
    "dump_document",
    "parse_document",
]
