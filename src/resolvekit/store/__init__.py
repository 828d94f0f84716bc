# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Persistence of resolved dependency state."""

from __future__ import annotations

from .document import DocumentCache, PersistenceStore, common_root_dir
from .serialization import (
    ARTIFACTS_KEY,
    PROJECTS_KEY,
    PersistedDocument,
    canonicalize,
    dump_document,
    parse_document,
)

__all__ = [
    "ARTIFACTS_KEY",
    "PROJECTS_KEY",
    "DocumentCache",
    "PersistedDocument",
    "PersistenceStore",
    "canonicalize",
    "common_root_dir",
    "dump_document",
    "parse_document",
]
