# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Resolution engine: dependency sets and the build session driving them."""

from __future__ import annotations

from .dependency_set import DependencySet, DependencyValue, normalize_artifacts
from .session import BuildSession

__all__ = ["BuildSession", "DependencySet", "DependencyValue", "normalize_artifacts"]
