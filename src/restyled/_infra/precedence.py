# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Precedence chain used for process-level restyled settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TypeVar

T = TypeVar("T")


def resolve_with_precedence(
    *,
    explicit_value: T | None = None,
    env_value: T | None = None,
    default: T,
) -> T:
    """Resolve a value using the explicit > environment > default chain.

    Args:
        explicit_value: Value passed directly by the caller.
        env_value: Value read from an environment variable.
        default: Fallback default value.

    Returns:
        The highest-precedence non-None value, or default.

    Example:
        >>> resolve_with_precedence(explicit_value=None, env_value="/cache", default="/tmp")
        '/cache'
    """
    if explicit_value is not None:
        return explicit_value
    if env_value is not None:
        return env_value
    return default


def env_path(name: str) -> Path | None:
    """Return the environment variable ``name`` as a path, ignoring blank values."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return Path(raw.strip())


__all__ = ["env_path", "resolve_with_precedence"]
