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

"""Locate the user's configuration document.

A source is either a filesystem path, which counts only when it exists, or
literal content, which always counts. Sources are tried strictly in order and
the first present one wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final, TypeAlias

from restyled.core.model_types import LogComponent
from restyled.logging import structured_extra

from .models import ConfigReadError

if TYPE_CHECKING:
    from collections.abc import Iterable

logger: logging.Logger = logging.getLogger("restyled.config")

CONFIG_FILENAMES: Final[tuple[str, ...]] = (
    ".restyled.yaml",
    ".restyled.yml",
    ".github/restyled.yaml",
    ".github/restyled.yml",
)


@dataclass(slots=True, frozen=True)
class ConfigPath:
    """A candidate configuration file."""

    path: Path


@dataclass(slots=True, frozen=True)
class ConfigContent:
    """Configuration supplied directly as bytes."""

    content: bytes


ConfigSource: TypeAlias = ConfigPath | ConfigContent


def config_sources(root: Path) -> list[ConfigSource]:
    """Return the standard candidate files below ``root`` in lookup order."""
    return [ConfigPath(root / name) for name in CONFIG_FILENAMES]


def _read_path(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
        return None
    except OSError as exc:
        raise ConfigReadError(path, exc) from exc


def read_config_sources(sources: Iterable[ConfigSource]) -> bytes | None:
    """Return the bytes of the first present source.

    Args:
        sources: Candidate sources in priority order.

    Returns:
        Bytes of the first existing path or literal content, or ``None`` when
        every source is a missing path.

    Raises:
        ConfigReadError: A candidate path exists but cannot be read (for example
            permission denied). The scan stops rather than skipping it.
    """
    for source in sources:
        if isinstance(source, ConfigContent):
            logger.debug(
                "Using inline configuration",
                extra=structured_extra(component=LogComponent.CONFIG),
            )
            return source.content
        content = _read_path(source.path)
        if content is not None:
            logger.debug(
                "Using configuration from %s",
                source.path,
                extra=structured_extra(component=LogComponent.CONFIG, path=source.path),
            )
            return content
    logger.debug(
        "No configuration source found; using defaults",
        extra=structured_extra(component=LogComponent.CONFIG),
    )
    return None


__all__ = [
    "CONFIG_FILENAMES",
    "ConfigContent",
    "ConfigPath",
    "ConfigSource",
    "config_sources",
    "read_config_sources",
]
