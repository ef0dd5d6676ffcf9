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

"""Enumerations shared by the configuration models and logging helpers."""

from __future__ import annotations

from enum import StrEnum


class ChangedPathsOutcome(StrEnum):
    """What to do when a pull request changes more paths than allowed.

    Attributes:
        SKIP: Skip restyling and report success.
        ERROR: Fail the run.
    """

    SKIP = "skip"
    ERROR = "error"

    @classmethod
    def from_str(cls, raw: str) -> ChangedPathsOutcome:
        """Create a ChangedPathsOutcome enum from a string value.

        Args:
            raw: String representation of the outcome.

        Returns:
            ChangedPathsOutcome enum value.

        Raises:
            ValueError: If the string does not match any outcome.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown changed_paths outcome '{raw}'"
            raise ValueError(msg) from exc


class RequestReviewFrom(StrEnum):
    """Whom to request a review of the restyled pull request from.

    Attributes:
        NONE: Do not request a review.
        AUTHOR: The author of the original pull request.
        OWNER: The owner of the repository.
    """

    NONE = "none"
    AUTHOR = "author"
    OWNER = "owner"

    @classmethod
    def from_str(cls, raw: str) -> RequestReviewFrom:
        """Create a RequestReviewFrom enum from a string value.

        Args:
            raw: String representation of the reviewer source.

        Returns:
            RequestReviewFrom enum value.

        Raises:
            ValueError: If the string does not match any reviewer source.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown request_review value '{raw}'"
            raise ValueError(msg) from exc


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Enumeration of loggable pipeline stages.

    Attributes:
        CONFIG: Locating, decoding and merging configuration documents.
        MANIFEST: Fetching and caching the restylers manifest.
        RESTYLERS: Applying restyler overrides.
        DOWNLOAD: The download capability.
    """

    CONFIG = "config"
    MANIFEST = "manifest"
    RESTYLERS = "restylers"
    DOWNLOAD = "download"


__all__ = [
    "ChangedPathsOutcome",
    "LogComponent",
    "LogFormat",
    "RequestReviewFrom",
]
