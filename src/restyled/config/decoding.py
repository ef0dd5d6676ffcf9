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

"""Decode configuration documents into partial and resolved models.

Both the user document and the embedded default go through the same YAML
decoder; only the target model differs. A bare top-level list is shorthand for
``{restylers: <list>}``.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from typing import TYPE_CHECKING, Final, cast

import yaml
from pydantic import ValidationError

from restyled.core.validation import format_validation_error

from .models import (
    TAB_INDENT_HINT,
    InvalidDefaultDocumentError,
    InvalidUserDocumentError,
    PartialConfigModel,
    ResolvedConfigModel,
)

if TYPE_CHECKING:
    from pydantic import BaseModel

DEFAULT_CONFIG_RESOURCE: Final[str] = "default.yaml"
_TAB_DIAGNOSTIC: Final[str] = "cannot start any token"


def config_error_invalid_yaml(content: bytes, problem: str) -> InvalidUserDocumentError:
    """Build the user-facing error for an undecodable document.

    PyYAML reports a tab used for indentation as ``found character '\\t' that
    cannot start any token``; when the document really contains a tab after a
    newline a hint about YAML's indentation rules is appended.

    Args:
        content: The raw document.
        problem: Parser or validation diagnostic.

    Returns:
        The error to raise.
    """
    if _TAB_DIAGNOSTIC in problem and b"\n\t" in content:
        problem += TAB_INDENT_HINT
    return InvalidUserDocumentError(content, problem)


def _decode(model: type[BaseModel], content: bytes, *, empty: object) -> BaseModel:
    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise config_error_invalid_yaml(content, str(exc)) from exc
    try:
        return model.model_validate(empty if raw is None else raw)
    except ValidationError as exc:
        raise config_error_invalid_yaml(content, format_validation_error(exc)) from exc


def decode_partial_config(content: bytes) -> BaseModel:
    """Decode a user document into a ``PartialConfigModel``.

    An empty document decodes to a partial config with every key absent.

    Args:
        content: Raw document bytes.

    Returns:
        The decoded partial configuration.

    Raises:
        InvalidUserDocumentError: The bytes are not valid YAML or do not match
            the configuration schema (including unknown keys).
    """
    return _decode(PartialConfigModel, content, empty={})


def decode_resolved_config(content: bytes) -> ResolvedConfigModel:
    """Decode a document in which every key must be present.

    Raises:
        InvalidUserDocumentError: The bytes do not decode to a complete document.
    """
    return cast("ResolvedConfigModel", _decode(ResolvedConfigModel, content, empty=None))


def default_config_content() -> bytes:
    """Return the embedded default document."""
    return resources.files("restyled.config").joinpath(DEFAULT_CONFIG_RESOURCE).read_bytes()


@lru_cache(maxsize=1)
def load_default_config() -> ResolvedConfigModel:
    """Decode the embedded default document once per process.

    Raises:
        InvalidDefaultDocumentError: The packaged default is missing or invalid.
    """
    try:
        return decode_resolved_config(default_config_content())
    except InvalidUserDocumentError as exc:
        raise InvalidDefaultDocumentError(exc.problem) from exc
    except OSError as exc:
        raise InvalidDefaultDocumentError(str(exc)) from exc


__all__ = [
    "DEFAULT_CONFIG_RESOURCE",
    "config_error_invalid_yaml",
    "decode_partial_config",
    "decode_resolved_config",
    "default_config_content",
    "load_default_config",
]
