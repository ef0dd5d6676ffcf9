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

"""Helpers for normalising loosely written configuration values.

Several document keys accept either a single element or a list of elements
(``exclude: "vendor/**"`` as well as ``exclude: ["vendor/**", "*.min.js"]``).
The helpers here collapse both spellings into one ordered sequence at the
decode boundary so nothing past the models ever sees the scalar form. Model
fields store the result as a tuple.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, TypeAlias, TypeVar, cast

from pydantic import BeforeValidator, ValidationError

T = TypeVar("T")


def unsketchy(value: object) -> object:
    """Normalise a scalar-or-list value into an ordered list.

    ``None`` is returned unchanged so optional fields stay absent and required
    fields still fail validation.

    Args:
        value: Decoded document value.

    Returns:
        ``[value]`` for a scalar (including mappings), a new list with the same
        order for a sequence, or ``None``.
    """
    if value is None:
        return None
    if isinstance(value, Sequence) and not isinstance(value, str | bytes | bytearray):
        return list(cast("Sequence[object]", value))
    return [value]


def normalise_scalar_or_list(value: T | Sequence[T]) -> list[T]:
    """Typed variant of :func:`unsketchy` for callers outside pydantic models.

    Args:
        value: A single element or a sequence of elements.

    Returns:
        The elements as a list, preserving order.
    """
    return cast("list[T]", unsketchy(value))


# Stored as tuples so frozen models hold no mutable state.
SketchyList: TypeAlias = Annotated[tuple[T, ...], BeforeValidator(unsketchy)]


def _format_location(location: Sequence[int | str]) -> str:
    return ".".join(str(part) for part in location)


def format_validation_error(exc: ValidationError) -> str:
    """Render a pydantic ``ValidationError`` as a short multi-line diagnostic.

    Unexpected keys are grouped on a single leading line so typos are easy to
    spot; every other problem is listed as ``location: message``.

    Args:
        exc: The validation error raised while decoding a document.

    Returns:
        Human-readable diagnostic text.
    """
    errors = exc.errors(include_url=False)
    unexpected = [_format_location(error["loc"]) for error in errors if error["type"] == "extra_forbidden"]
    lines: list[str] = []
    if unexpected:
        lines.append(f"Unexpected key(s): {', '.join(unexpected)}")
    for error in errors:
        if error["type"] == "extra_forbidden":
            continue
        location = _format_location(error["loc"]) or "(document)"
        lines.append(f"{location}: {error['msg']}")
    return "\n".join(lines)


def coerce_optional_str(value: object) -> str | None:
    """Return ``value`` stripped, or ``None`` when it is ``None`` or blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def require_non_negative_int(value: object, *, context: str) -> int:
    """Coerce a value to a non-negative integer with validation.

    Args:
        value: The value to convert to a non-negative integer.
        context: A descriptive name for the value, used in error messages.

    Returns:
        The value as a non-negative integer.

    Raises:
        ValueError: If the value is not an integer or is negative.
    """
    if isinstance(value, bool) or not isinstance(value, int | str):
        message = f"{context} must be an integer (got {value!r})"
        raise ValueError(message)
    try:
        result = int(value)
    except ValueError as exc:
        message = f"{context} must be an integer (got {value!r})"
        raise ValueError(message) from exc
    if result < 0:
        message = f"{context} must be non-negative (got {result})"
        raise ValueError(message)
    return result


__all__ = [
    "SketchyList",
    "coerce_optional_str",
    "format_validation_error",
    "normalise_scalar_or_list",
    "require_non_negative_int",
    "unsketchy",
]
