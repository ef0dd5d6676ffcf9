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

"""Restyler records from the manifest and user-authored overrides of them.

A ``Restyler`` is one entry of the versioned manifest published alongside the
restylers themselves. A ``RestylerOverride`` is what users write under the
``restylers`` key of their configuration: a reference to a manifest entry by
name, optionally replacing some of its fields or disabling it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Final, cast

from pydantic import BaseModel, ConfigDict, model_validator

from restyled.core.type_aliases import RestylerName
from restyled.core.validation import SketchyList
from restyled.exceptions import RestyledValidationError

if TYPE_CHECKING:
    from typing_extensions import Self

WILDCARD: Final[str] = "*"
OVERRIDABLE_FIELDS: Final[tuple[str, ...]] = (
    "image",
    "command",
    "arguments",
    "include",
    "interpreters",
    "delimiters",
)


class InvalidRestylersConfigurationError(RestyledValidationError):
    """Raised when the ``restylers`` overrides cannot be applied to the manifest."""


class UnknownRestylersError(InvalidRestylersConfigurationError):
    """Raised when overrides reference restylers the manifest does not define.

    Attributes:
        names: Unknown names in the order they were first referenced.
        suggestions: Close manifest matches for each unknown name.
    """

    def __init__(self, names: Sequence[str], suggestions: Mapping[str, Sequence[str]]) -> None:
        """Initialise with the unknown names and their suggestions.

        Args:
            names: Unknown restyler names.
            suggestions: Close matches per unknown name (may be empty).
        """
        self.names = tuple(names)
        self.suggestions = {name: tuple(options) for name, options in suggestions.items()}
        details: list[str] = []
        for name in self.names:
            options = self.suggestions.get(name, ())
            hint = f" (did you mean {', '.join(options)}?)" if options else ""
            details.append(f"{name}{hint}")
        super().__init__(f"Unknown restylers: {'; '.join(details)}")


class MultipleWildcardsError(InvalidRestylersConfigurationError):
    """Raised when the wildcard appears more than once in the overrides."""

    def __init__(self, count: int) -> None:
        """Initialise with the number of wildcards found.

        Args:
            count: How many times ``*`` appeared.
        """
        self.count = count
        super().__init__(f"'{WILDCARD}' may appear at most once in restylers (found {count})")


class ConflictingOverrideError(InvalidRestylersConfigurationError):
    """Raised when a single override asks for contradictory changes.

    Attributes:
        name: Restyler the override refers to.
        fields: The fields that conflict.
    """

    def __init__(self, name: str, fields: Sequence[str], reason: str) -> None:
        """Initialise with the offending override and an explanation.

        Args:
            name: Name the override refers to.
            fields: Override fields involved in the conflict.
            reason: Human-readable description of the conflict.
        """
        self.name = name
        self.fields = tuple(fields)
        super().__init__(f"Invalid override for restyler '{name}' ({', '.join(self.fields)}): {reason}")


class Delimiters(BaseModel):
    """Markers wrapping code a restyler should reformat inside a larger file."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)
    start: str
    end: str


class Restyler(BaseModel):
    """One entry of the restylers manifest.

    Fields this package does not interpret are kept as extra attributes so the
    record round-trips unchanged.

    Attributes:
        name: Unique restyler name.
        enabled: Whether the restyler runs when selected through the wildcard.
        image: Container image that provides the restyler.
        command: Executable and fixed leading arguments.
        arguments: Additional arguments appended to ``command``.
        include: Glob patterns of paths the restyler applies to.
        interpreters: Interpreters matched against shebang lines.
        delimiters: Optional markers for embedded code.
        supports_arg_sep: Whether ``--`` may separate options from paths.
        supports_multiple_paths: Whether the restyler accepts several paths per call.
        documentation: Links describing the restyler.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="allow", frozen=True)
    name: RestylerName
    enabled: bool = True
    image: str
    command: SketchyList[str]
    arguments: SketchyList[str] = ()
    include: SketchyList[str] = ()
    interpreters: SketchyList[str] = ()
    delimiters: Delimiters | None = None
    supports_arg_sep: bool = True
    supports_multiple_paths: bool = True
    documentation: SketchyList[str] = ()

    def to_override_document(self) -> dict[str, Any]:
        """Encode as an override spec that reproduces this record from the manifest.

        Only the name, the enabled flag and the overridable fields are emitted;
        publisher metadata comes back from the manifest entry itself.
        """
        return self.model_dump(mode="json", include={"name", "enabled", *OVERRIDABLE_FIELDS}, exclude_none=True)


class RestylerOverride(BaseModel):
    """A user reference to a manifest restyler with optional field overrides.

    Accepted spellings in the document:

    - ``prettier``: enable ``prettier`` unchanged.
    - ``"*"``: enable every default-enabled restyler not named elsewhere.
    - ``{prettier: {include: ["**/*.js"]}}``: single-key form.
    - ``{name: prettier, include: ["**/*.js"]}``: explicit form.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)
    name: RestylerName
    enabled: bool | None = None
    image: str | None = None
    command: SketchyList[str] | None = None
    arguments: SketchyList[str] | None = None
    include: SketchyList[str] | None = None
    interpreters: SketchyList[str] | None = None
    delimiters: Delimiters | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_surface_forms(cls, value: object) -> object:
        if isinstance(value, str):
            return {"name": value}
        if not isinstance(value, Mapping):
            return value
        mapping = cast("Mapping[str, object]", value)
        if "name" in mapping or len(mapping) != 1:
            return mapping
        ((name, body),) = mapping.items()
        if body is None:
            return {"name": name}
        if not isinstance(body, Mapping):
            msg = f"overrides for restyler '{name}' must be a mapping"
            raise ValueError(msg)  # noqa: TRY004
        fields = dict(cast("Mapping[str, object]", body))
        inner_name = fields.pop("name", name)
        if inner_name != name:
            msg = f"restyler '{name}' sets a different name '{inner_name}'"
            raise ValueError(msg)
        return {"name": name, **fields}

    @property
    def is_wildcard(self) -> bool:
        """Whether this entry is the ``*`` wildcard."""
        return self.name == WILDCARD

    @property
    def disables(self) -> bool:
        """Whether this entry explicitly turns its restyler off."""
        return self.enabled is False

    def field_overrides(self) -> dict[str, object]:
        """Return the restyler fields this override replaces."""
        return {key: value for key in OVERRIDABLE_FIELDS if (value := getattr(self, key)) is not None}

    def apply(self, restyler: Restyler) -> Restyler:
        """Return ``restyler`` with this override's fields replaced and enabled.

        Args:
            restyler: Manifest entry (or an already overridden copy of it).

        Returns:
            A new ``Restyler``; fields this override leaves unset are unchanged.
        """
        return restyler.model_copy(update={**self.field_overrides(), "enabled": True})

    @classmethod
    def named(cls, name: str, **fields: object) -> Self:
        """Build an override programmatically, mainly for tests and callers."""
        return cls.model_validate({"name": name, **fields})


__all__ = [
    "OVERRIDABLE_FIELDS",
    "WILDCARD",
    "ConflictingOverrideError",
    "Delimiters",
    "InvalidRestylersConfigurationError",
    "MultipleWildcardsError",
    "Restyler",
    "RestylerOverride",
    "UnknownRestylersError",
]
