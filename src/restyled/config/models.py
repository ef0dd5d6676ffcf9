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

"""Pydantic models for ``.restyled.yaml`` documents.

Two record types share one field layout:

- ``ResolvedConfigModel`` requires every key. The embedded default document
  decodes into it, and so does the result of merging a user document over it.
- ``PartialConfigModel`` is generated from ``ResolvedConfigModel`` with every
  field made optional. User documents decode into it; a missing key (or an
  explicit ``null``) decodes to ``None``.

Keys accepting one value or a list (``exclude``, ``remote_files``, ``labels``,
``ignore_labels``, ``restylers``) are normalised to tuples while decoding.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Annotated, Any, ClassVar, Final, cast
from urllib.parse import urlparse

from pydantic import BaseModel, BeforeValidator, ConfigDict, create_model, field_validator, model_validator

from restyled.core.model_types import ChangedPathsOutcome, RequestReviewFrom
from restyled.core.type_aliases import Glob, LabelName
from restyled.core.validation import SketchyList, coerce_optional_str, require_non_negative_int
from restyled.exceptions import RestyledValidationError
from restyled.restylers.models import RestylerOverride

if TYPE_CHECKING:
    from pathlib import Path

    from pydantic.fields import FieldInfo

DEFAULT_CHANGED_PATHS_MAXIMUM: Final[int] = 1000
TAB_INDENT_HINT: Final[str] = (
    "\n\nThis may be caused by your source file containing tabs."
    "\nYAML forbids tabs for indentation. See https://yaml.org/faq.html."
)


class ConfigValidationError(RestyledValidationError):
    """Raised when configuration data contains invalid values."""


class ConfigFieldChoiceError(ConfigValidationError):
    """Raised when a configuration field is provided with an unsupported value."""

    def __init__(self, field: str, allowed: tuple[str, ...]) -> None:
        """Initialize the exception with the field name and allowed values.

        Args:
            field: The name of the configuration field with an invalid value.
            allowed: Tuple of allowed values for this field.
        """
        self.field = field
        self.allowed = allowed
        allowed_text = ", ".join(sorted(allowed))
        super().__init__(f"{field} must be one of: {allowed_text}")


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration source exists but cannot be read."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidUserDocumentError(ConfigValidationError):
    """Raised when the user's configuration document fails to decode.

    Attributes:
        content: The raw document bytes.
        problem: Parser or validation diagnostic, possibly with a tab hint.
    """

    def __init__(self, content: bytes, problem: str) -> None:
        """Initialize the exception with the document and diagnostic.

        Args:
            content: The raw document bytes.
            problem: Parser or validation diagnostic.
        """
        self.content = content
        self.problem = problem
        super().__init__(f"Invalid configuration:\n{problem}")


class InvalidDefaultDocumentError(ConfigValidationError):
    """Raised when the embedded default configuration fails to decode.

    This indicates a broken build rather than a user mistake.
    """

    def __init__(self, problem: str) -> None:
        """Initialize the exception with the diagnostic.

        Args:
            problem: Parser or validation diagnostic.
        """
        self.problem = problem
        super().__init__(f"Embedded default configuration is invalid:\n{problem}")


def _enum_choice(enum_type: type[ChangedPathsOutcome | RequestReviewFrom], field: str, value: object) -> object:
    if not isinstance(value, str) or isinstance(value, enum_type):
        return value
    try:
        return enum_type.from_str(value)
    except ValueError as exc:
        raise ConfigFieldChoiceError(field, tuple(member.value for member in enum_type)) from exc


def _version_from_scalar(value: object) -> object:
    # YAML reads unquoted versions such as 20240101 as numbers.
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        # 1.10 has already become 1.1; the written text is gone.
        msg = f"restylers_version {value!r} was read as a number; quote it as a string"
        raise ValueError(msg)  # noqa: TRY004
    if isinstance(value, int):
        return str(value)
    return value


VersionString = Annotated[str, BeforeValidator(_version_from_scalar)]


class ChangedPathsConfig(BaseModel):
    """Limits on how many changed paths a pull request may have.

    Attributes:
        maximum: Largest number of changed paths to restyle.
        outcome: What to do when ``maximum`` is exceeded.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)
    maximum: int = DEFAULT_CHANGED_PATHS_MAXIMUM
    outcome: ChangedPathsOutcome = ChangedPathsOutcome.ERROR

    @field_validator("maximum", mode="before")
    @classmethod
    def _validate_maximum(cls, value: object) -> int:
        return require_non_negative_int(value, context="changed_paths.maximum")

    @field_validator("outcome", mode="before")
    @classmethod
    def _normalise_outcome(cls, value: object) -> object:
        return _enum_choice(ChangedPathsOutcome, "changed_paths.outcome", value)


class Statuses(BaseModel):
    """Which commit statuses to report."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)
    differences: bool = True
    no_differences: bool = True
    error: bool = True


class RequestReviewConfig(BaseModel):
    """Whom to request review from, for origin and forked pull requests.

    A bare scalar (``request_review: owner``) applies to both kinds.

    Attributes:
        origin: Policy for pull requests opened from the repository itself.
        forked: Policy for pull requests opened from a fork.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)
    origin: RequestReviewFrom = RequestReviewFrom.AUTHOR
    forked: RequestReviewFrom = RequestReviewFrom.NONE

    @model_validator(mode="before")
    @classmethod
    def _from_scalar(cls, value: object) -> object:
        if isinstance(value, str):
            return {"origin": value, "forked": value}
        return value

    @field_validator("origin", "forked", mode="before")
    @classmethod
    def _normalise_choice(cls, value: object) -> object:
        return _enum_choice(RequestReviewFrom, "request_review", value)

    def for_pull_request(self, *, is_fork: bool) -> RequestReviewFrom:
        """Return the policy that applies to a pull request."""
        return self.forked if is_fork else self.origin


class RemoteFile(BaseModel):
    """A file to download into the working tree before restyling.

    ``path`` defaults to the last segment of the URL path; a bare URL string
    is accepted as shorthand for ``{url: <string>}``.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)
    url: str
    path: str

    @model_validator(mode="before")
    @classmethod
    def _default_path(cls, value: object) -> object:
        if isinstance(value, str):
            value = {"url": value}
        if not isinstance(value, Mapping):
            return value
        fields = dict(cast("Mapping[str, object]", value))
        if coerce_optional_str(fields.get("path")) is None and isinstance(fields.get("url"), str):
            name = PurePosixPath(urlparse(cast("str", fields["url"])).path).name
            if not name:
                msg = f"remote file {fields['url']} needs an explicit path"
                raise ValueError(msg)
            fields["path"] = name
        return fields


class ResolvedConfigModel(BaseModel):
    """A configuration document in which every key is present."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)
    enabled: bool
    exclude: SketchyList[Glob]
    changed_paths: ChangedPathsConfig
    auto: bool
    commit_template: str
    remote_files: SketchyList[RemoteFile]
    pull_requests: bool
    comments: bool
    statuses: Statuses
    request_review: RequestReviewConfig
    labels: SketchyList[LabelName]
    ignore_labels: SketchyList[LabelName]
    restylers_version: VersionString
    restylers: SketchyList[RestylerOverride]

    def to_document(self) -> dict[str, Any]:
        """Encode back into the plain document shape this model decodes from."""
        return self.model_dump(mode="json", exclude_none=True)


class _PartialConfigBase(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _bare_list_is_restylers(cls, value: object) -> object:
        if isinstance(value, list):
            return {"restylers": value}
        return value


def _optional_field(info: FieldInfo) -> tuple[Any, None]:
    annotation: Any = info.annotation
    if info.metadata:
        # Re-attach validators (e.g. scalar-or-list) that pydantic split off the annotation.
        annotation = Annotated[(annotation, *info.metadata)]
    return annotation | None, None


PartialConfigModel: type[BaseModel] = create_model(
    "PartialConfigModel",
    __base__=_PartialConfigBase,
    __module__=__name__,
    __doc__="A configuration document in which every key may be absent.",
    **{name: _optional_field(info) for name, info in ResolvedConfigModel.model_fields.items()},
)

CONFIG_FIELDS: Final[tuple[str, ...]] = tuple(ResolvedConfigModel.model_fields)


def empty_partial_config() -> BaseModel:
    """Return a partial configuration with every key absent."""
    return PartialConfigModel()


__all__ = [
    "CONFIG_FIELDS",
    "DEFAULT_CHANGED_PATHS_MAXIMUM",
    "TAB_INDENT_HINT",
    "ChangedPathsConfig",
    "ConfigFieldChoiceError",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidDefaultDocumentError",
    "InvalidUserDocumentError",
    "PartialConfigModel",
    "RemoteFile",
    "RequestReviewConfig",
    "ResolvedConfigModel",
    "Statuses",
    "empty_partial_config",
]
