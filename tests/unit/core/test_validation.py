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

"""Unit tests for scalar-or-list normalisation and coercion helpers."""

from __future__ import annotations

from typing import ClassVar

import pytest
from pydantic import BaseModel, ConfigDict, ValidationError

from restyled.core.validation import (
    SketchyList,
    coerce_optional_str,
    format_validation_error,
    normalise_scalar_or_list,
    require_non_negative_int,
    unsketchy,
)

pytestmark = pytest.mark.unit


class _Example(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")
    names: SketchyList[str]
    counts: SketchyList[int] = ()


def test_unsketchy_wraps_scalars() -> None:
    assert unsketchy("x") == ["x"]
    assert unsketchy(3) == [3]
    assert unsketchy({"url": "u"}) == [{"url": "u"}]


def test_unsketchy_keeps_sequences_in_order() -> None:
    assert unsketchy(["x", "y"]) == ["x", "y"]
    assert unsketchy(("b", "a")) == ["b", "a"]
    assert unsketchy([]) == []


def test_unsketchy_passes_none_through() -> None:
    assert unsketchy(None) is None


def test_normalise_scalar_or_list_typed_helper() -> None:
    assert normalise_scalar_or_list("a") == ["a"]
    assert normalise_scalar_or_list(["a", "b"]) == ["a", "b"]


def test_sketchy_list_field_accepts_both_spellings_as_tuple() -> None:
    assert _Example.model_validate({"names": "one"}).names == ("one",)
    assert _Example.model_validate({"names": ["one", "two"], "counts": 4}).counts == (4,)


def test_sketchy_list_still_validates_elements() -> None:
    with pytest.raises(ValidationError):
        _ = _Example.model_validate({"names": "x", "counts": ["nope"]})


def test_format_validation_error_groups_unexpected_keys() -> None:
    with pytest.raises(ValidationError) as info:
        _ = _Example.model_validate({"names": "x", "colour": 1, "size": 2, "counts": "bad"})
    lines = format_validation_error(info.value).splitlines()
    assert lines[0] == "Unexpected key(s): colour, size"
    assert lines[1].startswith("counts.0: ")


def test_coerce_optional_str_handles_empty() -> None:
    assert coerce_optional_str(None) is None
    assert coerce_optional_str("  ") is None
    assert coerce_optional_str(" value ") == "value"


def test_require_non_negative_int() -> None:
    assert require_non_negative_int("6", context="count") == 6
    assert require_non_negative_int(0, context="count") == 0
    with pytest.raises(ValueError, match="count must be non-negative"):
        _ = require_non_negative_int(-5, context="count")
    with pytest.raises(ValueError, match="count must be an integer"):
        _ = require_non_negative_int(True, context="count")  # noqa: FBT003
    with pytest.raises(ValueError, match="count must be an integer"):
        _ = require_non_negative_int("many", context="count")
