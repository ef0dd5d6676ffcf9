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

"""Merge a partial configuration over the resolved defaults."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import ResolvedConfigModel

if TYPE_CHECKING:
    from pydantic import BaseModel


def resolve_config(partial: BaseModel, default: ResolvedConfigModel) -> ResolvedConfigModel:
    """Fill every field ``partial`` leaves absent from ``default``.

    The merge is field-local: a present user value replaces the default value
    as a whole (lists are not concatenated, nested objects are not combined).
    It cannot fail, because both inputs were validated when decoded.

    Args:
        partial: A ``PartialConfigModel`` instance.
        default: The fully populated defaults.

    Returns:
        A fully populated configuration.
    """
    values = {
        name: default_value if (value := getattr(partial, name)) is None else value
        for name, default_value in default
    }
    return ResolvedConfigModel.model_construct(**values)


__all__ = ["resolve_config"]
