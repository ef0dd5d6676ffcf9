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

"""Unit tests for commit message templates."""

from __future__ import annotations

import pytest

from restyled.commit_template import CommitTemplate

pytestmark = pytest.mark.unit


def test_render_for_restyler() -> None:
    template = CommitTemplate("Restyled by ${restyler.name}\n")
    assert template.render_for_restyler("prettier") == "Restyled by prettier\n"


def test_unknown_variables_are_left_alone() -> None:
    template = CommitTemplate("style(${restyler.name}): ${ticket} costs $$5")
    assert template.render_for_restyler("black") == "style(black): ${ticket} costs $5"


def test_render_with_explicit_variables() -> None:
    template = CommitTemplate("$who fixed ${what.kind}")
    assert template.render({"who": "bot", "what.kind": "whitespace"}) == "bot fixed whitespace"
