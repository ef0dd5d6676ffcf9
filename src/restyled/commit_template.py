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

"""Commit message templates with ``${restyler.name}`` style substitutions."""

from __future__ import annotations

from dataclasses import dataclass
from string import Template
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

RESTYLER_NAME_VARIABLE: Final[str] = "restyler.name"


class _DottedTemplate(Template):
    idpattern = r"(?a:[_a-z][_a-z0-9]*(?:\.[_a-z][_a-z0-9]*)*)"


@dataclass(slots=True, frozen=True)
class CommitTemplate:
    """A commit message template as written in the configuration document.

    Attributes:
        template: Raw template text; unknown variables are left as written.
    """

    template: str

    def render(self, variables: Mapping[str, str]) -> str:
        """Substitute ``${name}`` variables into the template.

        Args:
            variables: Values keyed by dotted variable name.

        Returns:
            The rendered commit message.
        """
        return _DottedTemplate(self.template).safe_substitute(variables)

    def render_for_restyler(self, restyler_name: str) -> str:
        """Render the template for one restyler."""
        return self.render({RESTYLER_NAME_VARIABLE: restyler_name})


__all__ = ["RESTYLER_NAME_VARIABLE", "CommitTemplate"]
