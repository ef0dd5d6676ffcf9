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

"""Minimal pull request metadata consumed by configuration queries."""

from __future__ import annotations

from dataclasses import dataclass

from restyled.core.type_aliases import UserName


@dataclass(slots=True, frozen=True)
class PullRequest:
    """The parts of a pull request that configuration decisions depend on.

    Attributes:
        number: Pull request number.
        author: Login of the user who opened the pull request.
        base_owner: Owner of the repository the pull request targets.
        base_repo: Name of the repository the pull request targets.
        head_owner: Owner of the repository the pull request comes from.
        head_repo: Name of the repository the pull request comes from.
    """

    number: int
    author: UserName
    base_owner: UserName
    base_repo: str
    head_owner: UserName
    head_repo: str

    @property
    def is_fork(self) -> bool:
        """Whether the pull request was opened from a fork."""
        return (self.head_owner, self.head_repo) != (self.base_owner, self.base_repo)

    @property
    def owner(self) -> UserName:
        """Owner of the repository the pull request targets."""
        return self.base_owner


__all__ = ["PullRequest"]
