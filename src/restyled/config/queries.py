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

"""Read-only questions asked of a loaded ``Config``."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from restyled.core.model_types import RequestReviewFrom

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from restyled.core.type_aliases import UserName
    from restyled.pull_request import PullRequest

    from .loader import Config
    from .models import RequestReviewConfig

T = TypeVar("T")


def determine_reviewer(pr: PullRequest, request_review: RequestReviewConfig) -> UserName | None:
    """Return the user to request review from, if any.

    Args:
        pr: The original pull request.
        request_review: Reviewer policy for origin and forked pull requests.

    Returns:
        The pull request author, the repository owner, or ``None``.
    """
    match request_review.for_pull_request(is_fork=pr.is_fork):
        case RequestReviewFrom.AUTHOR:
            return pr.author
        case RequestReviewFrom.OWNER:
            return pr.owner
        case RequestReviewFrom.NONE:
            return None


def config_pull_request_reviewer(pr: PullRequest, config: Config) -> UserName | None:
    """Return the reviewer ``config`` asks for on restyle pull requests of ``pr``."""
    return determine_reviewer(pr, config.request_review)


def when_config_just(config: Config, check: Callable[[Config], T | None], action: Callable[[T], None]) -> None:
    """Run ``action`` with the result of ``check`` unless it is ``None``."""
    if (value := check(config)) is not None:
        action(value)


def when_config(config: Config, check: Callable[[Config], bool], action: Callable[[], None]) -> None:
    """Run ``action`` when ``check`` holds for ``config``."""
    if check(config):
        action()


def when_config_non_empty(
    config: Config,
    check: Callable[[Config], Sequence[T]],
    action: Callable[[list[T]], None],
) -> None:
    """Run ``action`` with the items ``check`` selects, unless there are none."""
    if items := list(check(config)):
        action(items)


__all__ = [
    "config_pull_request_reviewer",
    "determine_reviewer",
    "when_config",
    "when_config_just",
    "when_config_non_empty",
]
