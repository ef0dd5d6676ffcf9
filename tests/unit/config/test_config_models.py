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

"""Unit tests for configuration field models."""

from __future__ import annotations

import pytest
import yaml
from pydantic import ValidationError

from restyled.config.decoding import decode_resolved_config, load_default_config
from restyled.config.models import (
    ChangedPathsConfig,
    PartialConfigModel,
    RemoteFile,
    RequestReviewConfig,
)
from restyled.core.model_types import ChangedPathsOutcome, RequestReviewFrom

pytestmark = pytest.mark.unit


def test_remote_file_path_defaults_to_url_basename() -> None:
    remote = RemoteFile.model_validate({"url": "https://example.com/config/.rubocop.yml"})
    assert remote.path == ".rubocop.yml"
    explicit = RemoteFile.model_validate({"url": "https://example.com/a", "path": "tools/a.cfg"})
    assert explicit.path == "tools/a.cfg"


def test_remote_file_without_basename_needs_path() -> None:
    with pytest.raises(ValidationError, match="needs an explicit path"):
        _ = RemoteFile.model_validate("https://example.com/")


def test_changed_paths_defaults_and_case_insensitive_outcome() -> None:
    assert ChangedPathsConfig() == ChangedPathsConfig(maximum=1000, outcome=ChangedPathsOutcome.ERROR)
    assert ChangedPathsConfig.model_validate({"outcome": "SKIP"}).outcome is ChangedPathsOutcome.SKIP
    with pytest.raises(ValidationError, match="changed_paths.outcome must be one of: error, skip"):
        _ = ChangedPathsConfig.model_validate({"outcome": "ignore"})


def test_changed_paths_rejects_unknown_keys() -> None:
    with pytest.raises(ValidationError):
        _ = ChangedPathsConfig.model_validate({"maximum": 5, "minimum": 1})


def test_request_review_per_pull_request_kind() -> None:
    policy = RequestReviewConfig.model_validate({"origin": "owner"})
    assert policy.for_pull_request(is_fork=False) is RequestReviewFrom.OWNER
    assert policy.for_pull_request(is_fork=True) is RequestReviewFrom.NONE


def test_partial_model_mirrors_resolved_fields() -> None:
    partial = PartialConfigModel()
    assert set(type(partial).model_fields) == set(type(load_default_config()).model_fields)
    with pytest.raises(ValidationError):
        _ = PartialConfigModel.model_validate({"unknown": True})


def test_resolved_document_round_trips() -> None:
    default = load_default_config()
    document = default.to_document()
    assert document["request_review"] == {"origin": "author", "forked": "author"}
    assert decode_resolved_config(yaml.safe_dump(document).encode()) == default
