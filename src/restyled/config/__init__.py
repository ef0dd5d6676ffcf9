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

"""Configuration loading for Restyled."""

from __future__ import annotations

from .decoding import decode_partial_config, decode_resolved_config, load_default_config
from .loader import Config, load_config, load_config_from
from .merge import resolve_config
from .models import (
    ConfigReadError,
    ConfigValidationError,
    InvalidDefaultDocumentError,
    InvalidUserDocumentError,
    PartialConfigModel,
    ResolvedConfigModel,
)
from .queries import (
    config_pull_request_reviewer,
    determine_reviewer,
    when_config,
    when_config_just,
    when_config_non_empty,
)
from .sources import CONFIG_FILENAMES, ConfigContent, ConfigPath, read_config_sources

__all__ = [
    "CONFIG_FILENAMES",
    "Config",
    "ConfigContent",
    "ConfigPath",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidDefaultDocumentError",
    "InvalidUserDocumentError",
    "PartialConfigModel",
    "ResolvedConfigModel",
    "config_pull_request_reviewer",
    "decode_partial_config",
    "decode_resolved_config",
    "determine_reviewer",
    "load_config",
    "load_config_from",
    "load_default_config",
    "read_config_sources",
    "resolve_config",
    "when_config",
    "when_config_just",
    "when_config_non_empty",
]
