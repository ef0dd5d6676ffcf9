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

"""Restylers: manifest records, the manifest fetcher and override resolution."""

from __future__ import annotations

from .manifest import (
    InvalidManifestDocumentError,
    get_all_restylers_versioned,
    manifest_cache_path,
    restylers_manifest_url,
)
from .models import (
    WILDCARD,
    ConflictingOverrideError,
    Delimiters,
    InvalidRestylersConfigurationError,
    MultipleWildcardsError,
    Restyler,
    RestylerOverride,
    UnknownRestylersError,
)
from .overrides import override_restylers

__all__ = [
    "WILDCARD",
    "ConflictingOverrideError",
    "Delimiters",
    "InvalidManifestDocumentError",
    "InvalidRestylersConfigurationError",
    "MultipleWildcardsError",
    "Restyler",
    "RestylerOverride",
    "UnknownRestylersError",
    "get_all_restylers_versioned",
    "manifest_cache_path",
    "override_restylers",
    "restylers_manifest_url",
]
