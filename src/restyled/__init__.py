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

"""restyled - configuration resolution for Restyled.

Resolves the effective configuration of a repository from the embedded
defaults, the repository's ``.restyled.yaml`` and the versioned restylers
manifest.
"""

from __future__ import annotations

from restyled.exceptions import RestyledError, RestyledValidationError

from .config import Config, load_config, load_config_from
from .restylers import Restyler, RestylerOverride, override_restylers

__version__ = "0.1.0"

__all__ = [
    "Config",
    "Restyler",
    "RestylerOverride",
    "RestyledError",
    "RestyledValidationError",
    "__version__",
    "load_config",
    "load_config_from",
    "override_restylers",
]
