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

"""Fixtures shared across all unit tests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RESTYLED_CACHE_DIR", raising=False)
    monkeypatch.delenv("RESTYLED_LOG_FORMAT", raising=False)
    monkeypatch.delenv("RESTYLED_LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def _reset_restyled_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("restyled")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
