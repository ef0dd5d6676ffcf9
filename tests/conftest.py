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

"""Pytest entry point that wires shared fixtures and markers."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from tests.fixtures.manifests import SAMPLE_MANIFEST, FakeDownload

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with the custom markers used by the test suite."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line(
        "markers",
        "integration: Integration tests (slower, multiple components)",
    )


@pytest.fixture
def fake_download() -> FakeDownload:
    """Download double serving the sample manifest for every version."""
    return FakeDownload(default=SAMPLE_MANIFEST)


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Per-test manifest cache directory."""
    path = tmp_path / "cache"
    path.mkdir()
    return path
