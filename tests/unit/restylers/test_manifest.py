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

"""Unit tests for fetching and decoding the restylers manifest."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from restyled.download import DownloadError
from restyled.restylers.manifest import (
    InvalidManifestDocumentError,
    decode_manifest,
    fetch_manifest,
    get_all_restylers_versioned,
    manifest_cache_path,
    restylers_manifest_url,
)
from tests.fixtures.manifests import SAMPLE_MANIFEST, FakeDownload

pytestmark = pytest.mark.unit


def test_manifest_url_is_templated_by_version() -> None:
    assert (
        restylers_manifest_url("v0.45.0")
        == "https://docs.restyled.io/data-files/restylers/manifests/v0.45.0/restylers.yaml"
    )


def test_cache_path_precedence(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert manifest_cache_path("stable") == Path(tempfile.gettempdir()) / "restylers-stable.yaml"
    monkeypatch.setenv("RESTYLED_CACHE_DIR", str(tmp_path / "env"))
    assert manifest_cache_path("stable") == tmp_path / "env" / "restylers-stable.yaml"
    assert manifest_cache_path("stable", tmp_path / "arg") == tmp_path / "arg" / "restylers-stable.yaml"


def test_cache_path_is_confined_to_cache_dir(tmp_path: Path) -> None:
    path = manifest_cache_path("../../etc/passwd", tmp_path)
    assert path.parent == tmp_path
    assert path.name == "restylers-..%2F..%2Fetc%2Fpasswd.yaml"


def test_cache_path_is_distinct_per_version(tmp_path: Path) -> None:
    assert manifest_cache_path("a/b", tmp_path) != manifest_cache_path("a_b", tmp_path)
    assert manifest_cache_path("a_b", tmp_path).name == "restylers-a_b.yaml"


def test_fetch_downloads_once_and_reuses_cache(fake_download: FakeDownload, cache_dir: Path) -> None:
    first = fetch_manifest("v1", download=fake_download, cache_dir=cache_dir)
    second = fetch_manifest("v1", download=fake_download, cache_dir=cache_dir)
    assert first == second == cache_dir / "restylers-v1.yaml"
    assert first.read_bytes() == SAMPLE_MANIFEST
    assert fake_download.calls == [(restylers_manifest_url("v1"), first)]
    _ = fetch_manifest("v2", download=fake_download, cache_dir=cache_dir)
    assert len(fake_download.calls) == 2


def test_get_all_restylers_decodes_in_published_order(fake_download: FakeDownload, cache_dir: Path) -> None:
    restylers = get_all_restylers_versioned("v1", download=fake_download, cache_dir=cache_dir)
    assert [restyler.name for restyler in restylers] == ["prettier", "black", "clang-format", "shfmt"]
    black = restylers[1]
    assert black.command == ("black",)
    assert black.include == ("**/*.py",)
    assert black.interpreters == ("python",)
    assert black.supports_arg_sep is False
    assert restylers[2].enabled is False
    assert restylers[3].model_dump()["maintainer"] == "someone"


def test_download_failure_propagates(cache_dir: Path) -> None:
    with pytest.raises(DownloadError) as info:
        _ = get_all_restylers_versioned("missing", download=FakeDownload(), cache_dir=cache_dir)
    assert info.value.url == restylers_manifest_url("missing")
    assert not (cache_dir / "restylers-missing.yaml").exists()


def test_invalid_manifest_document(cache_dir: Path) -> None:
    download = FakeDownload(default=b"- name: broken\n  image: x\n")
    with pytest.raises(InvalidManifestDocumentError) as info:
        _ = get_all_restylers_versioned("bad", download=download, cache_dir=cache_dir)
    assert info.value.version == "bad"
    assert "0.command" in info.value.problem


def test_decode_manifest_rejects_malformed_yaml(tmp_path: Path) -> None:
    with pytest.raises(InvalidManifestDocumentError):
        _ = decode_manifest(b"- name: [\n", version="v1", path=tmp_path / "m.yaml")


def test_decode_manifest_requires_a_list(tmp_path: Path) -> None:
    with pytest.raises(InvalidManifestDocumentError):
        _ = decode_manifest(b"name: black\n", version="v1", path=tmp_path / "m.yaml")
