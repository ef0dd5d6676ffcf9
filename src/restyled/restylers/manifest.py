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

"""Fetch, cache and decode the versioned restylers manifest.

Each published version of the manifest is immutable, so a copy downloaded once
is reused by every later run asking for the same version. The cache check and
the download happen under a file lock; a second process racing for the same
version at worst downloads identical bytes again.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Final
from urllib.parse import quote

import yaml
from pydantic import TypeAdapter, ValidationError

from restyled._infra.precedence import env_path, resolve_with_precedence
from restyled._infra.utils.locks import file_lock, lock_path_for
from restyled.core.model_types import LogComponent
from restyled.core.validation import format_validation_error
from restyled.download import DownloadError, download_file
from restyled.exceptions import RestyledValidationError
from restyled.logging import structured_extra

from .models import Restyler

if TYPE_CHECKING:
    from restyled.download import DownloadFile

logger: logging.Logger = logging.getLogger("restyled.manifest")

RESTYLERS_MANIFEST_URL_TEMPLATE: Final[str] = (
    "https://docs.restyled.io/data-files/restylers/manifests/{version}/restylers.yaml"
)
CACHE_DIR_ENV: Final[str] = "RESTYLED_CACHE_DIR"

_RESTYLERS_ADAPTER: Final[TypeAdapter[list[Restyler]]] = TypeAdapter(list[Restyler])


class InvalidManifestDocumentError(RestyledValidationError):
    """Raised when a downloaded restylers manifest cannot be decoded.

    Attributes:
        version: Manifest version that was requested.
        path: Cached manifest file.
        problem: Parser or validation diagnostic.
    """

    def __init__(self, version: str, path: Path, problem: str) -> None:
        """Initialise with the manifest location and diagnostic.

        Args:
            version: Manifest version that was requested.
            path: Cached manifest file.
            problem: Parser or validation diagnostic.
        """
        self.version = version
        self.path = path
        self.problem = problem
        super().__init__(f"Invalid restylers manifest {version} ({path}):\n{problem}")


def restylers_manifest_url(version: str) -> str:
    """Return the published location of the manifest for ``version``."""
    return RESTYLERS_MANIFEST_URL_TEMPLATE.format(version=version)


def manifest_cache_path(version: str, cache_dir: Path | None = None) -> Path:
    """Return where the manifest for ``version`` is cached.

    The directory resolves as ``cache_dir`` > ``$RESTYLED_CACHE_DIR`` > the
    system temporary directory. The version is percent-encoded, so distinct
    versions get distinct file names and none can escape the cache directory.

    Args:
        version: Manifest version.
        cache_dir: Explicit cache directory.

    Returns:
        Deterministic cache file path for ``version``.
    """
    base = resolve_with_precedence(
        explicit_value=cache_dir,
        env_value=env_path(CACHE_DIR_ENV),
        default=Path(tempfile.gettempdir()),
    )
    safe_version = quote(version, safe="")
    return base / f"restylers-{safe_version}.yaml"


def fetch_manifest(
    version: str,
    *,
    download: DownloadFile = download_file,
    cache_dir: Path | None = None,
) -> Path:
    """Ensure the manifest for ``version`` is cached locally.

    Args:
        version: Manifest version.
        download: Download capability used on a cache miss.
        cache_dir: Explicit cache directory.

    Returns:
        Path of the cached manifest.

    Raises:
        DownloadError: When the manifest is not cached and cannot be fetched.
    """
    path = manifest_cache_path(version, cache_dir)
    url = restylers_manifest_url(version)
    with file_lock(lock_path_for(path)):
        cached = path.is_file()
        if not cached:
            download(url, path)
    logger.debug(
        "Restylers manifest %s %s",
        version,
        "served from cache" if cached else "downloaded",
        extra=structured_extra(
            component=LogComponent.MANIFEST,
            version=version,
            url=url,
            path=path,
            cached=cached,
        ),
    )
    return path


def decode_manifest(content: bytes, *, version: str, path: Path) -> list[Restyler]:
    """Decode manifest bytes into restyler records.

    Args:
        content: Raw manifest document.
        version: Manifest version, for diagnostics.
        path: Where the bytes came from, for diagnostics.

    Returns:
        Restylers in published order.

    Raises:
        InvalidManifestDocumentError: When the bytes are not a valid manifest.
    """
    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise InvalidManifestDocumentError(version, path, str(exc)) from exc
    try:
        return _RESTYLERS_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        raise InvalidManifestDocumentError(version, path, format_validation_error(exc)) from exc


def get_all_restylers_versioned(
    version: str,
    *,
    download: DownloadFile = download_file,
    cache_dir: Path | None = None,
) -> list[Restyler]:
    """Fetch (or reuse) and decode every restyler published for ``version``.

    Args:
        version: Manifest version, typically the ``restylers_version`` setting.
        download: Download capability used on a cache miss.
        cache_dir: Explicit cache directory.

    Returns:
        All restylers of that manifest, in published order.

    Raises:
        DownloadError: When the manifest cannot be fetched or read back.
        InvalidManifestDocumentError: When the manifest cannot be decoded.
    """
    path = fetch_manifest(version, download=download, cache_dir=cache_dir)
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise DownloadError(restylers_manifest_url(version), path, exc) from exc
    restylers = decode_manifest(content, version=version, path=path)
    logger.debug(
        "Loaded %d restylers from manifest %s",
        len(restylers),
        version,
        extra=structured_extra(component=LogComponent.MANIFEST, version=version, count=len(restylers)),
    )
    return restylers


__all__ = [
    "CACHE_DIR_ENV",
    "RESTYLERS_MANIFEST_URL_TEMPLATE",
    "InvalidManifestDocumentError",
    "decode_manifest",
    "fetch_manifest",
    "get_all_restylers_versioned",
    "manifest_cache_path",
    "restylers_manifest_url",
]
