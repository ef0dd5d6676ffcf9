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

"""Fetch remote files into local paths."""

from __future__ import annotations

import logging
import os
import tempfile
import urllib.error
import urllib.request
from pathlib import Path
from typing import Final, Protocol

from restyled.core.model_types import LogComponent
from restyled.exceptions import RestyledError
from restyled.logging import structured_extra

logger: logging.Logger = logging.getLogger("restyled.download")

DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0


class DownloadError(RestyledError):
    """Raised when a remote file cannot be fetched or stored.

    Attributes:
        url: The URL being fetched.
        path: Destination path.
        error: Underlying network or storage error.
    """

    def __init__(self, url: str, path: Path, error: Exception) -> None:
        """Initialise with the failing URL, destination and cause.

        Args:
            url: The URL being fetched.
            path: Destination path.
            error: Underlying network or storage error.
        """
        self.url = url
        self.path = path
        self.error = error
        super().__init__(f"Unable to download {url} to {path}: {error}")


class DownloadFile(Protocol):
    """Capability that stores the body of ``url`` at ``path``.

    Implementations must be idempotent: calling twice for the same URL and path
    leaves the same bytes in place. Failures surface as ``DownloadError``.
    """

    def __call__(self, url: str, path: Path) -> None: ...


def download_file(url: str, path: Path, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
    """Download ``url`` to ``path`` atomically.

    The body is written to a temporary file next to ``path`` and moved into
    place, so readers never observe a partially written file.

    Args:
        url: Remote location to fetch.
        path: Destination file; parent directories are created.
        timeout: Socket timeout in seconds.

    Raises:
        DownloadError: On any network or filesystem failure.
    """
    logger.info(
        "Downloading %s",
        url,
        extra=structured_extra(component=LogComponent.DOWNLOAD, url=url, path=path),
    )
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        request = urllib.request.Request(url, headers={"accept": "application/x-yaml, text/plain, */*"})  # noqa: S310
        with urllib.request.urlopen(request, timeout=timeout) as response:  # noqa: S310
            body: bytes = response.read()
        fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".part")
        try:
            with os.fdopen(fd, "wb") as handle:
                _ = handle.write(body)
            os.replace(temp_name, path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise
    except (urllib.error.URLError, OSError, ValueError) as exc:
        raise DownloadError(url, path, exc) from exc


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "DownloadError", "DownloadFile", "download_file"]
