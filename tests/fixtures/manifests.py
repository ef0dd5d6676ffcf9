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

"""Manifest documents and download doubles for tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from restyled.download import DownloadError
from restyled.restylers.models import Restyler

__all__ = ["SAMPLE_MANIFEST", "FakeDownload", "make_restyler"]

SAMPLE_MANIFEST: Final[bytes] = b"""\
- name: prettier
  image: restyled/restyler-prettier:v2.8.8
  command: [prettier, --write]
  include:
    - "**/*.js"
    - "**/*.ts"
  documentation: https://prettier.io/docs/en/options.html
- name: black
  image: restyled/restyler-black:v23.1.0
  command: black
  include: "**/*.py"
  interpreters: python
  supports_arg_sep: false
- name: clang-format
  enabled: false
  image: restyled/restyler-clang-format:v13
  command: [clang-format, -i]
  include: ["**/*.c", "**/*.h"]
- name: shfmt
  image: restyled/restyler-shfmt:v3.6.0
  command: [shfmt, -w]
  include: "**/*.sh"
  interpreters: [sh, bash]
  maintainer: someone
"""


@dataclass
class FakeDownload:
    """Download capability serving canned bodies and recording calls.

    Attributes:
        documents: Bodies keyed by URL.
        default: Body for URLs not in ``documents``; ``None`` makes them fail.
        calls: ``(url, path)`` for each invocation, in order.
    """

    documents: dict[str, bytes] = field(default_factory=dict)
    default: bytes | None = None
    calls: list[tuple[str, Path]] = field(default_factory=list)

    def __call__(self, url: str, path: Path) -> None:
        self.calls.append((url, path))
        body = self.documents.get(url, self.default)
        if body is None:
            raise DownloadError(url, path, OSError(f"404 Not Found: {url}"))
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_bytes(body)


def make_restyler(name: str, *, enabled: bool = True, **fields: object) -> Restyler:
    """Build a manifest restyler with plausible defaults."""
    payload: dict[str, object] = {
        "name": name,
        "enabled": enabled,
        "image": f"restyled/restyler-{name}:v1",
        "command": [name],
        "include": [f"**/*.{name}"],
    }
    payload.update(fields)
    return Restyler.model_validate(payload)
