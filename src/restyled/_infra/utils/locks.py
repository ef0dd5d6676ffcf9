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

"""Cross-process file locking for the shared manifest cache."""

from __future__ import annotations

import importlib
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, BinaryIO, Protocol, cast

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

__all__ = ["file_lock", "lock_path_for"]


class _FcntlModule(Protocol):
    LOCK_EX: int
    LOCK_UN: int

    def flock(self, fd: int, operation: int) -> None: ...


class _MsvcrtModule(Protocol):
    LK_LOCK: int
    LK_UNLCK: int

    def locking(self, fd: int, mode: int, size: int) -> None: ...


def _import_optional(name: str) -> object | None:
    try:  # pragma: no cover - platform dependent
        return importlib.import_module(name)
    except ImportError:  # pragma: no cover
        return None


fcntl_module = cast("_FcntlModule | None", _import_optional("fcntl"))
msvcrt_module = cast("_MsvcrtModule | None", _import_optional("msvcrt"))


def lock_path_for(path: Path) -> Path:
    """Return the sidecar lock file guarding ``path``.

    Args:
        path: File whose writers should be serialised.

    Returns:
        Path of the lock file next to ``path``.
    """
    return path.with_name(f"{path.name}.lock")


def _msvcrt_acquire(handle: BinaryIO, module: _MsvcrtModule) -> None:
    while True:
        try:
            module.locking(handle.fileno(), module.LK_LOCK, 1)
        except OSError:
            time.sleep(0.05)
        else:
            return


@contextmanager
def file_lock(path: Path) -> Iterator[None]:
    """Hold an exclusive advisory lock on ``path`` for the duration of the block.

    Locking is best-effort: on platforms without ``fcntl`` or ``msvcrt`` the
    lock file is created but no lock is taken.

    Args:
        path: Path to the lock file on disk.

    Yields:
        ``None`` once the lock has been acquired.
    """
    path = path.resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a+b") as handle:
        if fcntl_module is not None:
            fcntl_module.flock(handle.fileno(), fcntl_module.LOCK_EX)
            try:
                yield
            finally:
                fcntl_module.flock(handle.fileno(), fcntl_module.LOCK_UN)
        elif msvcrt_module is not None:
            _msvcrt_acquire(handle, msvcrt_module)
            try:
                yield
            finally:
                _ = handle.seek(0)
                msvcrt_module.locking(handle.fileno(), msvcrt_module.LK_UNLCK, 1)
        else:
            yield
