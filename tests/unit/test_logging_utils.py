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

"""Unit tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from restyled.core.model_types import LogComponent, LogFormat
from restyled.logging import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra

if TYPE_CHECKING:
    from _pytest.capture import CaptureFixture

pytestmark = pytest.mark.unit


def test_configure_logging_json_emits_structured_logs(capsys: CaptureFixture[str]) -> None:
    _ = configure_logging("json")
    logger = logging.getLogger("restyled.manifest")
    logger.info(
        "fetched",
        extra=structured_extra(
            component=LogComponent.MANIFEST,
            version="v1",
            url="https://example.com/m.yaml",
            path=Path("/tmp/m.yaml"),
            cached=False,
            count=3,
        ),
    )
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logger.exception("broken")
    captured = capsys.readouterr()
    lines = [line for line in captured.err.strip().splitlines() if line]
    payload = json.loads(lines[-2])
    assert payload["message"] == "fetched"
    assert payload["level"] == "info"
    assert payload["logger"] == "restyled.manifest"
    assert payload["component"] == "manifest"
    assert payload["version"] == "v1"
    assert payload["path"] == str(Path("/tmp/m.yaml"))
    assert payload["cached"] is False
    assert payload["count"] == 3
    assert "exc_info" in json.loads(lines[-1])


def test_configure_logging_respects_level(capsys: CaptureFixture[str]) -> None:
    assert LOG_LEVELS == ("debug", "info", "warning", "error")
    assert LOG_FORMATS == ("text", "json")
    config = configure_logging("text", log_level="warning")
    assert config.level == logging.WARNING
    logger = logging.getLogger("restyled")
    logger.info("ignored")
    logger.warning("recorded")
    err = capsys.readouterr().err
    assert "ignored" not in err
    assert "[WARNING] recorded" in err


def test_configure_logging_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESTYLED_LOG_FORMAT", "JSON")
    monkeypatch.setenv("RESTYLED_LOG_LEVEL", "debug")
    config = configure_logging()
    assert config.format is LogFormat.JSON
    assert config.level_name == "debug"
    assert configure_logging("text", log_level="info").format is LogFormat.TEXT


def test_structured_extra_omits_unset_fields() -> None:
    assert structured_extra(LogComponent.CONFIG) == {"component": LogComponent.CONFIG}
    extra = structured_extra(LogComponent.RESTYLERS, details={"names": ["a"]}, count=0)
    assert extra == {"component": LogComponent.RESTYLERS, "count": 0, "details": {"names": ["a"]}}
