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

"""Load the effective configuration for a repository.

The pipeline is: locate the user document, decode it as a partial config, merge
it over the embedded defaults, fetch the restylers manifest for the resolved
``restylers_version``, and apply the user's restyler overrides to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from restyled.commit_template import CommitTemplate
from restyled.core.model_types import LogComponent
from restyled.download import download_file
from restyled.logging import structured_extra
from restyled.restylers.manifest import get_all_restylers_versioned
from restyled.restylers.overrides import override_restylers

from .decoding import decode_partial_config, load_default_config
from .merge import resolve_config
from .models import empty_partial_config
from .sources import config_sources, read_config_sources

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from restyled.core.type_aliases import Glob, LabelName
    from restyled.download import DownloadFile
    from restyled.restylers.models import Restyler

    from .models import ChangedPathsConfig, RemoteFile, RequestReviewConfig, ResolvedConfigModel, Statuses
    from .sources import ConfigSource

logger: logging.Logger = logging.getLogger("restyled.config")


@dataclass(slots=True, frozen=True)
class Config:
    """The effective configuration for one run.

    Attributes:
        enabled: Whether restyling is enabled at all.
        exclude: Globs of paths never restyled, in document order.
        changed_paths: Limits on the size of the change set.
        auto: Push fixes to the original branch instead of a new pull request.
        commit_template: Message template for each restyler's commit.
        remote_files: Files to download before restyling.
        pull_requests: Whether to open restyle pull requests.
        comments: Whether to comment on the original pull request.
        statuses: Which commit statuses to report.
        request_review: Reviewer policy for restyle pull requests.
        labels: Labels added to restyle pull requests.
        ignore_labels: Labels that suppress restyling.
        restylers_version: Manifest version the restylers came from.
        restylers: Active restylers in activation order, overrides applied.
    """

    enabled: bool
    exclude: tuple[Glob, ...]
    changed_paths: ChangedPathsConfig
    auto: bool
    commit_template: CommitTemplate
    remote_files: tuple[RemoteFile, ...]
    pull_requests: bool
    comments: bool
    statuses: Statuses
    request_review: RequestReviewConfig
    labels: frozenset[LabelName]
    ignore_labels: frozenset[LabelName]
    restylers_version: str
    restylers: tuple[Restyler, ...]

    def to_document(self) -> dict[str, Any]:
        """Encode as a plain mapping with the document's key names.

        Restylers are written as explicit override specs, so decoding the result
        and resolving it against the same manifest yields an equal ``Config``.
        """
        return {
            "enabled": self.enabled,
            "exclude": list(self.exclude),
            "changed_paths": self.changed_paths.model_dump(mode="json"),
            "auto": self.auto,
            "commit_template": self.commit_template.template,
            "remote_files": [remote.model_dump(mode="json") for remote in self.remote_files],
            "pull_requests": self.pull_requests,
            "comments": self.comments,
            "statuses": self.statuses.model_dump(mode="json"),
            "request_review": self.request_review.model_dump(mode="json"),
            "labels": sorted(self.labels),
            "ignore_labels": sorted(self.ignore_labels),
            "restylers_version": self.restylers_version,
            "restylers": [restyler.to_override_document() for restyler in self.restylers],
        }


def config_from_resolved(resolved: ResolvedConfigModel, restylers: Iterable[Restyler]) -> Config:
    """Assemble the final ``Config`` from a resolved document and active restylers."""
    return Config(
        enabled=resolved.enabled,
        exclude=tuple(resolved.exclude),
        changed_paths=resolved.changed_paths,
        auto=resolved.auto,
        commit_template=CommitTemplate(resolved.commit_template),
        remote_files=tuple(resolved.remote_files),
        pull_requests=resolved.pull_requests,
        comments=resolved.comments,
        statuses=resolved.statuses,
        request_review=resolved.request_review,
        labels=frozenset(resolved.labels),
        ignore_labels=frozenset(resolved.ignore_labels),
        restylers_version=resolved.restylers_version,
        restylers=tuple(restylers),
    )


def _log_yaml(message: str, document: object) -> None:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "%s\n%s",
            message,
            yaml.safe_dump(document, sort_keys=False),
            extra=structured_extra(component=LogComponent.CONFIG),
        )


def load_config_from(
    sources: Sequence[ConfigSource],
    *,
    download: DownloadFile = download_file,
    cache_dir: Path | None = None,
) -> Config:
    """Resolve the configuration from explicit candidate sources.

    When no source is present the embedded defaults are used unchanged.

    Args:
        sources: Candidate sources in priority order.
        download: Download capability for the restylers manifest.
        cache_dir: Explicit manifest cache directory.

    Returns:
        The effective configuration.

    Raises:
        ConfigReadError: A candidate file exists but cannot be read.
        InvalidUserDocumentError: The user document does not decode.
        InvalidDefaultDocumentError: The embedded defaults do not decode.
        DownloadError: The manifest cannot be fetched.
        InvalidManifestDocumentError: The manifest does not decode.
        InvalidRestylersConfigurationError: The restyler overrides do not apply.
    """
    content = read_config_sources(sources)
    partial = empty_partial_config() if content is None else decode_partial_config(content)
    resolved = resolve_config(partial, load_default_config())
    manifest = get_all_restylers_versioned(resolved.restylers_version, download=download, cache_dir=cache_dir)
    restylers = override_restylers(manifest, resolved.restylers)
    config = config_from_resolved(resolved, restylers)
    _log_yaml("Restylers:", [restyler.name for restyler in config.restylers])
    _log_yaml("Configuration:", config.to_document())
    return config


def load_config(
    *,
    root: Path | None = None,
    download: DownloadFile = download_file,
    cache_dir: Path | None = None,
) -> Config:
    """Resolve the configuration of the repository at ``root``.

    Args:
        root: Repository root; defaults to the current directory.
        download: Download capability for the restylers manifest.
        cache_dir: Explicit manifest cache directory.

    Returns:
        The effective configuration.
    """
    base = root if root is not None else Path.cwd()
    return load_config_from(config_sources(base), download=download, cache_dir=cache_dir)


__all__ = ["Config", "config_from_resolved", "load_config", "load_config_from"]
