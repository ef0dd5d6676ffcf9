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

"""Reconcile user restyler overrides against the manifest.

The manifest lists every restyler that exists for a given version; the user's
``restylers`` list says which of them to run, in which order, and with which
changes. Resolution rules:

1. Overrides are processed in the order written. The first enabling reference
   to a name activates it at the end of the active list.
2. Later references to an active name reconfigure it in place; one that sets
   ``enabled: false`` removes it instead.
3. The ``*`` wildcard stands for every manifest restyler that is enabled by
   default and not named anywhere in the list, in manifest order.
4. Restylers never referenced (directly or through the wildcard) are inactive.
"""

from __future__ import annotations

import logging
from difflib import get_close_matches
from typing import TYPE_CHECKING

from restyled.core.model_types import LogComponent
from restyled.logging import structured_extra

from .models import (
    WILDCARD,
    ConflictingOverrideError,
    MultipleWildcardsError,
    Restyler,
    RestylerOverride,
    UnknownRestylersError,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from restyled.core.type_aliases import RestylerName

logger: logging.Logger = logging.getLogger("restyled.restylers")


def index_restylers(restylers: Iterable[Restyler]) -> dict[RestylerName, Restyler]:
    """Index manifest entries by name, preserving manifest order.

    The manifest publisher guarantees unique names; should a name repeat anyway,
    the first record wins and later ones are ignored.

    Args:
        restylers: Manifest entries in published order.

    Returns:
        Insertion-ordered mapping of name to entry.
    """
    index: dict[RestylerName, Restyler] = {}
    for restyler in restylers:
        if restyler.name in index:
            logger.warning(
                "Manifest defines restyler %s more than once; using the first entry",
                restyler.name,
                extra=structured_extra(component=LogComponent.RESTYLERS),
            )
            continue
        index[restyler.name] = restyler
    return index


def _check_wildcards(overrides: Sequence[RestylerOverride]) -> None:
    wildcards = [override for override in overrides if override.is_wildcard]
    if len(wildcards) > 1:
        raise MultipleWildcardsError(len(wildcards))
    for wildcard in wildcards:
        changed = [*wildcard.field_overrides()]
        if wildcard.enabled is not None:
            changed.insert(0, "enabled")
        if changed:
            raise ConflictingOverrideError(WILDCARD, changed, "the wildcard cannot carry overrides")


def _check_conflicts(overrides: Sequence[RestylerOverride]) -> None:
    for override in overrides:
        if override.disables and (fields := override.field_overrides()):
            raise ConflictingOverrideError(
                override.name,
                ["enabled", *fields],
                "a disabled restyler cannot also be reconfigured",
            )


def _check_known(
    index: dict[RestylerName, Restyler],
    overrides: Sequence[RestylerOverride],
) -> None:
    unknown: list[str] = []
    for override in overrides:
        if override.is_wildcard or override.name in index or override.name in unknown:
            continue
        unknown.append(override.name)
    if unknown:
        suggestions = {name: get_close_matches(name, list(index), n=3) for name in unknown}
        raise UnknownRestylersError(unknown, suggestions)


def override_restylers(
    restylers: Sequence[Restyler],
    overrides: Sequence[RestylerOverride],
) -> list[Restyler]:
    """Produce the ordered list of active restylers.

    Args:
        restylers: Every restyler from the manifest, in published order.
        overrides: The user's ``restylers`` entries, in the order written.

    Returns:
        Active restylers with overrides applied, in activation order.

    Raises:
        UnknownRestylersError: An override names a restyler the manifest lacks.
        MultipleWildcardsError: ``*`` appears more than once.
        ConflictingOverrideError: An override is self-contradictory.
    """
    index = index_restylers(restylers)
    _check_wildcards(overrides)
    _check_known(index, overrides)
    _check_conflicts(overrides)

    named = {override.name for override in overrides if not override.is_wildcard}
    active: dict[RestylerName, Restyler] = {}
    slots: list[RestylerName | None] = []
    for override in overrides:
        if override.is_wildcard:
            slots.append(None)
            continue
        current = active.get(override.name)
        if override.disables:
            if current is not None:
                del active[override.name]
                slots.remove(override.name)
            continue
        if current is None:
            slots.append(override.name)
            active[override.name] = override.apply(index[override.name])
        else:
            active[override.name] = override.apply(current)

    resolved: list[Restyler] = []
    for slot in slots:
        if slot is None:
            resolved.extend(
                restyler for name, restyler in index.items() if restyler.enabled and name not in named
            )
        else:
            resolved.append(active[slot])
    logger.debug(
        "Resolved %d active restylers from %d overrides",
        len(resolved),
        len(overrides),
        extra=structured_extra(component=LogComponent.RESTYLERS, count=len(resolved)),
    )
    return resolved


__all__ = ["index_restylers", "override_restylers"]
