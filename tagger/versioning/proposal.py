"""Next-version proposal and collision resolution.

The proposal depends on which kind of branch the caller is on:

- canonical branch: bump the latest release (major/minor/patch).
- side branch continuing a lineage: next counter of that lineage.
- side branch without a lineage: bump the latest release and start at ``pre0``.

A proposed pre-release may still coincide with a tag from another lineage;
``resolve_collision`` moves it forward in strides until it is free.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Set
from enum import Enum

from tagger.core.result import Err, Ok, Result
from tagger.versioning.errors import VersionError
from tagger.versioning.lineage import TagClassification
from tagger.versioning.version import Component, Version

__all__ = [
    "COLLISION_STRIDE",
    "BranchKind",
    "ComponentChooser",
    "check_target",
    "propose",
    "resolve_collision",
]

COLLISION_STRIDE = 100

ComponentChooser = Callable[[Version], Component]


class BranchKind(Enum):
    CANONICAL = "canonical"
    SIDE = "side"


def _bump_floor(
    classification: TagClassification,
    component: Component | None,
    choose_component: ComponentChooser | None,
) -> Version:
    floor = classification.floor
    if component is None and choose_component is not None:
        component = choose_component(floor)
    if component is None:
        raise ValueError("a component (major/minor/patch) is required to bump the release")
    return floor.bump(component)


def propose(
    classification: TagClassification,
    branch_kind: BranchKind,
    component: Component | None = None,
    *,
    choose_component: ComponentChooser | None = None,
) -> Version:
    """Propose the next version, before collision resolution.

    ``choose_component`` is only called when a bump is actually needed, so an
    interactive caller is not asked for a component when continuing a lineage.

    Raises:
        ValueError: If a bump is needed and no component was given.
    """
    if branch_kind is BranchKind.CANONICAL:
        return _bump_floor(classification, component, choose_component)

    current = classification.current_lineage_prerelease
    if current is None or current.prerelease is None:
        return _bump_floor(classification, component, choose_component).with_prerelease(0)

    return Version(current.major, current.minor, current.patch, current.prerelease.advance(1))


def resolve_collision(
    candidate: Version,
    known: Collection[Version],
    stride: int = COLLISION_STRIDE,
) -> Result[Version, VersionError]:
    """Advance a pre-release candidate by ``stride`` until it is not a known tag.

    Every step strictly increases the counter, so at most ``len(known)``
    candidates can collide before a free one is found.
    """
    if stride < 1:
        raise ValueError(f"stride must be >= 1 (got {stride})")
    if not isinstance(known, Set):
        known = frozenset(known)

    if candidate.prerelease is None:
        return check_target(candidate, known)

    pre = candidate.prerelease
    for _ in range(len(known) + 1):
        if candidate not in known:
            return Ok(candidate)
        pre = pre.advance(stride)
        candidate = Version(candidate.major, candidate.minor, candidate.patch, pre)

    return Err(
        VersionError(
            kind="resolution_exhausted",
            message=f"no free pre-release slot found after {len(known) + 1} attempts",
            hint="The tag set contains an unexpectedly dense run of pre-release tags.",
        )
    )


def check_target(target: Version, known: Collection[Version]) -> Result[Version, VersionError]:
    """Accept an explicitly chosen version only if no tag exists for it."""
    if target in known:
        return Err(
            VersionError(
                kind="version_exists",
                message=f"version already exists: {target}",
                hint="Pick a version that is not tagged yet.",
            )
        )
    return Ok(target)
