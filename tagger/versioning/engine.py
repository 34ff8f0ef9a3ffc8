"""Version resolution entry point.

Pure functions only: no git, no prompts, no environment access. Given the
same tags and inputs the result is always the same.

Tag scanning is lenient (unrelated tags in the same namespace are skipped and
reported), while an explicitly requested version is parsed strictly and is
never altered to avoid a collision.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from tagger.core.result import Err, Ok, Result
from tagger.versioning.errors import VersionError
from tagger.versioning.lineage import Reachability, TagClassification, classify
from tagger.versioning.proposal import (
    COLLISION_STRIDE,
    BranchKind,
    ComponentChooser,
    check_target,
    propose,
    resolve_collision,
)
from tagger.versioning.version import Component, Version, parse

__all__ = ["Resolution", "TagScan", "parse_target", "resolve_next_version", "scan_tags"]


@dataclass(frozen=True, slots=True)
class TagScan:
    """Parsed tags.

    ``names`` maps each version to the tag it was read from, which may lack
    the prefix (``1.2.0`` and ``v1.2.0`` are the same version).
    """

    versions: frozenset[Version]
    skipped: tuple[str, ...]
    names: Mapping[Version, str] = field(default_factory=dict, hash=False)

    def ref(self, version: Version) -> str:
        """Full ref of the tag ``version`` was read from."""
        return f"refs/tags/{self.names[version]}"


@dataclass(frozen=True, slots=True)
class Resolution:
    """The resolved version plus what it was derived from.

    ``proposed`` is the version before collision resolution; it differs from
    ``version`` only when another lineage already held the proposed tag.
    """

    version: Version
    classification: TagClassification
    proposed: Version


def scan_tags(names: Iterable[str], prefix: str = "v") -> TagScan:
    """Parse tag names, skipping (not failing on) anything that is not a version.

    When one version is tagged both with and without the prefix, the prefixed
    tag is the one remembered in ``names``.
    """
    found: dict[Version, str] = {}
    skipped: list[str] = []
    for name in sorted(names):
        match parse(name, prefix):
            case Ok(version):
                if version not in found or name == version.to_tag(prefix):
                    found[version] = name
            case Err(_):
                skipped.append(name)
    return TagScan(versions=frozenset(found), skipped=tuple(skipped), names=found)


def parse_target(text: str, prefix: str = "v") -> Result[Version, VersionError]:
    """Strictly parse a user-supplied version."""
    return parse(text.strip(), prefix)


def resolve_next_version(
    tags: Iterable[Version],
    *,
    branch_kind: BranchKind,
    is_reachable: Reachability | None = None,
    target: Version | None = None,
    component: Component | None = None,
    choose_component: ComponentChooser | None = None,
    stride: int = COLLISION_STRIDE,
) -> Result[Resolution, VersionError]:
    """Resolve the next version to tag.

    With ``target`` the explicit version is checked against the known tags
    and returned unchanged. Otherwise a version is proposed for
    ``branch_kind`` and moved past any colliding pre-release tags.
    """
    known = frozenset(tags)
    classification = classify(known, is_reachable)

    if target is not None:
        candidate = target
        checked = check_target(target, known)
    else:
        candidate = propose(
            classification,
            branch_kind,
            component,
            choose_component=choose_component,
        )
        checked = resolve_collision(candidate, known, stride)

    return checked.map(lambda version: Resolution(version, classification, candidate))
