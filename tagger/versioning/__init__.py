"""Version resolution engine.

Classifies existing tags into a release line and pre-release lineages,
proposes the next version, and guarantees it does not collide with an
existing tag.

Usage:
    from tagger.versioning import BranchKind, Component, resolve_next_version, scan_tags

    scan = scan_tags(["v1.1.0", "v1.2.0-pre0", "v1.2.0-pre1", "nightly"])
    result = resolve_next_version(
        scan.versions,
        branch_kind=BranchKind.SIDE,
        is_reachable=lambda v: str(v) == "1.2.0-pre1",
    )
    # Ok(Resolution(version=1.2.0-pre2, ...))
"""

from tagger.versioning.engine import (
    Resolution,
    TagScan,
    parse_target,
    resolve_next_version,
    scan_tags,
)
from tagger.versioning.errors import VersionError
from tagger.versioning.lineage import TagClassification, classify, select_lineage
from tagger.versioning.prerelease import PrereleaseTag, decode, encode
from tagger.versioning.proposal import (
    COLLISION_STRIDE,
    BranchKind,
    check_target,
    propose,
    resolve_collision,
)
from tagger.versioning.version import Component, Version, compare, parse

__all__ = [
    # version
    "Component",
    "Version",
    "compare",
    "parse",
    # prerelease
    "PrereleaseTag",
    "decode",
    "encode",
    # lineage
    "TagClassification",
    "classify",
    "select_lineage",
    # proposal
    "COLLISION_STRIDE",
    "BranchKind",
    "check_target",
    "propose",
    "resolve_collision",
    # engine
    "Resolution",
    "TagScan",
    "VersionError",
    "parse_target",
    "resolve_next_version",
    "scan_tags",
]
