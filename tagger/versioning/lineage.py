"""Tag classification and lineage selection.

A repository's tags split into one release line and any number of
pre-release lineages. Only pre-releases newer than the latest release are
*active*; pre-releases of a triple that has since been released (or of an
older triple) are history.

Which active pre-release belongs to the caller's current line of work is not
derivable from the tags alone. The caller supplies a reachability predicate,
typically "is this tag an ancestor of HEAD".
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from tagger.versioning.version import Version

__all__ = ["RELEASE_FLOOR", "Reachability", "TagClassification", "classify", "select_lineage"]

# Stands in for the latest release of a repository that has none yet.
RELEASE_FLOOR = Version(0, 0, 0)

Reachability = Callable[[Version], bool]


@dataclass(frozen=True, slots=True)
class TagClassification:
    latest_release: Version | None
    active_prereleases: tuple[Version, ...]
    current_lineage_prerelease: Version | None = None

    @property
    def floor(self) -> Version:
        """Base for bump arithmetic; never reported as an existing release."""
        return self.latest_release or RELEASE_FLOOR


def select_lineage(
    active_prereleases: Iterable[Version],
    is_reachable: Reachability,
) -> Version | None:
    """Return the greatest reachable pre-release, if any."""
    reachable = [v for v in active_prereleases if is_reachable(v)]
    return max(reachable) if reachable else None


def classify(
    tags: Iterable[Version],
    is_reachable: Reachability | None = None,
) -> TagClassification:
    """Classify known versions.

    The result depends only on the set of versions, not on iteration order:
    ``active_prereleases`` is sorted ascending.
    """
    versions = frozenset(tags)
    releases = [v for v in versions if v.is_release]
    latest_release = max(releases) if releases else None

    floor = latest_release or RELEASE_FLOOR
    active = tuple(sorted(v for v in versions if v.is_prerelease and v > floor))

    current = select_lineage(active, is_reachable) if is_reachable is not None else None
    return TagClassification(
        latest_release=latest_release,
        active_prereleases=active,
        current_lineage_prerelease=current,
    )
