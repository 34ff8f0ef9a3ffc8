"""End-to-end resolution scenarios."""

from __future__ import annotations

import pytest

from tagger.core.result import Err, Ok
from tagger.versioning import (
    BranchKind,
    Component,
    Version,
    parse_target,
    resolve_next_version,
    scan_tags,
)
from tagger.versioning.prerelease import PrereleaseTag


def pre(major: int, minor: int, patch: int, n: int) -> Version:
    return Version(major, minor, patch, PrereleaseTag(n))


def test_scan_tags_skips_foreign_tags() -> None:
    scan = scan_tags(["v1.0.0", "nightly", "v1.1.0-pre0", "v1.1.0-beta.1", "1.2.0", "v2"])

    assert scan.versions == frozenset({Version(1, 0, 0), pre(1, 1, 0, 0), Version(1, 2, 0)})
    assert scan.skipped == ("nightly", "v1.1.0-beta.1", "v2")


def test_scan_tags_with_custom_prefix() -> None:
    scan = scan_tags(["release-1.0.0", "v1.1.0"], prefix="release-")
    assert scan.versions == frozenset({Version(1, 0, 0)})
    assert scan.skipped == ("v1.1.0",)


def test_scan_tags_remembers_tag_names() -> None:
    scan = scan_tags(["1.1.0", "1.2.0-pre0", "v2.0.0"])

    assert scan.ref(Version(1, 1, 0)) == "refs/tags/1.1.0"
    assert scan.ref(pre(1, 2, 0, 0)) == "refs/tags/1.2.0-pre0"
    assert scan.ref(Version(2, 0, 0)) == "refs/tags/v2.0.0"


def test_scan_tags_prefers_prefixed_duplicate() -> None:
    for names in (["1.0.0", "v1.0.0"], ["v1.0.0", "1.0.0"]):
        scan = scan_tags(names)
        assert scan.versions == frozenset({Version(1, 0, 0)})
        assert scan.names == {Version(1, 0, 0): "v1.0.0"}


@pytest.mark.parametrize(
    "huge",
    [
        "v" + "9" * 5000 + ".0.0",
        "v18446744073709551616.0.0",
        "v1.0.0-pre4294967296",
        "v1.0.0-pre" + "1" * 5000,
    ],
)
def test_scan_tags_skips_out_of_range_tags(huge: str) -> None:
    scan = scan_tags(["v1.0.0", huge])

    assert scan.versions == frozenset({Version(1, 0, 0)})
    assert scan.skipped == (huge,)


def test_parse_target_is_strict() -> None:
    assert parse_target(" v1.3.0 ") == Ok(Version(1, 3, 0))
    result = parse_target("v1.3.0-rc1")
    assert isinstance(result, Err)
    assert result.error.kind == "malformed"


def test_empty_repository() -> None:
    result = resolve_next_version(
        [], branch_kind=BranchKind.CANONICAL, component=Component.MINOR
    )

    assert isinstance(result, Ok)
    assert result.value.version == Version(0, 1, 0)
    assert result.value.classification.latest_release is None
    assert result.value.classification.active_prereleases == ()


def test_release_line() -> None:
    tags = scan_tags(["v1.0.0", "v1.1.0", "v1.1.0-pre0"]).versions

    result = resolve_next_version(
        tags, branch_kind=BranchKind.CANONICAL, component=Component.PATCH
    )

    assert isinstance(result, Ok)
    assert result.value.version == Version(1, 1, 1)
    assert result.value.proposed == result.value.version
    assert result.value.classification.latest_release == Version(1, 1, 0)
    assert result.value.classification.active_prereleases == ()


def test_side_lineage_continuation() -> None:
    tags = scan_tags(["v1.1.0", "v1.2.0-pre0", "v1.2.0-pre1"]).versions

    result = resolve_next_version(
        tags,
        branch_kind=BranchKind.SIDE,
        is_reachable=lambda v: v == pre(1, 2, 0, 1),
    )

    assert isinstance(result, Ok)
    assert result.value.version == pre(1, 2, 0, 2)
    assert result.value.classification.current_lineage_prerelease == pre(1, 2, 0, 1)


def test_collision_with_another_lineage() -> None:
    # Another branch already took pre2 (and later pre102) of the same triple.
    tags = scan_tags(
        ["v1.1.0", "v1.2.0-pre0", "v1.2.0-pre1", "v1.2.0-pre2", "v1.2.0-pre102"]
    ).versions

    result = resolve_next_version(
        tags,
        branch_kind=BranchKind.SIDE,
        is_reachable=lambda v: v == pre(1, 2, 0, 1),
    )

    assert isinstance(result, Ok)
    assert result.value.version == pre(1, 2, 0, 202)
    assert result.value.proposed == pre(1, 2, 0, 2)


def test_new_side_line_collides_with_existing_pre0() -> None:
    tags = scan_tags(["v1.1.0", "v1.1.1-pre0"]).versions

    result = resolve_next_version(
        tags,
        branch_kind=BranchKind.SIDE,
        is_reachable=lambda _v: False,
        component=Component.PATCH,
    )

    assert isinstance(result, Ok)
    assert result.value.version == pre(1, 1, 1, 100)


def test_explicit_target_is_checked_not_mutated() -> None:
    tags = scan_tags(["v1.0.0", "v1.1.0"]).versions

    taken = resolve_next_version(tags, branch_kind=BranchKind.CANONICAL, target=Version(1, 1, 0))
    free = resolve_next_version(tags, branch_kind=BranchKind.CANONICAL, target=Version(3, 0, 0))

    assert isinstance(taken, Err)
    assert taken.error.kind == "version_exists"
    assert isinstance(free, Ok)
    assert free.value.version == Version(3, 0, 0)


def test_explicit_target_skips_component_selection() -> None:
    def choose(_floor: Version) -> Component:
        raise AssertionError("should not be asked")

    result = resolve_next_version(
        [],
        branch_kind=BranchKind.CANONICAL,
        target=Version(0, 0, 1),
        choose_component=choose,
    )
    assert isinstance(result, Ok)


def test_resolution_is_idempotent() -> None:
    tags = scan_tags(["v0.3.0", "v0.4.0-pre0", "v0.4.0-pre100"]).versions

    def resolve() -> object:
        return resolve_next_version(
            tags,
            branch_kind=BranchKind.SIDE,
            is_reachable=lambda v: v == pre(0, 4, 0, 0),
        )

    assert resolve() == resolve()
