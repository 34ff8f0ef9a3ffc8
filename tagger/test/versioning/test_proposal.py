"""Tests for next-version proposal and collision resolution."""

from __future__ import annotations

import pytest

from tagger.core.result import Err, Ok
from tagger.versioning.lineage import classify
from tagger.versioning.prerelease import PrereleaseTag
from tagger.versioning.proposal import BranchKind, check_target, propose, resolve_collision
from tagger.versioning.version import Component, Version


def pre(major: int, minor: int, patch: int, n: int) -> Version:
    return Version(major, minor, patch, PrereleaseTag(n))


class TestPropose:
    def test_empty_repository_first_release(self) -> None:
        c = classify([])
        assert propose(c, BranchKind.CANONICAL, Component.MINOR) == Version(0, 1, 0)
        assert propose(c, BranchKind.CANONICAL, Component.MAJOR) == Version(1, 0, 0)
        assert propose(c, BranchKind.CANONICAL, Component.PATCH) == Version(0, 0, 1)

    def test_canonical_bumps_latest_release(self) -> None:
        c = classify([Version(1, 0, 0), Version(1, 1, 0), pre(1, 1, 0, 0)])
        assert propose(c, BranchKind.CANONICAL, Component.PATCH) == Version(1, 1, 1)

    def test_canonical_ignores_lineage(self) -> None:
        tags = [Version(1, 1, 0), pre(1, 2, 0, 0)]
        c = classify(tags, lambda _v: True)
        assert propose(c, BranchKind.CANONICAL, Component.MINOR) == Version(1, 2, 0)

    def test_side_continues_lineage(self) -> None:
        tags = [Version(1, 1, 0), pre(1, 2, 0, 0), pre(1, 2, 0, 1)]
        c = classify(tags, lambda v: v == pre(1, 2, 0, 1))
        assert propose(c, BranchKind.SIDE) == pre(1, 2, 0, 2)

    def test_side_without_lineage_starts_at_pre0(self) -> None:
        c = classify([Version(1, 1, 0), pre(1, 2, 0, 0)], lambda _v: False)
        assert propose(c, BranchKind.SIDE, Component.PATCH) == pre(1, 1, 1, 0)

    def test_side_on_empty_repository(self) -> None:
        assert propose(classify([]), BranchKind.SIDE, Component.MINOR) == pre(0, 1, 0, 0)

    def test_chooser_called_only_when_bumping(self) -> None:
        calls: list[Version] = []

        def choose(floor: Version) -> Component:
            calls.append(floor)
            return Component.MAJOR

        continuing = classify([pre(0, 1, 0, 0)], lambda _v: True)
        assert propose(continuing, BranchKind.SIDE, choose_component=choose) == pre(0, 1, 0, 1)
        assert calls == []

        fresh = classify([Version(1, 4, 7)])
        assert propose(fresh, BranchKind.CANONICAL, choose_component=choose) == Version(2, 0, 0)
        assert calls == [Version(1, 4, 7)]

    def test_explicit_component_wins_over_chooser(self) -> None:
        def choose(_floor: Version) -> Component:
            raise AssertionError("should not be asked")

        c = classify([Version(1, 4, 7)])
        assert propose(c, BranchKind.CANONICAL, Component.PATCH, choose_component=choose) == (
            Version(1, 4, 8)
        )

    def test_missing_component_is_an_error(self) -> None:
        with pytest.raises(ValueError):
            propose(classify([Version(1, 0, 0)]), BranchKind.CANONICAL)


class TestResolveCollision:
    def test_free_candidate_is_unchanged(self) -> None:
        assert resolve_collision(pre(1, 2, 0, 2), {pre(1, 2, 0, 1)}) == Ok(pre(1, 2, 0, 2))

    def test_empty_known_set(self) -> None:
        assert resolve_collision(pre(0, 1, 0, 0), set()) == Ok(pre(0, 1, 0, 0))

    def test_collision_advances_by_stride(self) -> None:
        known = {pre(1, 2, 0, 2)}
        assert resolve_collision(pre(1, 2, 0, 2), known) == Ok(pre(1, 2, 0, 102))

    def test_repeated_collisions(self) -> None:
        known = {pre(1, 2, 0, 2), pre(1, 2, 0, 102)}
        assert resolve_collision(pre(1, 2, 0, 2), known) == Ok(pre(1, 2, 0, 202))

    def test_custom_stride(self) -> None:
        known = [pre(1, 0, 0, 0), pre(1, 0, 0, 10)]
        assert resolve_collision(pre(1, 0, 0, 0), known, stride=10) == Ok(pre(1, 0, 0, 20))

    def test_result_is_never_known_and_never_lower(self) -> None:
        known = {pre(3, 0, 0, n) for n in range(0, 2000, 7)}
        for start in range(0, 50):
            candidate = pre(3, 0, 0, start)
            result = resolve_collision(candidate, known)
            assert isinstance(result, Ok)
            assert result.value not in known
            assert result.value.prerelease is not None
            assert result.value.prerelease.counter >= start
            assert result.value.triple == candidate.triple

    def test_dense_run_still_terminates(self) -> None:
        known = {pre(1, 0, 0, n) for n in range(0, 100_001, 100)}
        result = resolve_collision(pre(1, 0, 0, 0), known)
        assert result == Ok(pre(1, 0, 0, 100_100))

    def test_exhaustion_is_reported(self) -> None:
        class Everything(frozenset[Version]):
            """Claims to contain every version."""

            def __contains__(self, item: object) -> bool:
                return True

        result = resolve_collision(pre(1, 0, 0, 0), Everything({pre(1, 0, 0, 0)}))
        assert isinstance(result, Err)
        assert result.error.kind == "resolution_exhausted"

    def test_existing_release_is_not_rewritten(self) -> None:
        result = resolve_collision(Version(1, 1, 0), {Version(1, 1, 0)})
        assert isinstance(result, Err)
        assert result.error.kind == "version_exists"

    def test_free_release_passes(self) -> None:
        assert resolve_collision(Version(1, 1, 1), {Version(1, 1, 0)}) == Ok(Version(1, 1, 1))

    def test_invalid_stride(self) -> None:
        with pytest.raises(ValueError):
            resolve_collision(pre(1, 0, 0, 0), set(), stride=0)


class TestCheckTarget:
    def test_new_target(self) -> None:
        assert check_target(Version(2, 0, 0), {Version(1, 0, 0)}) == Ok(Version(2, 0, 0))

    def test_existing_target_is_rejected_not_mutated(self) -> None:
        result = check_target(pre(1, 2, 0, 2), {pre(1, 2, 0, 2)})
        assert isinstance(result, Err)
        assert result.error.kind == "version_exists"
        assert "1.2.0-pre2" in result.error.message
