"""Tagging workflow: inspect the repository, resolve the next version, tag.

Git access and prompts happen here, strictly before and after the pure
resolution in ``tagger.versioning``. Prompts are injected as callables so the
workflow runs unattended in tests and with ``--yes``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from tagger.core.config import TaggerConfig
from tagger.core.result import Err, Ok, Result
from tagger.git.repository import CommitSummary, GitError, Repository
from tagger.output.console import ConsoleProtocol, Style
from tagger.versioning import (
    BranchKind,
    Component,
    TagClassification,
    TagScan,
    Version,
    VersionError,
    check_target,
    classify,
    parse_target,
    resolve_next_version,
    scan_tags,
)

__all__ = [
    "RepoSnapshot",
    "TagOutcome",
    "TaggingError",
    "TaggingService",
    "release_notes",
]

TaggingErrorKind = Literal[
    "not_a_repository",
    "detached_head",
    "git_failed",
    "network_failed",
    "invalid_target",
    "version_exists",
    "resolution_exhausted",
]


@dataclass(frozen=True, slots=True)
class TaggingError:
    kind: TaggingErrorKind
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class RepoSnapshot:
    """Everything read from git before resolving a version."""

    branch: str
    branch_kind: BranchKind
    scan: TagScan
    reachable: frozenset[Version]
    classification: TagClassification
    commits: tuple[CommitSummary, ...]


@dataclass(frozen=True, slots=True)
class TagOutcome:
    version: Version
    tag_name: str
    created: bool
    pushed: bool


def release_notes(commits: tuple[CommitSummary, ...] | list[CommitSummary]) -> str:
    """Tag annotation listing the commits since the last tag."""
    lines = "\n".join(f" - {c.short_sha} {c.summary}" for c in commits)
    return "release_notes:\n" + lines.replace(":", "")


def _from_git(error: GitError) -> TaggingError:
    return TaggingError(
        kind="network_failed" if error.is_network else "git_failed",
        message=f"git {error.command} failed: {error.message}",
    )


def _from_version(error: VersionError) -> TaggingError:
    match error.kind:
        case "malformed":
            return TaggingError(kind="invalid_target", message=error.message, hint=error.hint)
        case "version_exists":
            return TaggingError(kind="version_exists", message=error.message, hint=error.hint)
        case "resolution_exhausted":
            return TaggingError(
                kind="resolution_exhausted", message=error.message, hint=error.hint
            )


class TaggingService:
    def __init__(
        self,
        *,
        repo: Repository,
        config: TaggerConfig,
        console: ConsoleProtocol,
        choose_component: Callable[[Version], Component] | None = None,
        edit_version: Callable[[Version], str] | None = None,
        confirm: Callable[[str], bool] | None = None,
    ) -> None:
        self._repo = repo
        self._config = config
        self._console = console
        self._choose_component = choose_component
        self._edit_version = edit_version
        self._confirm = confirm

    @property
    def prefix(self) -> str:
        return self._config.tag_prefix

    def inspect(self, *, fetch: bool) -> Result[RepoSnapshot, TaggingError]:
        """Read branch, tags, lineage reachability and pending commits."""
        if not self._repo.is_work_tree():
            return Err(
                TaggingError(
                    kind="not_a_repository",
                    message=f"not a git repository: {self._repo.path}",
                    hint="Run inside a git work tree or pass --repo.",
                )
            )

        branch = self._repo.current_branch()
        if branch is None:
            return Err(
                TaggingError(
                    kind="detached_head",
                    message="HEAD is not a branch",
                    hint="Check out a branch before tagging.",
                )
            )

        if fetch:
            self._console.print("Fetching tags from remote...", Style.DIM)
            fetched = self._repo.fetch_tags(self._config.remote)
            if isinstance(fetched, Err):
                return Err(_from_git(fetched.error))

        names = self._repo.tag_names()
        if isinstance(names, Err):
            return Err(_from_git(names.error))
        scan = scan_tags(names.value, self.prefix)

        # Only active pre-releases can be a lineage; skip git for the rest.
        active = classify(scan.versions).active_prereleases
        reachable = frozenset(
            v for v in active if self._repo.is_ancestor(scan.ref(v))
        )
        classification = classify(scan.versions, reachable.__contains__)

        commits = self._repo.commits_since([scan.ref(v) for v in sorted(scan.versions)])
        if isinstance(commits, Err):
            return Err(_from_git(commits.error))

        branch_kind = (
            BranchKind.CANONICAL if self._config.is_canonical(branch) else BranchKind.SIDE
        )
        return Ok(
            RepoSnapshot(
                branch=branch,
                branch_kind=branch_kind,
                scan=scan,
                reachable=reachable,
                classification=classification,
                commits=tuple(commits.value),
            )
        )

    def print_summary(self, snapshot: RepoSnapshot) -> None:
        c = snapshot.classification

        self._console.header("Latest tags")
        if c.latest_release is not None:
            self._console.tag(c.latest_release.to_tag(self.prefix), "latest release")
        else:
            self._console.print(" no releases yet", Style.DIM)
        if c.current_lineage_prerelease is not None:
            self._console.tag(c.current_lineage_prerelease.to_tag(self.prefix), "current branch")

        self._console.header("All current prereleases")
        for version in c.active_prereleases:
            self._console.tag(version.to_tag(self.prefix))

        self._console.header("Commits since latest tag")
        for commit in snapshot.commits:
            self._console.print(f" - {commit.short_sha} {commit.summary}", Style.DIM)

        if snapshot.scan.skipped:
            self._console.newline()
            self._console.print(
                f"ignored {len(snapshot.scan.skipped)} non-version tag(s): "
                + ", ".join(snapshot.scan.skipped),
                Style.DIM,
            )
        self._console.newline()

    def resolve(
        self,
        snapshot: RepoSnapshot,
        *,
        target: str | None = None,
        component: Component | None = None,
    ) -> Result[Version, TaggingError]:
        """Pick the version to tag.

        An explicit ``target`` is parsed strictly and rejected if it exists.
        Otherwise the proposal is offered to ``edit_version`` (when set), and
        whatever comes back is held to the same strict rules.
        """
        known = snapshot.scan.versions

        if target is not None:
            return self._check_explicit(target, known)

        resolved = resolve_next_version(
            known,
            branch_kind=snapshot.branch_kind,
            is_reachable=snapshot.reachable.__contains__,
            component=component,
            choose_component=self._choose_component,
            stride=self._config.collision_stride,
        )
        if isinstance(resolved, Err):
            return Err(_from_version(resolved.error))

        proposal = resolved.value.version
        if proposal != resolved.value.proposed:
            self._console.warning(
                f"{resolved.value.proposed.to_tag(self.prefix)} is already tagged,"
                f" moved to {proposal.to_tag(self.prefix)}"
            )
        if self._edit_version is None:
            return Ok(proposal)
        return self._check_explicit(self._edit_version(proposal), known)

    def _check_explicit(
        self, text: str, known: frozenset[Version]
    ) -> Result[Version, TaggingError]:
        checked = parse_target(text, self.prefix).flat_map(lambda v: check_target(v, known))
        if isinstance(checked, Err):
            return Err(_from_version(checked.error))
        return Ok(checked.value)

    def tag(
        self,
        snapshot: RepoSnapshot,
        version: Version,
        *,
        push: bool,
        dry_run: bool = False,
    ) -> Result[TagOutcome, TaggingError]:
        """Create the annotated tag on HEAD and optionally push it."""
        name = version.to_tag(self.prefix)
        if dry_run:
            self._console.info(f"dry run: would tag {name} on {snapshot.branch}")
            return Ok(TagOutcome(version=version, tag_name=name, created=False, pushed=False))

        created = self._repo.create_tag(name, release_notes(snapshot.commits))
        if isinstance(created, Err):
            return Err(_from_git(created.error))
        self._console.success(f"created tag {name}")

        if not push or (self._confirm is not None and not self._confirm("Push tag?")):
            return Ok(TagOutcome(version=version, tag_name=name, created=True, pushed=False))

        pushed = self._repo.push_ref(self._config.remote, version.git_ref(self.prefix))
        if isinstance(pushed, Err):
            return Err(_from_git(pushed.error))
        self._console.success(f"pushed {name} to {self._config.remote}")
        return Ok(TagOutcome(version=version, tag_name=name, created=True, pushed=True))

    def run(
        self,
        *,
        fetch: bool,
        push: bool,
        target: str | None = None,
        component: Component | None = None,
        dry_run: bool = False,
    ) -> Result[TagOutcome, TaggingError]:
        """Inspect, summarize, resolve and tag."""
        snapshot = self.inspect(fetch=fetch)
        if isinstance(snapshot, Err):
            return snapshot
        self.print_summary(snapshot.value)

        version = self.resolve(snapshot.value, target=target, component=component)
        if isinstance(version, Err):
            return version

        return self.tag(snapshot.value, version.value, push=push, dry_run=dry_run)
