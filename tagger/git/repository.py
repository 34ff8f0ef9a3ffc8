"""Git repository access for tagging.

Wraps the ``git`` command line. Every operation that can fail returns a
Result; nothing here raises for a failing git command.

Usage:
    repo = Repository(Path("."))

    match repo.tag_names():
        case Ok(names):
            print(f"{len(names)} tags")
        case Err(e):
            print(f"Error: {e.message}")

    # Reachability of a tag from HEAD
    repo.is_ancestor("refs/tags/v1.2.0-pre1")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tagger.core.result import Err, Ok, Result
from tagger.platform.process import ProcessError
from tagger.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

_NETWORK_COMMANDS = frozenset({"fetch", "pull", "push", "clone"})

__all__ = [
    "CommitSummary",
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1

    @property
    def is_network(self) -> bool:
        return self.command.split(" ", 1)[0] in _NETWORK_COMMANDS


@dataclass(frozen=True, slots=True)
class CommitSummary:
    sha: str
    summary: str

    @property
    def short_sha(self) -> str:
        return self.sha[:7]


class Repository:
    """A git work tree.

    Attributes:
        path: Path to the repository (or any directory inside it)
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def is_work_tree(self) -> bool:
        """Check that ``path`` is inside a git work tree."""
        result = self._run(["rev-parse", "--is-inside-work-tree"])
        match result:
            case Ok(stdout):
                return stdout.strip() == "true"
            case Err(_):
                return False

    def root(self) -> Result[Path, GitError]:
        """Top-level directory of the work tree."""
        return self._stdout("rev-parse --show-toplevel", ["rev-parse", "--show-toplevel"]).map(
            lambda out: Path(out.strip())
        )

    def current_branch(self) -> str | None:
        """Get current branch name.

        Returns None on a detached HEAD or error.
        """
        result = self._run(["symbolic-ref", "--quiet", "--short", "HEAD"])
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def fetch_tags(self, remote: str) -> Result[str, GitError]:
        """Fetch all tags from ``remote``."""
        return self._stdout("fetch --tags", ["fetch", "--tags", remote]).map(str.strip)

    def tag_names(self) -> Result[list[str], GitError]:
        """List every tag name in the repository."""
        return self._stdout("tag --list", ["tag", "--list"]).map(
            lambda out: [ln.strip() for ln in out.splitlines() if ln.strip()]
        )

    def is_ancestor(self, ref: str, of: str = "HEAD") -> bool:
        """True if ``ref`` is reachable from ``of``.

        git exits 1 for "not an ancestor"; any other failure (unknown ref)
        also counts as unreachable.
        """
        result = self._run(["merge-base", "--is-ancestor", ref, of])
        return isinstance(result, Ok)

    def commits_since(self, exclude_refs: list[str]) -> Result[list[CommitSummary], GitError]:
        """Commits reachable from HEAD but not from any of ``exclude_refs``.

        Newest first. The refs go to git on stdin, so any number of tags fits.
        """
        if not exclude_refs:
            return self._stdout("log", ["log", "--format=%H%x09%s", "HEAD"]).map(_parse_log)
        excluded = "".join(f"^{ref}\n" for ref in exclude_refs)
        return self._stdout(
            "log", ["log", "--format=%H%x09%s", "--stdin", "HEAD"], input=excluded
        ).map(_parse_log)

    def create_tag(self, name: str, message: str) -> Result[None, GitError]:
        """Create an annotated tag on HEAD."""
        return self._stdout("tag -a", ["tag", "-a", name, "-m", message]).map(lambda _out: None)

    def push_ref(self, remote: str, ref: str) -> Result[str, GitError]:
        return self._stdout("push", ["push", remote, ref]).map(str.strip)

    def _stdout(
        self, command: str, args: list[str], *, input: str | None = None
    ) -> Result[str, GitError]:
        """Run git and convert a process failure into a GitError."""
        result = self._run(args, input=input)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=command,
                        message=e.stderr.strip() or e.stdout.strip() or f"git {command} failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout)

    def _run(self, args: list[str], *, input: str | None = None) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS if command in _NETWORK_COMMANDS else _GIT_TIMEOUT_SECONDS
        )
        return run_process(
            ["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout, input=input
        )


def _parse_log(output: str) -> list[CommitSummary]:
    commits: list[CommitSummary] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        sha, _, summary = line.partition("\t")
        commits.append(CommitSummary(sha=sha.strip(), summary=summary.strip()))
    return commits
