"""Git access used by the tagging service.

Usage:
    from tagger.git import Repository

    repo = Repository(Path("."))
    if repo.is_work_tree():
        print(repo.current_branch())
"""

from tagger.git.repository import CommitSummary, GitError, Repository

__all__ = [
    "CommitSummary",
    "GitError",
    "Repository",
]
