"""Exit codes for the tagger command.

Values are used as process exit codes and must remain stable:
- 0: Success
- 1: User error (bad input, existing version, aborted prompt)
- 2: Environment error (not a repository, detached HEAD, bad config)
- 3: Git error (a local git command failed)
- 4: Network error (fetch or push failed)
- 5: Version resolution error (no free pre-release slot)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3
    NETWORK_ERROR = 4
    RESOLUTION_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
