from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

VersionErrorKind = Literal[
    "malformed",
    "version_exists",
    "resolution_exhausted",
]


@dataclass(frozen=True, slots=True)
class VersionError:
    """A failed version operation.

    ``malformed`` is recoverable during a bulk tag scan (the tag is skipped);
    the other kinds are fatal to the proposal they belong to.
    """

    kind: VersionErrorKind
    message: str
    hint: str | None = None


def malformed(text: str, *, expected: str) -> VersionError:
    return VersionError(
        kind="malformed",
        message=f"malformed version: {text!r}",
        hint=f"Expected: {expected}",
    )
