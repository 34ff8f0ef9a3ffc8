"""Version value type.

Ordering deliberately differs from semver precedence on one point: for the
same ``major.minor.patch`` a release is *greater* than any of its
pre-releases (a release supersedes the work that led to it). Pre-releases of
the same triple are ordered by counter.

    >>> parse("1.2.0").unwrap() > parse("v1.2.0-pre7").unwrap()
    True
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from tagger.core.result import Err, Ok, Result
from tagger.versioning.errors import VersionError, malformed
from tagger.versioning.prerelease import LABEL_FORMAT, PrereleaseTag, encode, parse_label

__all__ = ["MAX_COMPONENT", "Component", "Version", "compare", "parse"]

VERSION_FORMAT = f"MAJOR.MINOR.PATCH[-{LABEL_FORMAT}]"

# Components are unsigned 64-bit, so at most 20 digits.
MAX_COMPONENT = 2**64 - 1

_VERSION_RE = re.compile(
    r"(0|[1-9][0-9]{0,19})\.(0|[1-9][0-9]{0,19})\.(0|[1-9][0-9]{0,19})(?:-(.+))?"
)


class Component(StrEnum):
    """Numeric component selected for a bump."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    @classmethod
    def parse(cls, text: str) -> Component | None:
        try:
            return cls(text.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class Version:
    major: int
    minor: int
    patch: int
    prerelease: PrereleaseTag | None = None

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    @property
    def is_release(self) -> bool:
        return self.prerelease is None

    @property
    def triple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def _key(self) -> tuple[int, int, int, int, int]:
        # Releases rank above every pre-release of their triple.
        if self.prerelease is None:
            return (*self.triple, 1, 0)
        return (*self.triple, 0, self.prerelease.counter)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() >= other._key()

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is None:
            return base
        return f"{base}-{self.prerelease}"

    def bump(self, component: Component) -> Version:
        """Return the next release for ``component``; the pre-release is dropped."""
        match component:
            case Component.MAJOR:
                return Version(self.major + 1, 0, 0)
            case Component.MINOR:
                return Version(self.major, self.minor + 1, 0)
            case Component.PATCH:
                return Version(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected component: {component}")

    def with_prerelease(self, counter: int) -> Version:
        return Version(self.major, self.minor, self.patch, encode(counter))

    def to_tag(self, prefix: str = "v") -> str:
        return f"{prefix}{self}"

    def git_ref(self, prefix: str = "v") -> str:
        return f"refs/tags/{self.to_tag(prefix)}"


def compare(a: Version, b: Version) -> int:
    """Three-way comparison: -1, 0 or 1."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def parse(text: str, prefix: str = "v") -> Result[Version, VersionError]:
    """Parse ``[prefix]MAJOR.MINOR.PATCH[-pre<N>]``.

    The prefix is optional: ``v1.2.3`` and ``1.2.3`` parse to the same value.
    """
    body = text[len(prefix) :] if prefix and text.startswith(prefix) else text
    m = _VERSION_RE.fullmatch(body)
    if m is None:
        return Err(malformed(text, expected=f"{prefix}{VERSION_FORMAT}"))

    major, minor, patch = int(m.group(1)), int(m.group(2)), int(m.group(3))
    if max(major, minor, patch) > MAX_COMPONENT:
        return Err(malformed(text, expected=f"{prefix}{VERSION_FORMAT}"))
    label = m.group(4)
    if label is None:
        return Ok(Version(major, minor, patch))

    pre = parse_label(label)
    if isinstance(pre, Err):
        return Err(malformed(text, expected=f"{prefix}{VERSION_FORMAT}"))
    return Ok(Version(major, minor, patch, pre.value))
