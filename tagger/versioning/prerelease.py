"""Pre-release label codec.

The only accepted label is ``pre<counter>`` (``pre0``, ``pre12``). Counters
have no leading zeros so that decode/format round-trips exactly. Any other
label is rejected instead of being read as counter 0, so tags created by other
tools are never misinterpreted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tagger.core.result import Err, Ok, Result
from tagger.versioning.errors import VersionError, malformed

__all__ = ["LABEL_FORMAT", "MAX_COUNTER", "PrereleaseTag", "decode", "encode", "parse_label"]

LABEL_FORMAT = "pre<N>"

# Counters are unsigned 32-bit, so at most 10 digits.
MAX_COUNTER = 2**32 - 1

_LABEL_RE = re.compile(r"pre(0|[1-9][0-9]{0,9})")


@dataclass(frozen=True, slots=True, order=True)
class PrereleaseTag:
    counter: int

    def __post_init__(self) -> None:
        if self.counter < 0:
            raise ValueError(f"pre-release counter must be >= 0 (got {self.counter})")

    def __str__(self) -> str:
        return f"pre{self.counter}"

    def advance(self, step: int) -> PrereleaseTag:
        """Return the tag ``step`` counters further along."""
        return encode(self.counter + step)


def encode(counter: int) -> PrereleaseTag:
    return PrereleaseTag(counter)


def decode(label: str) -> Result[int, VersionError]:
    """Return the counter embedded in a ``pre<N>`` label."""
    m = _LABEL_RE.fullmatch(label)
    if m is None:
        return Err(malformed(label, expected=LABEL_FORMAT))
    counter = int(m.group(1))
    if counter > MAX_COUNTER:
        return Err(malformed(label, expected=LABEL_FORMAT))
    return Ok(counter)


def parse_label(label: str) -> Result[PrereleaseTag, VersionError]:
    return decode(label).map(encode)
