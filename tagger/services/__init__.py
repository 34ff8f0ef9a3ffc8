"""Services combining git access, prompts and version resolution."""

from tagger.services.tagging import (
    RepoSnapshot,
    TagOutcome,
    TaggingError,
    TaggingService,
    release_notes,
)

__all__ = [
    "RepoSnapshot",
    "TagOutcome",
    "TaggingError",
    "TaggingService",
    "release_notes",
]
