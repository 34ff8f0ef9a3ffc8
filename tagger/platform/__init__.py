"""Process execution helpers."""

from tagger.platform.process import ProcessError, run

__all__ = ["ProcessError", "run"]
