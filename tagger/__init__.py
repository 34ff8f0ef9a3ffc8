"""Release and pre-release tag assistant for git repositories."""

__version__ = "0.4.0"
