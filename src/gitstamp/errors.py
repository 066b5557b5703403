"""Error taxonomy shared across gitstamp modules."""

from __future__ import annotations


class GitStampError(RuntimeError):
    """Base class for every error reported by the stamp command."""


class ConfigError(GitStampError):
    """Raised when configuration files or command-line settings are invalid."""


class RepositoryNotFoundError(GitStampError):
    """Raised when a path does not resolve to a Git repository root."""


class RemoteEnumerationError(GitStampError):
    """Raised when remotes cannot be read or no usable remote exists."""


class UrlParseError(GitStampError, ValueError):
    """Raised when a remote URL cannot be parsed for redaction."""


class NoCommitsError(GitStampError):
    """Raised when HEAD does not resolve to a commit."""


class InvalidCommitIdError(GitStampError):
    """Raised when a commit id is too short to abbreviate."""


class ManifestWriteError(GitStampError):
    """Raised when the manifest file cannot be created or written."""


__all__ = [
    "ConfigError",
    "GitStampError",
    "InvalidCommitIdError",
    "ManifestWriteError",
    "NoCommitsError",
    "RemoteEnumerationError",
    "RepositoryNotFoundError",
    "UrlParseError",
]
