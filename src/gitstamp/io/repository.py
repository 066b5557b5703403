"""Read-only Git repository access backed by dulwich."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from dulwich.errors import NotGitRepository
from dulwich.repo import Repo

from gitstamp.errors import NoCommitsError, RemoteEnumerationError, RepositoryNotFoundError
from gitstamp.util.paths import absolute_path

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Remote:
    """A configured remote and its URLs in configuration order."""

    name: str
    urls: tuple[str, ...]


class GitRepository:
    """Query surface over an opened repository: identity, remotes and HEAD."""

    def __init__(self, repo: Repo, *, path: Path) -> None:
        self._repo = repo
        self.path = path
        self.absolute_path = absolute_path(path)

    @classmethod
    def open(cls, path: str | Path) -> "GitRepository":
        """Open the repository rooted at `path` (parent directories are not searched)."""

        try:
            repo = Repo(str(path))
        except (NotGitRepository, OSError) as exc:
            raise RepositoryNotFoundError(f"{path} is not a Git repository root.") from exc
        except ValueError as exc:
            # dulwich reads .git/config while opening
            raise RepositoryNotFoundError(f"{path} has an unreadable repository config: {exc}") from exc
        LOGGER.debug("Opened repository at %s", path)
        return cls(repo, path=Path(path))

    @property
    def dir_name(self) -> str:
        return self.absolute_path.name

    def remotes(self) -> list[Remote]:
        """Return configured remotes in the order they appear in the config."""

        try:
            config = self._repo.get_config()
            remotes: list[Remote] = []
            for section in config.sections():
                if len(section) != 2 or section[0].lower() != b"remote":
                    continue
                urls = tuple(value.decode("utf-8") for value in config.get_multivar(section, b"url"))
                remotes.append(Remote(name=section[1].decode("utf-8"), urls=urls))
        except (OSError, ValueError, KeyError) as exc:
            raise RemoteEnumerationError(f"Unable to read remotes of {self.path}: {exc}") from exc
        return remotes

    def head_sha(self) -> str:
        """Return the hex id of the commit HEAD points at."""

        try:
            head = self._repo.head()
        except KeyError as exc:
            raise NoCommitsError(f"HEAD of {self.path} does not resolve to a commit.") from exc
        return head.decode("ascii")

    def close(self) -> None:
        self._repo.close()

    def __enter__(self) -> "GitRepository":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["GitRepository", "Remote"]
