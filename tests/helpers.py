from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from dulwich import porcelain
from dulwich.repo import Repo

from gitstamp.config import ProfileConfig, RemoteConfig, StampSettings

# 1700000000 seconds since the epoch
FIXED_MOMENT = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
FIXED_EPOCH = 1700000000

AUTHOR = b"Test <test@example.com>"


def fixed_clock() -> datetime:
    return FIXED_MOMENT


def make_repository(
    root: Path,
    name: str = "myproj",
    *,
    remotes: Iterable[tuple[str, str]] = (),
    commits: int = 1,
) -> tuple[Path, str | None]:
    """Create a repository under `root` and return its path and HEAD sha (None when unborn)."""

    repo_path = root / name
    porcelain.init(str(repo_path))
    for remote_name, url in remotes:
        porcelain.remote_add(str(repo_path), remote_name, url)

    head: str | None = None
    for index in range(commits):
        target = repo_path / "file.txt"
        target.write_text(f"v{index}", encoding="utf-8")
        porcelain.add(str(repo_path), paths=[str(target)])
        sha = porcelain.commit(
            str(repo_path),
            message=f"commit {index}".encode("utf-8"),
            author=AUTHOR,
            committer=AUTHOR,
        )
        head = sha.decode("ascii") if isinstance(sha, (bytes, bytearray)) else str(sha)
    return repo_path, head


def add_remote_without_url(repo_path: Path, name: str) -> None:
    """Declare a remote section that only carries a fetch refspec."""

    with Repo(str(repo_path)) as repo:
        config = repo.get_config()
        config.set((b"remote", name.encode("utf-8")), b"fetch", f"+refs/heads/*:refs/remotes/{name}/*".encode("utf-8"))
        config.write_to_path()


def break_repository_config(repo_path: Path) -> None:
    """Leave .git/config with an unterminated section header."""

    (repo_path / ".git" / "config").write_text("[core\n", encoding="utf-8")


def make_settings(
    repo_path: Path,
    *,
    output_dir: Path | None = None,
    profile_name: str = "standard",
    fallback: str = "first",
    **profile_fields: object,
) -> StampSettings:
    return StampSettings(
        repo_path=repo_path,
        profile_name=profile_name,
        profile=ProfileConfig(**profile_fields),
        remote=RemoteConfig(fallback=fallback),
        output_dir=output_dir if output_dir is not None else Path("."),
    )


def reset_logging() -> None:
    """Drop handlers bound to streams from earlier tests."""

    logger = logging.getLogger("gitstamp")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
