"""Manifest generation: repository metadata in, stamped JSON record out."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from gitstamp.config.models import ManifestShape, ProfileConfig, RemoteConfig, StampSettings
from gitstamp.errors import InvalidCommitIdError, RemoteEnumerationError
from gitstamp.io.repository import GitRepository, Remote
from gitstamp.parse.remote_url import redact_remote_url
from gitstamp.util.manifest import render_manifest, write_manifest
from gitstamp.util.paths import output_dir_from_config, slash_basename

LOGGER = logging.getLogger(__name__)

SHORT_SHA_LENGTH = 7
TIME_WITH_ZONE_FORMAT = "%Y-%m-%d %H:%M:%S %z %Z"

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Current wall-clock time in the local zone."""
    return datetime.now().astimezone()


class Manifest(BaseModel):
    """Provenance and naming record produced once per run."""

    model_config = ConfigDict(frozen=True)

    epoch_time: int
    time_with_zone: str
    time_rfc3339: str
    sha: str
    short_sha: str
    file_name: str
    repo: Optional[str] = None

    def to_payload(self, shape: ManifestShape) -> dict[str, Any]:
        """Return the JSON object for `shape`, keys in output order."""

        commit = {"SHA": self.sha, "ShortSHA": self.short_sha, "FileName": self.file_name}
        if shape == "minimal":
            return commit
        if shape == "standard":
            return {"EpochTime": self.epoch_time, "TimeWithZone": self.time_with_zone, **commit, "Repo": self.repo}
        if shape == "rfc3339":
            return {"EpochTime": self.epoch_time, "Time": self.time_rfc3339, **commit, "Repo": self.repo}
        raise ValueError(f"Unknown manifest shape '{shape}'.")


def short_sha(sha: str, *, length: int = SHORT_SHA_LENGTH) -> str:
    """Return the abbreviated commit id."""

    if len(sha) < length:
        raise InvalidCommitIdError(f"Commit id {sha!r} is shorter than {length} characters.")
    return sha[:length]


def compose_file_name(dir_name: str, epoch_time: int, *, profile: ProfileConfig) -> str:
    """Return the artifact name for the profile's naming mode."""

    if profile.naming == "archive":
        return f"{profile.archive_prefix}_{epoch_time}.{profile.archive_extension}"
    name = f"{dir_name}_{epoch_time}"
    if profile.extension:
        name = f"{name}.{profile.extension}"
    return name


def select_remote_url(remotes: Sequence[Remote], *, policy: RemoteConfig, synthetic: str) -> str:
    """Pick the remote URL to record.

    The remote named ``policy.name`` wins. Without any remotes `synthetic` is
    used. When remotes exist but none matches, ``policy.fallback`` decides
    between the first configured remote and an error.
    """

    if not remotes:
        LOGGER.info("No remotes configured; using %s", synthetic)
        return synthetic

    chosen = next((remote for remote in remotes if remote.name == policy.name), None)
    if chosen is None:
        names = ", ".join(remote.name for remote in remotes)
        if policy.fallback == "error":
            raise RemoteEnumerationError(f"No remote named '{policy.name}' (found: {names}).")
        chosen = remotes[0]
        LOGGER.warning("No remote named '%s'; falling back to '%s'", policy.name, chosen.name)

    if not chosen.urls:
        raise RemoteEnumerationError(f"Remote '{chosen.name}' has no URL configured.")
    return chosen.urls[0]


class ManifestBuilder:
    """Turns an opened repository plus run settings into a written manifest."""

    def __init__(self, settings: StampSettings, *, clock: Clock = local_now) -> None:
        self.settings = settings
        self._clock = clock

    def build(self, repository: GitRepository) -> Manifest:
        profile = self.settings.profile
        LOGGER.info("Repository path: %s", repository.absolute_path)
        LOGGER.info("Directory name: %s", repository.dir_name)

        repo_url: Optional[str] = None
        if profile.include_repo:
            remote_url = select_remote_url(
                repository.remotes(),
                policy=self.settings.remote,
                synthetic=slash_basename(repository.path),
            )
            repo_url = redact_remote_url(remote_url, strategy=profile.redaction)
            LOGGER.info("Remote %s URL: %s", self.settings.remote.name, repo_url)

        sha = repository.head_sha()
        abbreviated = short_sha(sha)
        LOGGER.info("SHA: %s (short %s)", sha, abbreviated)

        # one reading feeds every time field
        moment = self._clock()
        epoch_time = int(moment.timestamp())
        file_name = compose_file_name(repository.dir_name, epoch_time, profile=profile)
        LOGGER.info("File name: %s", file_name)

        return Manifest(
            epoch_time=epoch_time,
            time_with_zone=moment.strftime(TIME_WITH_ZONE_FORMAT),
            time_rfc3339=moment.isoformat(timespec="seconds"),
            sha=sha,
            short_sha=abbreviated,
            file_name=file_name,
            repo=repo_url,
        )

    def render(self, manifest: Manifest) -> str:
        return render_manifest(manifest.to_payload(self.settings.profile.shape), indent=self.settings.indent)

    def write(self, manifest: Manifest) -> Path:
        dest = write_manifest(
            manifest.to_payload(self.settings.profile.shape),
            dest_dir=output_dir_from_config(self.settings.output_dir),
            epoch_time=manifest.epoch_time,
            indent=self.settings.indent,
        )
        LOGGER.info("Wrote manifest %s", dest)
        return dest

    def collect(self) -> Manifest:
        """Open the configured repository and build its manifest without writing it."""

        with GitRepository.open(self.settings.repo_path) as repository:
            return self.build(repository)

    def run(self) -> tuple[Manifest, Path]:
        """Gather all metadata, then write the manifest."""

        manifest = self.collect()
        return manifest, self.write(manifest)


__all__ = [
    "Clock",
    "Manifest",
    "ManifestBuilder",
    "SHORT_SHA_LENGTH",
    "TIME_WITH_ZONE_FORMAT",
    "compose_file_name",
    "local_now",
    "select_remote_url",
    "short_sha",
]
