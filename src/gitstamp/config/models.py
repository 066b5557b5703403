"""Pydantic models describing gitstamp configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ManifestShape = Literal["minimal", "standard", "rfc3339"]
NamingMode = Literal["dirname", "archive"]
RedactionStrategy = Literal["strip_userinfo", "host_path"]


def _normalize_extension(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip().lstrip(".")
    if not cleaned:
        raise ValueError("extension must not be empty; omit it to name files without a suffix.")
    return cleaned


class ProfileConfig(BaseModel):
    """One named stamping mode: manifest keys, file naming and redaction."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    shape: ManifestShape = "standard"
    naming: NamingMode = "dirname"
    extension: Optional[str] = None
    archive_prefix: str = Field(default="archive", min_length=1)
    archive_extension: str = "tgz"
    redaction: RedactionStrategy = "strip_userinfo"
    echo_path: bool = False

    @field_validator("extension")
    @classmethod
    def _validate_extension(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_extension(value)

    @property
    def include_repo(self) -> bool:
        """Whether manifests of this shape carry the redacted remote."""

        return self.shape != "minimal"


class RemoteConfig(BaseModel):
    """Remote selection policy."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(default="origin", min_length=1)
    fallback: Literal["first", "error"] = "first"


class OutputConfig(BaseModel):
    """Where and how manifests are written."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    directory: Path = Path(".")
    indent: int = Field(default=4, ge=0)


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    file: Optional[Path] = None


class GitStampConfig(BaseModel):
    """Root configuration object for the stamp command."""

    model_config = ConfigDict(extra="forbid")

    profile: str = "standard"
    profiles: Dict[str, ProfileConfig] = Field(default_factory=lambda: {"standard": ProfileConfig()})
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def _validate_profile(self) -> "GitStampConfig":
        """Ensure the selected profile is defined."""

        if self.profile not in self.profiles:
            known = ", ".join(sorted(self.profiles))
            raise ValueError(f"Unknown profile '{self.profile}'; known profiles: {known}.")
        return self

    def active_profile(self) -> ProfileConfig:
        return self.profiles[self.profile]


class StampSettings(BaseModel):
    """Fully resolved, immutable settings for a single stamp run."""

    model_config = ConfigDict(frozen=True)

    repo_path: Path
    profile_name: str
    profile: ProfileConfig
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    output_dir: Path = Path(".")
    indent: int = Field(default=4, ge=0)


__all__ = [
    "GitStampConfig",
    "LoggingConfig",
    "ManifestShape",
    "NamingMode",
    "OutputConfig",
    "ProfileConfig",
    "RedactionStrategy",
    "RemoteConfig",
    "StampSettings",
]
