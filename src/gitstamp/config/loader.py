"""Config loading entry points for gitstamp."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from gitstamp.errors import ConfigError

from .models import GitStampConfig, ProfileConfig, RemoteConfig, StampSettings

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for earlier interpreters
    import tomli as tomllib  # type: ignore[assignment]

DEFAULT_CONFIG_PATH = Path(__file__).resolve().with_name("gitstamp.default.yaml")
PROFILE_ENV_VAR = "GITSTAMP_PROFILE"
EXPORT_SUFFIXES = frozenset({".yaml", ".yml", ".json"})


def load_config(
    path: Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> GitStampConfig:
    """Load the gitstamp configuration applying optional overrides.

    The profile is taken from, in order: ``overrides``, ``$GITSTAMP_PROFILE``,
    the user config file, then the shipped default.
    """

    default_data = _expect_mapping(_read_structured_file(DEFAULT_CONFIG_PATH), DEFAULT_CONFIG_PATH)

    if path:
        config_data = _expect_mapping(_read_structured_file(path), path)
    else:
        config_data = {}

    merged: dict[str, Any] = _deep_merge(default_data, config_data)

    env_profile = os.getenv(PROFILE_ENV_VAR)
    if env_profile and env_profile.strip():
        merged["profile"] = env_profile.strip()

    if overrides:
        merged = _deep_merge(merged, _expand_override_keys(overrides))

    try:
        return GitStampConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def resolve_settings(
    config: GitStampConfig,
    *,
    repo_path: str | Path | None,
    extension: str | None = None,
    output_dir: Path | None = None,
    remote_fallback: str | None = None,
) -> StampSettings:
    """Build the settings for one run from config plus command-line values.

    `extension` replaces the profile's extension when given; an empty string
    is rejected rather than treated as "no extension".
    """

    if repo_path is None or not str(repo_path).strip():
        raise ConfigError("Please provide a valid path to the Git repository using the --path flag.")

    profile = config.active_profile()
    remote = config.remote
    try:
        if extension is not None:
            profile = ProfileConfig.model_validate({**profile.model_dump(), "extension": extension})
        if remote_fallback is not None:
            remote = RemoteConfig.model_validate({**remote.model_dump(), "fallback": remote_fallback})
        return StampSettings(
            repo_path=Path(repo_path),
            profile_name=config.profile,
            profile=profile,
            remote=remote,
            output_dir=output_dir if output_dir is not None else config.output.directory,
            indent=config.output.indent,
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc


def dump_example_config(dest: Path) -> None:
    """Write the shipped default profiles to ``dest`` as YAML or JSON.

    TOML is readable by :func:`load_config` but has no writer in the stack,
    so a ``.toml`` destination is rejected before anything touches disk.
    """

    suffix = dest.suffix.lower()
    if suffix not in EXPORT_SUFFIXES:
        allowed = ", ".join(sorted(EXPORT_SUFFIXES))
        raise ConfigError(f"Cannot export config to {dest.name}: use one of {allowed}.")

    defaults = _read_structured_file(DEFAULT_CONFIG_PATH)
    if suffix == ".json":
        text = json.dumps(defaults, indent=2) + "\n"
    else:
        text = yaml.safe_dump(defaults, sort_keys=False)
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot write example config {dest}: {exc}") from exc


def _expect_mapping(payload: Any, source: Path) -> dict[str, Any]:
    if payload is None:
        return {}
    if isinstance(payload, Mapping):
        return dict(payload)
    raise ConfigError(f"{source} must hold a mapping of settings, not {type(payload).__name__}.")


def _read_structured_file(path: Path) -> Any:
    """Return the parsed contents of a YAML/TOML/JSON file."""

    if not path.exists():
        raise ConfigError(f"Config file {path} does not exist.")

    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read config file {path}: {exc}") from exc

    try:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(text) or {}
        if suffix == ".toml":
            return tomllib.loads(text)
        if suffix == ".json":
            return json.loads(text)
    except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Unable to parse config file {path}: {exc}") from exc

    raise ConfigError(f"Unsupported config format for {path}")


def _deep_merge(base: Mapping[str, Any], extra: Mapping[str, Any]) -> dict[str, Any]:
    """Return `base` updated by `extra`; nested sections (profiles, remote) merge key by key."""

    merged = dict(base)
    for key, value in extra.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            value = _deep_merge(current, value)
        merged[key] = value
    return merged


def _expand_override_keys(overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Turn ``{"remote.fallback": "error"}`` into ``{"remote": {"fallback": "error"}}``."""

    nested: dict[str, Any] = {}
    for key, value in overrides.items():
        nested = _deep_merge(nested, _nest_dotted_key(key, value))
    return nested


def _nest_dotted_key(key: Any, value: Any) -> dict[str, Any]:
    if not isinstance(key, str):
        return {key: value}
    *sections, leaf = key.split(".")
    node: dict[str, Any] = {leaf: value}
    for section in reversed(sections):
        node = {section: node}
    return node


__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "PROFILE_ENV_VAR",
    "dump_example_config",
    "load_config",
    "resolve_settings",
]
