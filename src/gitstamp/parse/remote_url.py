"""Remote URL parsing and credential redaction."""

from __future__ import annotations

import re
from typing import Callable, Mapping, NamedTuple, Optional
from urllib.parse import urlsplit

from gitstamp.errors import UrlParseError

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
# git@github.com:owner/repo.git; single letters are left alone so C:/path stays a path
_SCP_REMOTE = re.compile(
    r"^(?:(?P<userinfo>[^@/]+)@)?(?P<host>\[[^\]/]+\]|[^:/\[\]@]{2,}):(?P<path>(?!//).*)$"
)
# user:pass@host/path without a scheme; userinfo runs to the last @ before the first /
_SCHEMELESS_AUTHORITY = re.compile(r"^(?P<userinfo>[^/]*)@(?P<host>\[[^\]/]+\]|[^@/:]+)(?::\d*)?(?P<path>/.*)?$")


class RemoteParts(NamedTuple):
    userinfo: Optional[str]
    host: Optional[str]
    path: str


def split_remote(raw: str) -> RemoteParts:
    """Split a remote string into userinfo, host and path.

    Accepts URL forms (``https://user:pw@host/path``), SCP-style shorthand
    (``user@host:path``) and bare local names. Raises ``UrlParseError`` for
    strings that cannot be a remote location.
    """

    if _CONTROL_CHARS.search(raw):
        raise UrlParseError(f"Remote URL {raw!r} contains control characters.")

    if "://" not in raw:
        scp = _SCP_REMOTE.match(raw)
        if scp and "@" not in scp.group("path").split("/", 1)[0]:
            return RemoteParts(scp.group("userinfo"), scp.group("host"), scp.group("path"))
        authority = _SCHEMELESS_AUTHORITY.match(raw)
        if authority:
            return RemoteParts(authority.group("userinfo"), authority.group("host"), authority.group("path") or "")

    try:
        parts = urlsplit(raw)
        _ = parts.port  # raises ValueError on a malformed port
    except ValueError as exc:
        raise UrlParseError(f"Cannot parse remote URL {raw!r}: {exc}") from exc

    userinfo: Optional[str] = None
    if "@" in parts.netloc:
        userinfo = parts.netloc.rpartition("@")[0]
    host = parts.hostname
    if host and ":" in host:
        host = f"[{host}]"
    return RemoteParts(userinfo, host or None, parts.path)


def strip_userinfo(raw: str) -> str:
    """Remove embedded ``user[:password]@`` from ``raw``, leaving the rest untouched."""

    userinfo = split_remote(raw).userinfo
    if userinfo is None:
        return raw
    return raw.replace(f"{userinfo}@", "", 1)


def host_path(raw: str) -> str:
    """Render ``raw`` as SSH-style ``host:path`` without scheme, userinfo, query or fragment."""

    parts = split_remote(raw)
    if not parts.host:
        return parts.path or raw
    return f"{parts.host}:{parts.path.lstrip('/')}"


REDACTION_STRATEGIES: Mapping[str, Callable[[str], str]] = {
    "strip_userinfo": strip_userinfo,
    "host_path": host_path,
}


def redact_remote_url(raw: str, *, strategy: str = "strip_userinfo") -> str:
    """Apply the named redaction strategy to a remote URL."""

    try:
        redactor = REDACTION_STRATEGIES[strategy]
    except KeyError as exc:
        raise ValueError(f"Unknown redaction strategy '{strategy}'.") from exc
    return redactor(raw)


__all__ = [
    "REDACTION_STRATEGIES",
    "RemoteParts",
    "host_path",
    "redact_remote_url",
    "split_remote",
    "strip_userinfo",
]
