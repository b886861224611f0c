"""Open targets and domain-key derivation.

A target is one file or URI waiting to be handed to a handler. Remembered
defaults are keyed by the target's *domain key*: the first three
``/``-delimited segments of its URI, i.e. ``scheme://host[:port]``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from browdi.domain.errors import MalformedURIError

WEB_SCHEMES: frozenset[str] = frozenset({"http", "https"})

# RFC 3986 scheme; two or more chars so ``C:\path`` stays a path.
_SCHEME_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]+):")


@dataclass(frozen=True)
class OpenTarget:
    """A file or URI pending dispatch."""

    uri: str
    scheme: str

    @classmethod
    def from_uri(cls, uri: str) -> OpenTarget:
        """Build a target from a URI string, lower-casing its scheme."""
        match = _SCHEME_RE.match(uri)
        scheme = match.group(1).lower() if match else ""
        return cls(uri=uri, scheme=scheme)

    @property
    def is_web(self) -> bool:
        """Whether the target is an http(s) URI."""
        return self.scheme in WEB_SCHEMES


def target_from_argument(arg: str, *, cwd: Path | None = None) -> OpenTarget:
    """Convert a command-line argument to an :class:`OpenTarget`.

    Arguments carrying a URI scheme are kept verbatim. Anything else is a
    local path and becomes an absolute ``file://`` URI.
    """
    if _SCHEME_RE.match(arg):
        return OpenTarget.from_uri(arg)
    path = Path(arg).expanduser()
    if not path.is_absolute():
        path = (cwd or Path.cwd()) / path
    return OpenTarget(uri=path.resolve().as_uri(), scheme="file")


def domain_key_of(target: OpenTarget) -> str:
    """Return ``scheme://host[:port]`` for *target*.

    Raises:
        MalformedURIError: The URI lacks an authority component.
    """
    parts = target.uri.split("/", 3)
    if len(parts) < 3 or parts[1] != "" or not parts[2] or not parts[0].endswith(":"):
        msg = f"Cannot derive a domain key from {target.uri!r}"
        raise MalformedURIError(msg)
    return "/".join(parts[:3])


def web_domain_key(target: OpenTarget) -> str | None:
    """Domain key for http(s) targets; None when ineligible or malformed."""
    if not target.is_web:
        return None
    try:
        return domain_key_of(target)
    except MalformedURIError:
        return None
