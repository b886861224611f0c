"""Domain exceptions raised by registry lookups and URI parsing."""

from __future__ import annotations


class InvalidIndexError(IndexError):
    """A handler index or id does not address a registry entry."""


class MalformedURIError(ValueError):
    """A target URI has no ``scheme://host`` prefix to derive a domain key from."""
