"""Exception types raised by svgflags.

An unknown country code is never an error: lookups return None for it.
These exceptions cover the cases a caller has to tell apart from "no such
country" (retry a failed fetch, report a broken asset, fix a bad argument).
"""

from __future__ import annotations

from typing import Optional


class FlagError(Exception):
    """Base class for every svgflags failure."""


class AssetFetchError(FlagError, IOError):
    """Reading or fetching an SVG asset (or the name table) failed."""

    def __init__(self, message: str, *, code: Optional[str] = None, location: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.location = location


class MalformedAssetError(FlagError, ValueError):
    """SVG content is empty or has no opening <svg> tag."""

    def __init__(self, message: str, *, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class InvalidArgumentError(FlagError, ValueError):
    """Clearly wrong input: a non-string country code or a bad size."""
