"""Entry points that turn configuration into a ready flag service.

With no config argument the SVGFLAGS_* environment variables are read at call
time; an explicit config dict is used as given (over the defaults) and the
environment is ignored.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..config import resolve_config
from ..errors import InvalidArgumentError
from .asset_sources import DirectoryAssetSource, HttpAssetSource
from .flag_service import AsyncCountryFlags, CountryFlags

logger = logging.getLogger(__name__)


def create_country_flags(config: Optional[Mapping[str, Any]] = None) -> CountryFlags:
    """Eager service over a flag directory (the bundled one unless asset_dir is set)."""
    cfg = resolve_config(config)
    if cfg.get("asset_dir"):
        source = DirectoryAssetSource(cfg["asset_dir"], cfg.get("names_path"))
    else:
        source = DirectoryAssetSource.bundled()
    flags = CountryFlags.from_source(
        source,
        intrinsic_width=cfg["intrinsic_width"],
        intrinsic_height=cfg["intrinsic_height"],
    )
    logger.debug("Flag service ready with %d flags (%s)", len(flags), source.describe())
    return flags


def create_remote_country_flags(config: Optional[Mapping[str, Any]] = None, *, names=None) -> AsyncCountryFlags:
    """Lazy async service fetching flags from base_url.

    Names come from the names mapping, names_url, or (failing both) the
    bundled name table.
    """
    cfg = resolve_config(config)
    if not cfg.get("base_url"):
        raise InvalidArgumentError("create_remote_country_flags needs a base_url")
    if names is None and not cfg.get("names_url"):
        names = DirectoryAssetSource.bundled().load_names()
    source = HttpAssetSource(
        cfg["base_url"],
        names=names,
        names_url=cfg.get("names_url"),
        timeout=cfg["http_timeout"],
    )
    return AsyncCountryFlags(
        source,
        intrinsic_width=cfg["intrinsic_width"],
        intrinsic_height=cfg["intrinsic_height"],
    )
