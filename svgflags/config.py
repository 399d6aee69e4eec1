# ==========================================================
# svgflags – Configuration
#
# Features:
#   - Plain dict built from SVGFLAGS_* environment variables
#   - Read lazily, and only by the factories in svgflags.services.factory
#     when the caller passes no explicit config; the services themselves
#     take every setting as an argument
# ==========================================================

from __future__ import annotations

import math
import os
from typing import Any, Dict, Mapping, Optional

from .errors import InvalidArgumentError
from .utils.svg import DEFAULT_INTRINSIC_HEIGHT, DEFAULT_INTRINSIC_WIDTH

DEFAULT_HTTP_TIMEOUT = 15.0

DEFAULT_CONFIG: Dict[str, Any] = {
    # None means "use the bundled assets"
    "asset_dir": None,
    "names_path": None,
    "base_url": None,
    "names_url": None,
    "http_timeout": DEFAULT_HTTP_TIMEOUT,
    "intrinsic_width": DEFAULT_INTRINSIC_WIDTH,
    "intrinsic_height": DEFAULT_INTRINSIC_HEIGHT,
}


def _number(env: Mapping[str, str], name: str, default: float, cast=float):
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise InvalidArgumentError(f"{name} must be a number, got {raw!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise InvalidArgumentError(f"{name} must be positive, got {raw!r}")
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Build the configuration dict from the environment (or a given mapping)."""
    if env is None:
        env = os.environ
    return {
        "asset_dir": env.get("SVGFLAGS_ASSET_DIR") or None,
        "names_path": env.get("SVGFLAGS_NAMES_PATH") or None,
        "base_url": env.get("SVGFLAGS_BASE_URL") or None,
        "names_url": env.get("SVGFLAGS_NAMES_URL") or None,
        "http_timeout": _number(env, "SVGFLAGS_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
        "intrinsic_width": _number(env, "SVGFLAGS_INTRINSIC_WIDTH", DEFAULT_INTRINSIC_WIDTH, int),
        "intrinsic_height": _number(env, "SVGFLAGS_INTRINSIC_HEIGHT", DEFAULT_INTRINSIC_HEIGHT, int),
    }


def resolve_config(config: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """An explicit config over the defaults; the environment only when none is given."""
    if config is None:
        return load_config()
    unknown = set(config) - set(DEFAULT_CONFIG)
    if unknown:
        raise InvalidArgumentError(f"unknown config keys: {sorted(unknown)}")
    merged = dict(DEFAULT_CONFIG)
    merged.update(config)
    return merged
