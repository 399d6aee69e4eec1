from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .errors import InvalidArgumentError


@dataclass(frozen=True)
class FlagRecord:
    """One country: lowercase code, display name and self-contained SVG markup."""

    code: str
    name: str
    svg: str

    def with_svg(self, svg: str) -> "FlagRecord":
        return replace(self, svg=svg)

    def to_dict(self) -> dict:
        return {"code": self.code, "name": self.name, "svg": self.svg}


def _check_size(label: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    # bool is an int subclass; width=True is a caller bug, not 1px.
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(f"{label} must be a number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidArgumentError(f"{label} must be a positive finite number, got {value!r}")
    return value


@dataclass(frozen=True)
class SizeOptions:
    """Target pixel size. When both are set, width wins."""

    width: Optional[float] = None
    height: Optional[float] = None

    def __post_init__(self) -> None:
        _check_size("width", self.width)
        _check_size("height", self.height)

    @classmethod
    def coerce(cls, value: Any) -> Optional["SizeOptions"]:
        """Accept None, a SizeOptions, or a {"width": ..., "height": ...} mapping."""
        if value is None or isinstance(value, SizeOptions):
            return value
        if isinstance(value, Mapping):
            unknown = set(value) - {"width", "height"}
            if unknown:
                raise InvalidArgumentError(f"unknown size options: {sorted(unknown)}")
            return cls(width=value.get("width"), height=value.get("height"))
        raise InvalidArgumentError(f"size must be SizeOptions or a mapping, got {type(value).__name__}")
