from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Mapping, Optional

from ..models import FlagRecord
from ..utils.flags import normalize_code
from .asset_sources import AssetSource, codes_in

logger = logging.getLogger(__name__)


def display_name(code: str, names: Mapping[str, str]) -> str:
    """Name from the table, or the uppercased code when none is known."""
    return names.get(code) or code.upper()


class FlagRegistry:
    """Read-only mapping of lowercase country code -> FlagRecord.

    Built in one go by from_source(); if any asset fails to load the whole
    build fails, so a registry that exists is always complete.
    """

    def __init__(self, records: Mapping[str, FlagRecord]):
        self._records: Dict[str, FlagRecord] = dict(records)

    @classmethod
    def from_source(cls, source: AssetSource) -> "FlagRegistry":
        names = source.load_names()
        records: Dict[str, FlagRecord] = {}
        for code in codes_in(source):
            records[code] = FlagRecord(code=code, name=display_name(code, names), svg=source.load_svg(code))
        logger.debug("Loaded %d flags from %s", len(records), source.describe())
        return cls(records)

    def all_codes(self) -> List[str]:
        return list(self._records)

    def has(self, code) -> bool:
        if not isinstance(code, str):
            return False
        return code.strip().lower() in self._records

    def get(self, code) -> Optional[FlagRecord]:
        return self._records.get(normalize_code(code))

    def records(self) -> List[FlagRecord]:
        return list(self._records.values())

    def __contains__(self, code) -> bool:
        return self.has(code)

    def __iter__(self) -> Iterator[FlagRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
