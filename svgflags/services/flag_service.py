"""Query service over the flag registry.

Two flavours share one contract:

  CountryFlags       eager: every SVG is read when the object is built, all
                     operations are plain synchronous calls.
  AsyncCountryFlags  lazy: SVGs are fetched on first use (worker thread via
                     asyncio.to_thread) and cached per code; lookups are
                     coroutines.

Unknown codes give None (or an empty list), never an exception. Fetch and
parse failures propagate as AssetFetchError / MalformedAssetError.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional

from ..errors import MalformedAssetError
from ..models import FlagRecord, SizeOptions
from ..utils.flags import get_flag_emoji, normalize_code, validate_country_code
from ..utils.svg import DEFAULT_INTRINSIC_HEIGHT, DEFAULT_INTRINSIC_WIDTH, resize_svg, svg_to_data_url
from .asset_sources import AssetSource, HttpAssetSource, MappingAssetSource, codes_in
from .flag_registry import FlagRegistry, display_name

logger = logging.getLogger(__name__)


def _search_term(query: Any) -> Optional[str]:
    # None / "" / whitespace -> no search at all
    if not isinstance(query, str):
        return None
    term = query.strip().lower()
    return term or None


def _matches(term: str, code: str, name: str) -> bool:
    return term in code.lower() or term in name.lower()


class _FlagQueries:
    """Size handling and the registry-free helpers shared by both services."""

    def __init__(self, intrinsic_width: float, intrinsic_height: float):
        self.intrinsic_width = intrinsic_width
        self.intrinsic_height = intrinsic_height

    # Need no registry state; callable on the class.
    validate_country_code = staticmethod(validate_country_code)
    get_flag_emoji = staticmethod(get_flag_emoji)

    def _sized(self, record: FlagRecord, size: Optional[SizeOptions]) -> FlagRecord:
        if size is None:
            return record
        try:
            svg = resize_svg(record.svg, size, self.intrinsic_width, self.intrinsic_height)
        except MalformedAssetError as exc:
            raise MalformedAssetError(f"cannot resize flag {record.code!r}: {exc}", code=record.code) from exc
        return record.with_svg(svg)


class CountryFlags(_FlagQueries):
    """Eager flag service: registry fully loaded at construction."""

    def __init__(
        self,
        registry: FlagRegistry,
        *,
        intrinsic_width: float = DEFAULT_INTRINSIC_WIDTH,
        intrinsic_height: float = DEFAULT_INTRINSIC_HEIGHT,
    ):
        super().__init__(intrinsic_width, intrinsic_height)
        self.registry = registry

    @classmethod
    def from_source(cls, source: AssetSource, **kwargs) -> "CountryFlags":
        return cls(FlagRegistry.from_source(source), **kwargs)

    @classmethod
    def from_data(
        cls,
        flag_data: Mapping[str, str],
        country_names: Optional[Mapping[str, Any]] = None,
        **kwargs,
    ) -> "CountryFlags":
        """Build from in-memory {code: svg} data and an optional name table."""
        return cls.from_source(MappingAssetSource(flag_data, country_names), **kwargs)

    def get_flag(self, country_code: Any, size: Any = None) -> Optional[FlagRecord]:
        size = SizeOptions.coerce(size)
        record = self.registry.get(country_code)
        if record is None:
            return None
        return self._sized(record, size)

    def get_all_flags(self) -> List[FlagRecord]:
        return self.registry.records()

    def search_flags(self, query: Any) -> List[FlagRecord]:
        term = _search_term(query)
        if term is None:
            return []
        return [r for r in self.registry if _matches(term, r.code, r.name)]

    def get_flag_as_data_url(self, country_code: Any, size: Any = None) -> Optional[str]:
        record = self.get_flag(country_code, size)
        if record is None:
            return None
        return svg_to_data_url(record.svg)

    def get_all_country_codes(self) -> List[str]:
        return self.registry.all_codes()

    def __len__(self) -> int:
        return len(self.registry)


class AsyncCountryFlags(_FlagQueries):
    """Lazy flag service: names up front, SVGs fetched per code on demand."""

    def __init__(
        self,
        source: AssetSource,
        *,
        cache: bool = True,
        intrinsic_width: float = DEFAULT_INTRINSIC_WIDTH,
        intrinsic_height: float = DEFAULT_INTRINSIC_HEIGHT,
    ):
        super().__init__(intrinsic_width, intrinsic_height)
        self.source = source
        self.cache_enabled = cache
        names = source.load_names()
        # Code -> name is complete before the object is usable.
        self._names: Dict[str, str] = {code: display_name(code, names) for code in codes_in(source)}
        self._svg_cache: Dict[str, str] = {}
        logger.debug("Indexed %d flags from %s", len(self._names), source.describe())

    @classmethod
    async def open(cls, source: AssetSource, **kwargs) -> "AsyncCountryFlags":
        """Build without blocking the event loop (the name table may need a fetch)."""
        return await asyncio.to_thread(lambda: cls(source, **kwargs))

    def has(self, country_code: Any) -> bool:
        if not isinstance(country_code, str):
            return False
        return country_code.strip().lower() in self._names

    def get_flag_url(self, country_code: Any) -> Optional[str]:
        """Asset URL for a known code (HTTP sources only), else None."""
        code = normalize_code(country_code)
        if code not in self._names or not isinstance(self.source, HttpAssetSource):
            return None
        return self.source.url_for(code)

    async def _load_record(self, code: str) -> FlagRecord:
        svg = self._svg_cache.get(code)
        if svg is None:
            svg = await asyncio.to_thread(self.source.load_svg, code)
            if self.cache_enabled:
                # Same code fetched twice concurrently yields the same content.
                self._svg_cache[code] = svg
        return FlagRecord(code=code, name=self._names[code], svg=svg)

    async def get_flag(self, country_code: Any, size: Any = None) -> Optional[FlagRecord]:
        size = SizeOptions.coerce(size)
        code = normalize_code(country_code)
        if code not in self._names:
            return None
        record = await self._load_record(code)
        return self._sized(record, size)

    async def get_all_flags(self) -> List[FlagRecord]:
        return list(await asyncio.gather(*(self._load_record(code) for code in self._names)))

    async def search_flags(self, query: Any) -> List[FlagRecord]:
        term = _search_term(query)
        if term is None:
            return []
        hits = [code for code, name in self._names.items() if _matches(term, code, name)]
        return list(await asyncio.gather(*(self._load_record(code) for code in hits)))

    async def get_flag_as_data_url(self, country_code: Any, size: Any = None) -> Optional[str]:
        record = await self.get_flag(country_code, size)
        if record is None:
            return None
        return svg_to_data_url(record.svg)

    def get_all_country_codes(self) -> List[str]:
        return list(self._names)

    def clear_cache(self) -> None:
        self._svg_cache.clear()

    def __len__(self) -> int:
        return len(self._names)
