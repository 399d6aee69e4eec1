import asyncio
import threading

import pytest

from svgflags import AsyncCountryFlags, HttpAssetSource, MappingAssetSource
from svgflags.errors import AssetFetchError, InvalidArgumentError
from svgflags.utils.svg import data_url_to_svg

from .conftest import SAMPLE_NAMES, SAMPLE_SVGS


class CountingSource(MappingAssetSource):
    def __init__(self, *args, fail=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fail = set(fail)
        self.calls = []
        self._lock = threading.Lock()

    def load_svg(self, code):
        with self._lock:
            self.calls.append(code)
        if code in self.fail:
            raise AssetFetchError(f"timeout fetching {code}", code=code)
        return super().load_svg(code)


@pytest.fixture
def source():
    return CountingSource(SAMPLE_SVGS, SAMPLE_NAMES)


def test_lookup_fetches_on_demand_and_caches(source):
    service = AsyncCountryFlags(source)
    assert source.calls == []

    async def scenario():
        first = await service.get_flag("US")
        second = await service.get_flag("us", {"width": 90})
        return first, second

    first, second = asyncio.run(scenario())
    assert first.code == "us" and first.name == "United States"
    assert first.svg == SAMPLE_SVGS["us"]
    assert 'height="45"' in second.svg
    assert source.calls == ["us"]


def test_cache_can_be_disabled(source):
    service = AsyncCountryFlags(source, cache=False)

    async def scenario():
        await service.get_flag("fr")
        await service.get_flag("fr")

    asyncio.run(scenario())
    assert source.calls == ["fr", "fr"]


def test_clear_cache_forces_refetch(source):
    service = AsyncCountryFlags(source)
    asyncio.run(service.get_flag("fr"))
    service.clear_cache()
    asyncio.run(service.get_flag("fr"))
    assert source.calls == ["fr", "fr"]


def test_unknown_code_is_absent_without_fetch(source):
    service = AsyncCountryFlags(source)
    assert asyncio.run(service.get_flag("qq")) is None
    assert asyncio.run(service.get_flag_as_data_url("qq")) is None
    assert source.calls == []


def test_fetch_failure_is_not_absent():
    service = AsyncCountryFlags(CountingSource(SAMPLE_SVGS, SAMPLE_NAMES, fail={"de"}))
    with pytest.raises(AssetFetchError):
        asyncio.run(service.get_flag("de"))
    # a failed fetch is not cached
    with pytest.raises(AssetFetchError):
        asyncio.run(service.get_flag("de"))


def test_non_string_code_raises(source):
    with pytest.raises(InvalidArgumentError):
        asyncio.run(AsyncCountryFlags(source).get_flag(None))


def test_get_all_flags_matches_codes(source):
    service = AsyncCountryFlags(source)
    records = asyncio.run(service.get_all_flags())
    assert [r.code for r in records] == service.get_all_country_codes()
    assert len(records) == len(service)


def test_search_only_fetches_matches(source):
    service = AsyncCountryFlags(source)
    hits = asyncio.run(service.search_flags("united"))
    assert sorted(r.name for r in hits) == ["United Arab Emirates", "United Kingdom", "United States"]
    assert sorted(source.calls) == ["ae", "gb", "us"]
    assert asyncio.run(service.search_flags("")) == []
    assert asyncio.run(service.search_flags(None)) == []


def test_concurrent_lookups_resolve_independently(source):
    service = AsyncCountryFlags(source)

    async def scenario():
        return await asyncio.gather(*(service.get_flag(c) for c in ("us", "us", "fr", "qq")))

    us1, us2, fr, missing = asyncio.run(scenario())
    assert us1 == us2
    assert fr.code == "fr"
    assert missing is None


def test_data_url_round_trip(source):
    service = AsyncCountryFlags(source)

    async def scenario():
        url = await service.get_flag_as_data_url("gb", {"width": 64})
        record = await service.get_flag("gb", {"width": 64})
        return url, record

    url, record = asyncio.run(scenario())
    assert data_url_to_svg(url) == record.svg


def test_open_builds_off_the_event_loop(source):
    service = asyncio.run(AsyncCountryFlags.open(source, cache=False))
    assert service.cache_enabled is False
    assert service.has("GB")
    assert not service.has(3)


def test_flag_url_only_for_http_sources(source):
    assert AsyncCountryFlags(source).get_flag_url("us") is None
    remote = AsyncCountryFlags(HttpAssetSource("https://cdn.example.org/flags/", names={"us": "United States"}))
    assert remote.get_flag_url("US") == "https://cdn.example.org/flags/us.svg"
    assert remote.get_flag_url("qq") is None


def test_static_helpers():
    assert AsyncCountryFlags.get_flag_emoji("us") == "\U0001F1FA\U0001F1F8"
    assert AsyncCountryFlags.validate_country_code("usa") is False
