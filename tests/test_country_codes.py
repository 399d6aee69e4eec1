import pytest

from svgflags import CountryFlags, get_flag_emoji, validate_country_code
from svgflags.errors import InvalidArgumentError
from svgflags.utils.flags import normalize_code


@pytest.mark.parametrize("code", ["us", "US", "Us", "gb", "zz"])
def test_two_letters_are_valid(code):
    assert validate_country_code(code) is True


@pytest.mark.parametrize("code", ["usa", "12", "", "u", "u1", "gb-eng", "us\n", " us", "éé", None, 42, ["us"]])
def test_everything_else_is_invalid(code):
    assert validate_country_code(code) is False


def test_validation_is_format_only(flags):
    # well-formed but unknown, and known but not well-formed
    assert validate_country_code("qq") is True
    assert flags.get_flag("qq") is None
    assert flags.get_flag("gb-eng") is not None
    assert validate_country_code("gb-eng") is False


def test_emoji_for_us():
    assert get_flag_emoji("us") == "\U0001F1FA\U0001F1F8"
    assert get_flag_emoji("US") == get_flag_emoji("us")


def test_emoji_uses_regional_indicator_offset():
    for code in ("fr", "jp", "zz"):
        emoji = get_flag_emoji(code)
        assert [ord(c) for c in emoji] == [ord(c) + 127397 for c in code.upper()]


@pytest.mark.parametrize("code", ["usa", "", "1a", "gb-eng", None])
def test_emoji_absent_for_malformed_codes(code):
    assert get_flag_emoji(code) is None


def test_helpers_callable_without_instance(flags):
    assert CountryFlags.get_flag_emoji("de") == get_flag_emoji("de")
    assert CountryFlags.validate_country_code("de") is True
    assert flags.get_flag_emoji("de") == get_flag_emoji("de")


def test_normalize_code():
    assert normalize_code("  US ") == "us"
    with pytest.raises(InvalidArgumentError):
        normalize_code(None)
    with pytest.raises(InvalidArgumentError):
        normalize_code(840)
