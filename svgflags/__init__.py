"""Country flag SVGs keyed by ISO 3166-1 alpha-2 code."""

import logging

from .errors import AssetFetchError, FlagError, InvalidArgumentError, MalformedAssetError
from .logging_utils import setup_logging
from .models import FlagRecord, SizeOptions
from .services.asset_sources import AssetSource, DirectoryAssetSource, HttpAssetSource, MappingAssetSource
from .services.factory import create_country_flags, create_remote_country_flags
from .services.flag_registry import FlagRegistry
from .services.flag_service import AsyncCountryFlags, CountryFlags
from .utils.flags import get_flag_emoji, validate_country_code
from .utils.svg import resize_svg, svg_to_data_url

__version__ = "1.0.0"

# Library: stay silent unless the application configures logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AssetFetchError",
    "AssetSource",
    "AsyncCountryFlags",
    "CountryFlags",
    "DirectoryAssetSource",
    "FlagError",
    "FlagRecord",
    "FlagRegistry",
    "HttpAssetSource",
    "InvalidArgumentError",
    "MalformedAssetError",
    "MappingAssetSource",
    "SizeOptions",
    "create_country_flags",
    "create_remote_country_flags",
    "get_flag_emoji",
    "setup_logging",
    "resize_svg",
    "svg_to_data_url",
    "validate_country_code",
]
