"""Where flag SVGs and display names come from.

Every source answers three questions:
  - list_codes(): which country codes it can supply (lowercase)
  - load_svg(code): the raw SVG text for one of those codes
  - load_names(): code -> display name

Sources raise AssetFetchError when bytes cannot be obtained and
MalformedAssetError when they are obtained but are not usable SVG. A code the
source does not know is reported by load_svg() as AssetFetchError too; the
services check list_codes() first so callers only ever see None for those.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import requests

from ..errors import AssetFetchError, InvalidArgumentError, MalformedAssetError
from ..logging_utils import SourceLoggerAdapter

PathLike = Union[str, os.PathLike]

BUNDLED_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def parse_name_table(raw: Any, *, location: str = "<names>") -> Dict[str, str]:
    """Normalize a name table to {lowercase code: display name}.

    Accepts {"us": "United States"} or {"us": {"name": "United States", "emoji": ...}}.
    Entries without a usable name are skipped; the registry falls back to the
    uppercased code for them.
    """
    if not isinstance(raw, Mapping):
        raise MalformedAssetError(f"name table {location} must be a JSON object")
    names: Dict[str, str] = {}
    for code, value in raw.items():
        if isinstance(value, Mapping):
            value = value.get("name")
        if isinstance(value, str) and value.strip():
            names[str(code).strip().lower()] = value.strip()
    return names


def _check_svg(svg: str, code: str) -> str:
    if not svg or not svg.strip():
        raise MalformedAssetError(f"empty SVG for {code!r}", code=code)
    return svg


class AssetSource:
    """Base class for asset sources."""

    kind = "source"

    def list_codes(self) -> List[str]:
        raise NotImplementedError

    def load_svg(self, code: str) -> str:
        raise NotImplementedError

    def load_names(self) -> Dict[str, str]:
        return {}

    def describe(self) -> str:
        return self.kind


class MappingAssetSource(AssetSource):
    """In-memory flag data, e.g. {"us": "<svg ...>"} plus an optional name table."""

    kind = "mapping"

    def __init__(self, svgs: Mapping[str, str], names: Optional[Mapping[str, Any]] = None):
        self._svgs = {str(code).strip().lower(): svg for code, svg in svgs.items()}
        self._names = parse_name_table(names or {})

    def list_codes(self) -> List[str]:
        return list(self._svgs)

    def load_svg(self, code: str) -> str:
        try:
            svg = self._svgs[code]
        except KeyError:
            raise AssetFetchError(f"no SVG for {code!r}", code=code) from None
        return _check_svg(svg, code)

    def load_names(self) -> Dict[str, str]:
        return dict(self._names)


class DirectoryAssetSource(AssetSource):
    """One <code>.svg file per flag, plus an optional JSON name table.

    The file stem (lowercased) is the country code. Files that are not .svg
    are ignored.
    """

    kind = "dir"

    def __init__(self, flags_dir: PathLike, names_path: Optional[PathLike] = None):
        self.flags_dir = Path(flags_dir)
        self.names_path = Path(names_path) if names_path is not None else None
        self.log = SourceLoggerAdapter.for_source(__name__, self.kind, str(self.flags_dir))

    @classmethod
    def bundled(cls) -> "DirectoryAssetSource":
        """The flags and names shipped inside the package."""
        return cls(BUNDLED_DATA_DIR / "flags", BUNDLED_DATA_DIR / "names.json")

    def describe(self) -> str:
        return f"{self.kind}:{self.flags_dir}"

    def _svg_paths(self) -> Dict[str, Path]:
        try:
            entries = sorted(self.flags_dir.iterdir())
        except OSError as exc:
            raise AssetFetchError(
                f"cannot list flag directory {self.flags_dir}: {exc}",
                location=str(self.flags_dir),
            ) from exc
        return {
            p.stem.lower(): p
            for p in entries
            if p.suffix.lower() == ".svg" and p.is_file()
        }

    def list_codes(self) -> List[str]:
        return list(self._svg_paths())

    def load_svg(self, code: str) -> str:
        path = self.flags_dir / f"{code}.svg"
        if not path.is_file():
            # Fall back to a case-insensitive match (e.g. "US.svg").
            match = self._svg_paths().get(code)
            if match is None:
                raise AssetFetchError(f"no SVG for {code!r}", code=code, location=str(path))
            path = match
        try:
            svg = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedAssetError(f"{path} is not UTF-8", code=code) from exc
        except OSError as exc:
            raise AssetFetchError(f"cannot read {path}: {exc}", code=code, location=str(path)) from exc
        return _check_svg(svg, code)

    def load_names(self) -> Dict[str, str]:
        if self.names_path is None:
            return {}
        try:
            with open(self.names_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except OSError as exc:
            raise AssetFetchError(
                f"cannot read name table {self.names_path}: {exc}",
                location=str(self.names_path),
            ) from exc
        except json.JSONDecodeError as exc:
            raise MalformedAssetError(f"name table {self.names_path} is not valid JSON: {exc}") from exc
        names = parse_name_table(raw, location=str(self.names_path))
        self.log.debug("Loaded %d names from %s", len(names), self.names_path)
        return names


class HttpAssetSource(AssetSource):
    """Fetch-per-flag over HTTP: GET {base_url}/{code}.svg.

    Codes are enumerated from the name table, which comes either from the
    names mapping or from a JSON document at names_url (fetched once).
    """

    kind = "http"

    def __init__(
        self,
        base_url: str,
        names: Optional[Mapping[str, Any]] = None,
        names_url: Optional[str] = None,
        timeout: float = 15,
    ):
        if names is None and names_url is None:
            raise InvalidArgumentError("HttpAssetSource needs names or names_url to enumerate codes")
        self.base_url = base_url.rstrip("/")
        self.names_url = names_url
        self.timeout = timeout
        self._names: Optional[Dict[str, str]] = parse_name_table(names) if names is not None else None
        self.log = SourceLoggerAdapter.for_source(__name__, self.kind, self.base_url)

    def describe(self) -> str:
        return f"{self.kind}:{self.base_url}"

    def url_for(self, code: str) -> str:
        return f"{self.base_url}/{code}.svg"

    def _get(self, url: str, *, code: Optional[str] = None) -> requests.Response:
        try:
            resp = requests.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            self.log.debug("Fetching %s failed: %s", url, exc)
            raise AssetFetchError(f"cannot fetch {url}: {exc}", code=code, location=url) from exc
        return resp

    def load_names(self) -> Dict[str, str]:
        if self._names is None:
            resp = self._get(self.names_url)
            try:
                raw = resp.json()
            except ValueError as exc:
                raise MalformedAssetError(f"name table {self.names_url} is not valid JSON") from exc
            self._names = parse_name_table(raw, location=self.names_url)
            self.log.debug("Loaded %d names from %s", len(self._names), self.names_url)
        return dict(self._names)

    def list_codes(self) -> List[str]:
        return list(self.load_names())

    def load_svg(self, code: str) -> str:
        resp = self._get(self.url_for(code), code=code)
        try:
            svg = resp.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedAssetError(f"SVG for {code!r} is not UTF-8", code=code) from exc
        return _check_svg(svg, code)


def codes_in(source: AssetSource) -> Iterable[str]:
    """Lowercased, de-duplicated codes of a source, in source order."""
    seen = set()
    for code in source.list_codes():
        code = code.strip().lower()
        if code and code not in seen:
            seen.add(code)
            yield code
