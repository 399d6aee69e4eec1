import pathlib
import sys

import pytest


# Ensure repo root is on PYTHONPATH for direct package imports (e.g. `import svgflags`).
_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from svgflags import CountryFlags, MappingAssetSource  # noqa: E402


def make_svg(fill: str, extra: str = "") -> str:
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" width="900" height="450" viewBox="0 0 900 450"'
        f'{extra}><rect width="900" height="450" fill="{fill}"/></svg>'
    )


SAMPLE_SVGS = {
    "us": make_svg("#b22234"),
    "GB": make_svg("#012169"),
    "ae": make_svg("#00732f"),
    "fr": make_svg("#002654"),
    "de": make_svg("#000000"),
    "gb-eng": make_svg("#ffffff"),
    "zz": make_svg("#123456"),
}

SAMPLE_NAMES = {
    "us": "United States",
    "gb": {"name": "United Kingdom", "emoji": "\U0001F1EC\U0001F1E7"},
    "ae": "United Arab Emirates",
    "fr": "France",
    "de": "Germany",
    "gb-eng": "England",
}


@pytest.fixture
def sample_source() -> MappingAssetSource:
    return MappingAssetSource(SAMPLE_SVGS, SAMPLE_NAMES)


@pytest.fixture
def flags(sample_source) -> CountryFlags:
    return CountryFlags.from_source(sample_source)


@pytest.fixture
def flag_dir(tmp_path):
    d = tmp_path / "flags"
    d.mkdir()
    (d / "fr.svg").write_text(make_svg("#002654"), encoding="utf-8")
    (d / "DE.svg").write_text(make_svg("#000000"), encoding="utf-8")
    (d / "README.txt").write_text("not a flag", encoding="utf-8")
    names = tmp_path / "names.json"
    names.write_text('{"fr": "France", "de": {"name": "Germany"}}', encoding="utf-8")
    return d, names
