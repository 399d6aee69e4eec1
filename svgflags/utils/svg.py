"""SVG sizing and data-URL helpers.

resize_svg() only touches the width, height and viewBox attributes of the
opening <svg> tag. Nested markup is passed through byte for byte, and every
other root attribute (xmlns included) is kept so the output still renders as
a standalone document.

Aspect ratio is fixed at 2:1 for every asset: height = width / 2 and
width = height * 2, whatever the SVG's own proportions are. The viewBox is
always the intrinsic canvas, which is what makes the scaling lossless.
"""

from __future__ import annotations

import base64
import re
from typing import Optional

from ..errors import MalformedAssetError
from ..models import SizeOptions

DEFAULT_INTRINSIC_WIDTH = 900
DEFAULT_INTRINSIC_HEIGHT = 450

DATA_URL_PREFIX = "data:image/svg+xml;base64,"

# Opening root tag only: "<svg" followed by whitespace, ">" or "/>".
_SVG_OPEN_TAG_RE = re.compile(r"<svg(?=[\s/>])[^>]*>", re.IGNORECASE)
_SIZE_ATTR_RE = re.compile(
    r"""\s+(?:width|height|viewBox)\s*=\s*(?:"[^"]*"|'[^']*'|[^\s/>]+)""",
    re.IGNORECASE,
)


def _fmt(value: float) -> str:
    # 150 -> "150", 75.0 -> "75", 75.5 -> "75.5"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def target_dimensions(
    size: Optional[SizeOptions],
    intrinsic_width: float = DEFAULT_INTRINSIC_WIDTH,
    intrinsic_height: float = DEFAULT_INTRINSIC_HEIGHT,
) -> tuple[float, float]:
    """Return (width, height) in pixels for the given size options."""
    if size is not None and size.width:
        return size.width, size.width / 2
    if size is not None and size.height:
        return size.height * 2, size.height
    return intrinsic_width, intrinsic_height


def resize_svg(
    svg: str,
    size: Optional[SizeOptions] = None,
    intrinsic_width: float = DEFAULT_INTRINSIC_WIDTH,
    intrinsic_height: float = DEFAULT_INTRINSIC_HEIGHT,
) -> str:
    """Rewrite the root width/height/viewBox for the target size.

    Raises MalformedAssetError if there is no opening <svg> tag.
    """
    match = _SVG_OPEN_TAG_RE.search(svg)
    if match is None:
        raise MalformedAssetError("no opening <svg> tag found")

    width, height = target_dimensions(size, intrinsic_width, intrinsic_height)

    tag = match.group(0)
    self_closing = tag.endswith("/>")
    body = tag[len("<svg"): -2 if self_closing else -1]
    body = _SIZE_ATTR_RE.sub("", body).rstrip()

    new_tag = (
        f'<svg{body} width="{_fmt(width)}" height="{_fmt(height)}"'
        f' viewBox="0 0 {_fmt(intrinsic_width)} {_fmt(intrinsic_height)}"'
        f'{"/>" if self_closing else ">"}'
    )
    return svg[: match.start()] + new_tag + svg[match.end():]


def svg_to_data_url(svg: str) -> str:
    """Encode SVG markup (UTF-8) as a base64 data URL."""
    payload = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return DATA_URL_PREFIX + payload


def data_url_to_svg(data_url: str) -> str:
    """Inverse of svg_to_data_url()."""
    if not data_url.startswith(DATA_URL_PREFIX):
        raise MalformedAssetError("not an SVG base64 data URL")
    return base64.b64decode(data_url[len(DATA_URL_PREFIX):]).decode("utf-8")
