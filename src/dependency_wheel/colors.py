"""Deterministic node colours."""

import colorsys
import math
import re
import zlib
from collections.abc import Sequence

from .layout.chord import ChordRecord

ROOT_COLOR = "#ccc"

# Saturation / lightness shared by every non-root node
SATURATION = 90
LIGHTNESS = 70

DARKER_FACTOR = 0.7

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_HSL_RE = re.compile(
    r"^hsl\(\s*([\d.]+)\s*,\s*([\d.]+)%\s*,\s*([\d.]+)%\s*\)$"
)


def name_hue(name: str) -> int:
    """Map a node name to a hue in [0, 360).

    Names starting with an ASCII letter spread over 26 hues by that letter,
    case-insensitively. Anything else hashes the whole name with CRC-32.
    """
    # Check the raw character; some non-ASCII letters lowercase into ASCII
    first = name[:1]
    if first.isascii() and first.isalpha():
        return int((ord(first.lower()) - ord("a")) / 26 * 360)
    return zlib.crc32(name.encode("utf-8")) % 360


def node_color(index: int, name: str) -> str:
    """Fill colour for a node; the root (index 0) is always neutral gray."""
    if index == 0:
        return ROOT_COLOR
    return f"hsl({name_hue(name)},{SATURATION}%,{LIGHTNESS}%)"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def to_rgb(color: str) -> tuple[int, int, int]:
    """Parse ``#rgb``, ``#rrggbb`` or ``hsl(h,s%,l%)`` into 0-255 channels.

    Raises:
        ValueError: If the colour is in none of these forms.
    """
    match = _HEX_RE.match(color)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    match = _HSL_RE.match(color)
    if match:
        h, s, l = (float(v) for v in match.groups())
        r, g, b = colorsys.hls_to_rgb((h % 360) / 360, l / 100, s / 100)
        return (_round_half_up(r * 255), _round_half_up(g * 255), _round_half_up(b * 255))

    raise ValueError(f"Unsupported colour: {color!r}")


def darker(color: str, k: float = DARKER_FACTOR) -> str:
    """Scale the RGB channels of a colour by ``k`` and return it as ``#rrggbb``."""
    channels = (min(255, max(0, _round_half_up(c * k))) for c in to_rgb(color))
    return "#" + "".join(f"{c:02x}" for c in channels)


def chord_colors(chord: ChordRecord, names: Sequence[str]) -> tuple[str, str]:
    """(fill, stroke) for a chord, taken from its source node."""
    index = chord.source.index
    fill = node_color(index, names[index])
    return fill, darker(fill)
