"""Color Sampling Stage - Rank colors embedded in a raw PDF byte stream.

Two independent passes feed one frequency table keyed by lowercase hex:
- RGB fill/stroke operators (``r g b rg`` / ``r g b RG``) with components in [0, 1]
- Literal ``#rrggbb`` tokens

Color data is advisory. Malformed input yields no colors instead of an error.
"""

import re
from collections import Counter
from typing import Union

from docstyle.logger import get_logger
from docstyle.models import ColorSample

logger = get_logger(__name__)

RGB_OPERATOR_RE = re.compile(r"(\d*\.?\d+)\s+(\d*\.?\d+)\s+(\d*\.?\d+)\s+(rg|RG)")
HEX_TOKEN_RE = re.compile(r"#([0-9a-fA-F]{6})\b")

MAX_COLORS = 8


def channel_to_hex(value: float) -> str:
    """Scale a [0, 1] channel to a clamped two-digit hex byte."""
    clamped = max(0, min(255, round(value * 255)))
    return f"{clamped:02x}"


def rgb_to_hex(r: float, g: float, b: float) -> str:
    return f"#{channel_to_hex(r)}{channel_to_hex(g)}{channel_to_hex(b)}"


def latin1_view(raw: Union[bytes, bytearray, str]) -> str:
    """Decode bytes one byte per character so binary content never faults."""
    if isinstance(raw, str):
        return raw
    return bytes(raw).decode("latin-1")


class ColorSampler:
    """Ranks distinct colors found in a document's raw content."""

    def __init__(self, max_colors: int = MAX_COLORS):
        self.max_colors = max_colors

    def count(self, raw_text: str) -> Counter:
        """Count hits per lowercase hex color across both passes."""
        counts: Counter = Counter()

        for match in RGB_OPERATOR_RE.finditer(raw_text):
            try:
                components = [float(match.group(i)) for i in (1, 2, 3)]
            except ValueError:
                continue
            if any(c < 0 or c > 1 for c in components):
                continue
            counts[rgb_to_hex(*components)] += 1

        for match in HEX_TOKEN_RE.finditer(raw_text):
            counts[f"#{match.group(1).lower()}"] += 1

        return counts

    def sample(self, raw: Union[bytes, bytearray, str]) -> list[ColorSample]:
        """Return up to ``max_colors`` samples, most hits first."""
        try:
            counts = self.count(latin1_view(raw))
        except (TypeError, ValueError) as e:
            logger.warning("Color extraction warning: %s", e)
            return []

        # Counter.most_common keeps first-seen order among ties
        return [
            ColorSample(hex=hex_code, hits=hits)
            for hex_code, hits in counts.most_common(self.max_colors)
        ]
