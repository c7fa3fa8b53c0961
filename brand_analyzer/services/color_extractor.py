"""Brand palette extraction from inline and linked CSS.

Each CSS text yields a stream of (hex, weight) observations. Streams from
inline <style> blocks and fetched stylesheets are concatenated and folded
into one hex -> weight tally, which is ranked, truncated and labelled.
"""

import math
import re
import time
from itertools import chain
from typing import Iterable, Iterator, List, Tuple

import logfire

from brand_analyzer.constants import (
    BRAND_VARIABLE_WEIGHT,
    BRAND_VOCABULARY,
    COLOR_PROPERTY_WEIGHT,
    MAX_COLORS,
    MAX_EXTERNAL_STYLESHEETS,
    NEUTRAL_BRIGHTNESS_HIGH,
    NEUTRAL_BRIGHTNESS_LOW,
    PRIMARY_WEIGHT_THRESHOLD,
    SECONDARY_WEIGHT_THRESHOLD,
)
from brand_analyzer.models.brand_models import ColorLabel, ColorSample
from brand_analyzer.services.markup import MarkupDocument
from brand_analyzer.services.page_fetcher import PageFetcher

Observation = Tuple[str, int]

_COLOR_VALUE = r"(#[0-9a-fA-F]{3,8}|rgba?\([^)]+\)|hsla?\([^)]+\))"

_BRAND_VARIABLE = re.compile(
    r"--([\w-]*(?:" + "|".join(BRAND_VOCABULARY) + r")[\w-]*)\s*:\s*" + _COLOR_VALUE,
    re.IGNORECASE,
)
_COLOR_PROPERTY = re.compile(
    r"(?:^|[{;])\s*(?:background(?:-color)?|color|border-color|fill|stroke)\s*:\s*"
    + _COLOR_VALUE,
    re.IGNORECASE | re.MULTILINE,
)

_HEX6 = re.compile(r"^#[0-9a-fA-F]{6}$")
_HEX3 = re.compile(r"^#[0-9a-fA-F]{3}$")
_HEX8 = re.compile(r"^#[0-9a-fA-F]{8}$")
_RGB = re.compile(r"^rgba?\(\s*(\d+)\s*[,\s]\s*(\d+)\s*[,\s]\s*(\d+)", re.IGNORECASE)
_HSL = re.compile(
    r"^hsla?\(\s*([\d.]+)(?:deg)?\s*[,\s]\s*([\d.]+)%\s*[,\s]\s*([\d.]+)%",
    re.IGNORECASE,
)


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """Convert HSL (degrees, percent, percent) to #RRGGBB."""
    s = saturation / 100
    lum = lightness / 100
    a = s * min(lum, 1 - lum)

    def channel(n: int) -> int:
        k = (n + hue / 30) % 12
        value = lum - a * max(min(k - 3, 9 - k, 1), -1)
        return min(255, max(0, math.floor(255 * value + 0.5)))

    return "#{:02X}{:02X}{:02X}".format(channel(0), channel(8), channel(4))


def normalize_color(value: str | None) -> str | None:
    """
    Normalize a CSS color value to uppercase #RRGGBB.

    Accepts 3/6/8-digit hex (alpha dropped), rgb()/rgba() and hsl()/hsla().

    Args:
        value: CSS color text

    Returns:
        "#RRGGBB", or None if the value is not a supported color form
    """
    if not value:
        return None
    value = value.strip()

    if _HEX6.match(value):
        return value.upper()
    if _HEX3.match(value):
        return "#" + "".join(digit * 2 for digit in value[1:]).upper()
    if _HEX8.match(value):
        return value[:7].upper()

    rgb = _RGB.match(value)
    if rgb:
        r, g, b = (min(255, int(channel)) for channel in rgb.groups())
        return f"#{r:02X}{g:02X}{b:02X}"

    hsl = _HSL.match(value)
    if hsl:
        try:
            hue, saturation, lightness = (float(part) for part in hsl.groups())
        except ValueError:
            return None
        return hsl_to_hex(hue, saturation, lightness)

    return None


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    return (
        int(hex_color[1:3], 16),
        int(hex_color[3:5], 16),
        int(hex_color[5:7], 16),
    )


def luminance(hex_color: str) -> float:
    r, g, b = (channel / 255 for channel in hex_to_rgb(hex_color))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def is_neutral(hex_color: str) -> bool:
    """True for near-black or near-white colors (structural, not brand)."""
    brightness = sum(hex_to_rgb(hex_color)) / 3
    return brightness > NEUTRAL_BRIGHTNESS_HIGH or brightness < NEUTRAL_BRIGHTNESS_LOW


def scan_css_colors(css_text: str) -> Iterator[Observation]:
    """Yield (hex, weight) observations for one CSS text.

    Brand-vocabulary custom properties come first, then plain color
    declarations. Unparseable and neutral colors are skipped.
    """
    if not css_text:
        return
    for pattern, group, weight in (
        (_BRAND_VARIABLE, 2, BRAND_VARIABLE_WEIGHT),
        (_COLOR_PROPERTY, 1, COLOR_PROPERTY_WEIGHT),
    ):
        for match in pattern.finditer(css_text):
            hex_color = normalize_color(match.group(group))
            if hex_color and not is_neutral(hex_color):
                yield hex_color, weight


def tally(observations: Iterable[Observation]) -> dict[str, int]:
    """Fold observations into hex -> accumulated weight (first sighting order)."""
    weights: dict[str, int] = {}
    for hex_color, weight in observations:
        weights[hex_color] = weights.get(hex_color, 0) + weight
    return weights


def _threshold_label(weight: int) -> ColorLabel:
    if weight > PRIMARY_WEIGHT_THRESHOLD:
        return "Primary"
    if weight > SECONDARY_WEIGHT_THRESHOLD:
        return "Secondary"
    return "Accent"


_RANK_LABELS: Tuple[ColorLabel, ...] = ("Primary", "Secondary", "Accent")


def rank_colors(weights: dict[str, int], limit: int = MAX_COLORS) -> List[ColorSample]:
    """Sort by descending weight, keep the top entries and label them.

    Labels are assigned by weight threshold first; the top three ranks are
    then forced to Primary, Secondary and Accent.
    """
    ranked = sorted(weights.items(), key=lambda item: item[1], reverse=True)[:limit]
    samples = []
    for rank, (hex_color, weight) in enumerate(ranked):
        label = _threshold_label(weight)
        if rank < len(_RANK_LABELS):
            label = _RANK_LABELS[rank]
        samples.append(
            ColorSample(
                hex=hex_color,
                rgb=hex_to_rgb(hex_color),
                luminance=luminance(hex_color),
                frequency=weight,
                label=label,
            )
        )
    return samples


class ColorExtractor:
    """Build a ranked brand palette from the page's CSS."""

    def __init__(
        self,
        fetcher: PageFetcher,
        max_stylesheets: int = MAX_EXTERNAL_STYLESHEETS,
    ):
        self._fetcher = fetcher
        self._max_stylesheets = max_stylesheets

    async def extract(self, document: MarkupDocument) -> List[ColorSample]:
        """Return up to eight labelled colors, heaviest first.

        Inline <style> blocks are scanned first, then linked stylesheets in
        document order. A failed stylesheet contributes nothing.
        """
        start_time = time.time()
        sheet_urls = document.stylesheet_urls(limit=self._max_stylesheets)
        sheets = await self._fetcher.fetch_stylesheets(sheet_urls)

        css_sources = chain(document.style_blocks(), sheets)
        weights = tally(chain.from_iterable(scan_css_colors(css) for css in css_sources))
        colors = rank_colors(weights)

        logfire.info(
            "Colors extracted",
            url=document.url.href,
            stylesheet_count=len(sheet_urls),
            distinct_colors=len(weights),
            color_count=len(colors),
            total_time_ms=(time.time() - start_time) * 1000,
        )
        return colors
