"""Color distance and nearest-palette matching."""

from __future__ import annotations

import math
from typing import Sequence

RGBColor = tuple[float, float, float]


def color_distance(one: Sequence[float], two: Sequence[float]) -> float:
    """Redmean-weighted distance between two RGB colors.

    Red differences are weighted more heavily as the pair gets redder, blue
    differences less. Channels may be fractional; nothing is clamped.
    """
    red_mean = (one[0] + two[0]) / 2
    d_red = float(one[0]) - float(two[0])
    d_green = float(one[1]) - float(two[1])
    d_blue = float(one[2]) - float(two[2])

    return math.sqrt(
        10 * d_red**2
        + 4 * d_green**2
        + 3 * d_blue**2
        + red_mean * (d_red**2 - d_blue**2) / 256
    )


def match_color(
    color: Sequence[float],
    palette: Sequence[Sequence[float]],
) -> tuple:
    """Return the palette entry closest to `color`.

    Single pass over the palette. Ties keep the earliest entry.

    Raises:
        ValueError: if the palette is empty.
    """
    if not palette:
        raise ValueError("Cannot match against an empty palette")

    best = palette[0]
    best_distance = color_distance(color, best)
    for candidate in palette[1:]:
        distance = color_distance(color, candidate)
        if distance < best_distance:
            best = candidate
            best_distance = distance
    return tuple(best)


def brightness(color: Sequence[float]) -> float:
    """Mean channel value normalized to [0.0, 1.0]."""
    return (color[0] + color[1] + color[2]) / 3 / 255


def to_paint_color(color: Sequence[float]) -> tuple[int, int, int]:
    """Round each channel to the nearest integer and clamp to [0, 255]."""
    r, g, b = (max(0, min(255, int(round(c)))) for c in color[:3])
    return (r, g, b)
