"""Fixed color palettes used for quantization.

Each palette is an ordered tuple of RGB triples. Order matters: the
matcher keeps the earliest entry when two colors are equally close.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PaletteName(str, Enum):
    EIGHT_BIT = "eight_bit"
    CGA = "cga"
    PICO8 = "pico8"
    GAMEBOY = "gameboy"


# NES 2C02 master palette, row by row, with the repeated blacks collapsed
EIGHT_BIT_COLORS: tuple[tuple[int, int, int], ...] = (
    (124, 124, 124), (0, 0, 252), (0, 0, 188), (68, 40, 188),
    (148, 0, 132), (168, 0, 32), (168, 16, 0), (136, 20, 0),
    (80, 48, 0), (0, 120, 0), (0, 104, 0), (0, 88, 0),
    (0, 64, 88), (0, 0, 0),
    (188, 188, 188), (0, 120, 248), (0, 88, 248), (104, 68, 252),
    (216, 0, 204), (228, 0, 88), (248, 56, 0), (228, 92, 16),
    (172, 124, 0), (0, 184, 0), (0, 168, 0), (0, 168, 68),
    (0, 136, 136),
    (248, 248, 248), (60, 188, 252), (104, 136, 252), (152, 120, 248),
    (248, 120, 248), (248, 88, 152), (248, 120, 88), (252, 160, 68),
    (248, 184, 0), (184, 248, 24), (88, 216, 84), (88, 248, 152),
    (0, 232, 216), (120, 120, 120),
    (252, 252, 252), (164, 228, 252), (184, 184, 248), (216, 184, 248),
    (248, 184, 248), (248, 164, 192), (240, 208, 176), (252, 224, 168),
    (248, 216, 120), (216, 248, 120), (184, 248, 184), (184, 248, 216),
    (0, 252, 252), (248, 216, 248),
)

CGA_COLORS: tuple[tuple[int, int, int], ...] = (
    (0, 0, 0), (0, 0, 170), (0, 170, 0), (0, 170, 170),
    (170, 0, 0), (170, 0, 170), (170, 85, 0), (170, 170, 170),
    (85, 85, 85), (85, 85, 255), (85, 255, 85), (85, 255, 255),
    (255, 85, 85), (255, 85, 255), (255, 255, 85), (255, 255, 255),
)

PICO8_COLORS: tuple[tuple[int, int, int], ...] = (
    (0, 0, 0), (29, 43, 83), (126, 37, 83), (0, 135, 81),
    (171, 82, 54), (95, 87, 79), (194, 195, 199), (255, 241, 232),
    (255, 0, 77), (255, 163, 0), (255, 236, 39), (0, 228, 54),
    (41, 173, 255), (131, 118, 156), (255, 119, 168), (255, 204, 170),
)

# Original DMG green shades, dark -> light
GAMEBOY_COLORS: tuple[tuple[int, int, int], ...] = (
    (15, 56, 15), (48, 98, 48), (139, 172, 15), (155, 188, 15),
)


@dataclass(frozen=True)
class Palette:
    name: PaletteName
    colors: tuple[tuple[int, int, int], ...]

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError(f"Palette {self.name.value!r} has no colors")
        for color in self.colors:
            if len(color) != 3 or any(not 0 <= c <= 255 for c in color):
                raise ValueError(
                    f"Palette {self.name.value!r} has invalid color: {color}"
                )

    def __len__(self) -> int:
        return len(self.colors)


PALETTES: dict[PaletteName, Palette] = {
    PaletteName.EIGHT_BIT: Palette(PaletteName.EIGHT_BIT, EIGHT_BIT_COLORS),
    PaletteName.CGA: Palette(PaletteName.CGA, CGA_COLORS),
    PaletteName.PICO8: Palette(PaletteName.PICO8, PICO8_COLORS),
    PaletteName.GAMEBOY: Palette(PaletteName.GAMEBOY, GAMEBOY_COLORS),
}


def get_palette(name: PaletteName | str) -> Palette:
    """Look up a palette preset by enum member or string value."""
    try:
        return PALETTES[PaletteName(name)]
    except ValueError:
        choices = ", ".join(p.value for p in PaletteName)
        raise ValueError(f"Unknown palette: {name!r} (choose from {choices})") from None
