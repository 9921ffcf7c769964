"""Username color hashing.

Hides how an author name becomes a display color:
- Byte-sum hash of the name
- Palette curves (hue range, saturation, lightness)
- HSL to RGB conversion
"""

import colorsys

from rich.color import Color
from rich.style import Style

from ..config import Palette

SYSTEM_STYLE = Style(color="red", bold=True)


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> tuple[int, int, int]:
    """Convert HSL (hue in degrees) to an 8-bit RGB triple."""
    red, green, blue = colorsys.hls_to_rgb((hue % 360) / 360, lightness, saturation)
    return round(red * 255), round(green * 255), round(blue * 255)


def hash_username(author: str, palette: Palette = Palette.PASTEL) -> tuple[int, int, int]:
    """Map an author name to a deterministic RGB color.

    Args:
        author: Display name of the message author
        palette: Palette curve to draw the color from

    Returns:
        (red, green, blue) triple, each 0-255
    """
    value = sum(author.encode("utf-8"))

    if palette == Palette.VIBRANT:
        hue, saturation, lightness = value % 360 + 1, 1.0, 0.6
    elif palette == Palette.WARM:
        hue, saturation, lightness = (value % 100 + 1) * 1.2, 0.8, 0.7
    elif palette == Palette.COOL:
        hue, saturation, lightness = (value % 100 + 1) * 1.2 + 180, 0.6, 0.7
    else:
        hue, saturation, lightness = value % 360 + 1, 0.5, 0.75

    return hsl_to_rgb(hue, saturation, lightness)


def author_style(author: str, is_system: bool, palette: Palette) -> Style:
    """Style for the username cell of a row."""
    if is_system:
        return SYSTEM_STYLE
    red, green, blue = hash_username(author, palette)
    return Style(color=Color.from_rgb(red, green, blue), bold=True)
