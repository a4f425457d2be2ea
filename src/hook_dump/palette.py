"""Color math for deriving tone intensities from a handful of theme colors.

Every theme color is reduced to #RRGGBB first; weak/strong variants are then
produced by mixing in RGB space or shifting HSL lightness. Text-on-color
choices use WCAG contrast so labels stay legible on both dark and light
themes.
"""

import colorsys


def _hsl_to_hex(h: float, s: float, lightness: float) -> str:
    """Convert HSL (h in 0-360, s/lightness in 0-1) to #RRGGBB hex string."""
    # colorsys uses h in 0-1
    r, g, b = colorsys.hls_to_rgb(h / 360.0, lightness, s)
    return "#{:02X}{:02X}{:02X}".format(
        int(round(r * 255)),
        int(round(g * 255)),
        int(round(b * 255)),
    )


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Parse #RRGGBB to (r, g, b) ints."""
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _rgb_to_hex(r: float, g: float, b: float) -> str:
    return "#{:02X}{:02X}{:02X}".format(
        max(0, min(255, int(round(r)))),
        max(0, min(255, int(round(g)))),
        max(0, min(255, int(round(b)))),
    )


def _hex_to_hsl(hex_color: str) -> tuple[float, float, float]:
    """Parse #RRGGBB to (H in 0-360, S in 0-1, L in 0-1).

    Returns (0, 0.5, 0.5) for unparseable values (e.g. ANSI color names).
    """
    h_str = hex_color.lstrip("#")
    if len(h_str) != 6:
        return (0.0, 0.5, 0.5)
    try:
        r, g, b = int(h_str[0:2], 16), int(h_str[2:4], 16), int(h_str[4:6], 16)
    except ValueError:
        return (0.0, 0.5, 0.5)
    h, lightness, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    return (h * 360.0, s, lightness)


def _lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b by factor t."""
    return a + (b - a) * t


def _wcag_relative_luminance(hex_color: str) -> float:
    """Compute WCAG 2.1 relative luminance from #RRGGBB hex."""
    r, g, b = _hex_to_rgb(hex_color)
    rs, gs, bs = r / 255.0, g / 255.0, b / 255.0

    def linearize(c: float) -> float:
        return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4

    return 0.2126 * linearize(rs) + 0.7152 * linearize(gs) + 0.0722 * linearize(bs)


def _wcag_contrast(hex1: str, hex2: str) -> float:
    """WCAG 2.1 contrast ratio between two hex colors."""
    l1 = _wcag_relative_luminance(hex1)
    l2 = _wcag_relative_luminance(hex2)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def mix(color: str, other: str, t: float) -> str:
    """Blend two #RRGGBB colors; t=0 gives color, t=1 gives other."""
    r1, g1, b1 = _hex_to_rgb(color)
    r2, g2, b2 = _hex_to_rgb(other)
    return _rgb_to_hex(_lerp(r1, r2, t), _lerp(g1, g2, t), _lerp(b1, b2, t))


def shift_lightness(color: str, amount: float) -> str:
    """Move HSL lightness by amount (clamped to 0.05-0.95)."""
    h, s, lightness = _hex_to_hsl(color)
    return _hsl_to_hex(h, s, max(0.05, min(0.95, lightness + amount)))


def is_dark(color: str) -> bool:
    """True when the color reads as a dark background."""
    return _wcag_relative_luminance(color) < 0.18


def readable_text(background: str, light: str = "#FFFFFF", dark: str = "#000000") -> str:
    """Pick whichever of light/dark contrasts more with background."""
    if _wcag_contrast(light, background) >= _wcag_contrast(dark, background):
        return light
    return dark
