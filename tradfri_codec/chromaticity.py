import logging
import math

import colormath.color_conversions
import colormath.color_objects

from .state import ChromaticityPoint


log = logging.getLogger(__name__)

MAX_BRIGHTNESS = 254


def round_half_up(value: float) -> int:
    # Python's round() rounds halves to even; the bridge rounds them up.
    return int(math.floor(value + 0.5))


def cie_to_rgb(
    x: float, y: float, brightness: int | None = None
) -> tuple[int, int, int]:
    """Converts a CIE 1931 xy point to an 8-bit RGB triplet.

    brightness is on the device scale [1, 254] and defaults to full
    brightness. Never raises: channels that end up NaN or infinite (for
    example when y is 0) are reported as 0. Channels are not otherwise
    clamped to [0, 255].
    """
    if brightness is None:
        brightness = MAX_BRIGHTNESS

    z = 1.0 - x - y
    # Two-decimal rounding keeps the output identical to the bridge's.
    Y = round(brightness / MAX_BRIGHTNESS, 2)
    X = _divide(Y, y) * x
    Z = _divide(Y, y) * z

    # Wide RGB D65 conversion.
    red = X * 1.656492 - Y * 0.354851 - Z * 0.255038
    green = -X * 0.707196 + Y * 1.655397 + Z * 0.036152
    blue = X * 0.051713 - Y * 0.121364 + Z * 1.011530

    red, green, blue = _clamp_to_gamut(red, green, blue)

    rgb = (
        _to_8bit(_reverse_gamma(red)),
        _to_8bit(_reverse_gamma(green)),
        _to_8bit(_reverse_gamma(blue)),
    )
    log.debug(f"cie_to_rgb({x=}, {y=}, {brightness=}) -> {rgb}")
    return rgb


def rgb_to_cie(red: int, green: int, blue: int) -> ChromaticityPoint:
    """Converts an 8-bit sRGB triplet to a CIE 1931 xy point.

    Black has no chromaticity and maps to (0, 0).
    """
    srgb = colormath.color_objects.sRGBColor(red, green, blue, is_upscaled=True)
    xyy = colormath.color_conversions.convert_color(
        srgb, colormath.color_objects.xyYColor
    )
    return ChromaticityPoint(x=round(xyy.xyy_x, 4), y=round(xyy.xyy_y, 4))


def _divide(numerator: float, denominator: float) -> float:
    # IEEE 754 division: x/0 is a signed infinity and 0/0 is NaN.
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _clamp_to_gamut(
    red: float, green: float, blue: float
) -> tuple[float, float, float]:
    # Only a strictly dominant channel is scaled back to 1.0. Two equal
    # channels above 1.0 are left untouched.
    if red > blue and red > green and red > 1.0:
        green = green / red
        blue = blue / red
        red = 1.0
    elif green > blue and green > red and green > 1.0:
        red = red / green
        blue = blue / green
        green = 1.0
    elif blue > red and blue > green and blue > 1.0:
        red = red / blue
        green = green / blue
        blue = 1.0
    return red, green, blue


def _reverse_gamma(value: float) -> float:
    if value <= 0.0031308:
        return 12.92 * value
    return (1.0 + 0.055) * value ** (1.0 / 2.4) - 0.055


def _to_8bit(value: float) -> int:
    value *= 255
    if not math.isfinite(value):
        return 0
    return round_half_up(value)
