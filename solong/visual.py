"""Pixel formats of a display visual and conversion of 0xRRGGBB colours."""

from __future__ import annotations

from dataclasses import dataclass

_CHANNEL_MASK = 0xFF00
_CHANNEL_BITS = 16


def mask_shifts(mask: int) -> tuple[int, int]:
    """Return (shift, bits) for a contiguous colour channel mask.

    The shift is the number of zero bits below the channel and bits is the
    length of the run of ones that follows them.
    """
    if mask <= 0:
        raise ValueError("colour mask must be a positive bit mask")
    shift = (mask & -mask).bit_length() - 1
    mask >>= shift
    bits = 0
    while mask & 1:
        mask >>= 1
        bits += 1
    return shift, bits


def _fit(value: int, bits: int) -> int:
    """Reduce a 16-bit channel value to the given number of bits."""
    drop = _CHANNEL_BITS - bits
    return value >> drop if drop >= 0 else value << -drop


@dataclass(frozen=True)
class VisualFormat:
    """Channel masks and depth of a TrueColor visual."""

    red_mask: int = 0xFF0000
    green_mask: int = 0x00FF00
    blue_mask: int = 0x0000FF
    depth: int = 24

    def shifts(self) -> tuple[int, int, int, int, int, int]:
        """Return (shift, bits) for red, green and blue, flattened."""
        red = mask_shifts(self.red_mask)
        green = mask_shifts(self.green_mask)
        blue = mask_shifts(self.blue_mask)
        return (*red, *green, *blue)

    def convert(self, color: int) -> int:
        """Turn a 0xRRGGBB colour into a pixel value for this visual.

        Visuals of depth 24 or more take the colour unchanged.
        """
        if self.depth >= 24:
            return color
        red_shift, red_bits, green_shift, green_bits, blue_shift, blue_bits = (
            self.shifts()
        )
        red = (color >> 8) & _CHANNEL_MASK
        green = color & _CHANNEL_MASK
        blue = (color << 8) & _CHANNEL_MASK
        return (
            (_fit(red, red_bits) << red_shift)
            + (_fit(green, green_bits) << green_shift)
            + (_fit(blue, blue_bits) << blue_shift)
        )