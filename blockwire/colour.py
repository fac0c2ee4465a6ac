"""Packed RGB colours."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Colour:
    """A colour held as a single 32-bit integer, ``0xRRGGBB``."""

    value: int

    def __post_init__(self) -> None:
        if not -(1 << 31) <= self.value < (1 << 31):
            raise ValueError(f"colour {self.value} does not fit in 32 bits")

    @classmethod
    def new_rgb(cls, r: int, g: int, b: int) -> Colour:
        for component in (r, g, b):
            if not 0 <= component <= 0xFF:
                raise ValueError(f"colour component {component} is outside 0..255")
        return cls(b | (g << 8) | (r << 16))

    def to_int(self) -> int:
        return self.value