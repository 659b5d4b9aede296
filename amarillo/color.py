"""RGBA colour values and the engine's named colours."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Color:
    """A colour with float channels; alpha defaults to fully opaque."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0

    def set(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        """Replace all four channels at once."""
        self.r = r
        self.g = g
        self.b = b
        self.a = a

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return the channels in (r, g, b, a) order."""
        return (self.r, self.g, self.b, self.a)


RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)