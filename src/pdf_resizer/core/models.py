# SPDX-License-Identifier: Apache-2.0
"""Geometry models for page resizing.

All values are in PDF points (1/72 inch) in the default user space,
origin at the bottom-left corner of the page.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned page rectangle.

    Attributes:
        x0: Left X coordinate
        y0: Bottom Y coordinate
        x1: Right X coordinate
        y1: Top Y coordinate
    """

    x0: float
    y0: float
    x1: float
    y1: float

    def __post_init__(self) -> None:
        if not (self.x1 > self.x0 and self.y1 > self.y0):
            raise ValueError(
                f"Degenerate rectangle: ({self.x0}, {self.y0}, {self.x1}, {self.y1})"
            )

    @property
    def width(self) -> float:
        """Width of the rectangle."""
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        """Height of the rectangle."""
        return self.y1 - self.y0

    def to_list(self) -> list[float]:
        """Return [x0, y0, x1, y1] as stored in a page box array."""
        return [self.x0, self.y0, self.x1, self.y1]


@dataclass(frozen=True)
class Transform:
    """Affine transformation matrix [a, b, c, d, e, f].

    The matrix transforms coordinates as:
        x' = a*x + c*y + e
        y' = b*x + d*y + f
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def scale(cls, factor: float) -> Transform:
        """Uniform scale about the origin with no translation."""
        return cls(a=factor, d=factor)

    def to_operands(self) -> list[float]:
        """Operands for the ``cm`` operator, in content stream order."""
        return [self.a, self.b, self.c, self.d, self.e, self.f]


@dataclass(frozen=True)
class PaperSize:
    """A named physical medium size.

    Attributes:
        name: Paper name (e.g., "A4", "A6")
        width: Portrait width in points
        height: Portrait height in points
    """

    name: str
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Paper size {self.name!r} must have positive dimensions")

    @property
    def rect(self) -> Rect:
        """Full-page rectangle anchored at the origin."""
        return Rect(0.0, 0.0, self.width, self.height)

    @classmethod
    def from_name(cls, name: str) -> PaperSize:
        """Look up a known paper size by name (case-insensitive).

        Raises:
            ValueError: If the name is not in PAPER_SIZES.
        """
        try:
            return PAPER_SIZES[name.upper()]
        except KeyError:
            known = ", ".join(sorted(PAPER_SIZES))
            raise ValueError(f"Unknown paper size {name!r} (known: {known})") from None


# ISO 216 sizes, rounded to 1/100 pt
A3 = PaperSize("A3", 841.89, 1190.55)
A4 = PaperSize("A4", 595.28, 841.89)
A5 = PaperSize("A5", 419.53, 595.28)
A6 = PaperSize("A6", 297.64, 419.53)
LETTER = PaperSize("LETTER", 612.0, 792.0)

PAPER_SIZES: dict[str, PaperSize] = {
    size.name: size for size in (A3, A4, A5, A6, LETTER)
}
