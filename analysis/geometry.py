# analysis/geometry.py
"""
Screen-space geometry of the vowel quadrilateral.

The front (left) edge is slanted: it starts at ``front_top_x`` on the top
edge and ends at ``front_bottom_x`` on the bottom edge. The back (right)
edge is vertical at ``back_x``. Screen y grows downward.
"""
from dataclasses import dataclass
from typing import List, Tuple


class GeometryError(ValueError):
    """Raised when a quadrilateral definition breaks its invariants."""


@dataclass(frozen=True)
class VowelSpaceGeometry:
    front_top_x: float
    front_bottom_x: float
    back_x: float
    top_y: float
    bottom_y: float

    @property
    def height(self) -> float:
        return self.bottom_y - self.top_y

    def corners(self) -> List[Tuple[float, float]]:
        """
        Corners in drawing order:
        front-top, front-bottom, back-bottom, back-top.
        """
        return [
            (self.front_top_x, self.top_y),
            (self.front_bottom_x, self.bottom_y),
            (self.back_x, self.bottom_y),
            (self.back_x, self.top_y),
        ]

    def validate(self):
        if self.height <= 0:
            raise GeometryError(
                f"quadrilateral height must be positive (top={self.top_y}, "
                f"bottom={self.bottom_y})"
            )
        top_width = self.back_x - self.front_top_x
        bottom_width = self.back_x - self.front_bottom_x
        if bottom_width <= 0:
            raise GeometryError("front-bottom corner must lie left of the back edge")
        if not bottom_width < top_width:
            raise GeometryError(
                f"front edge must be narrower than back edge "
                f"(bottom width {bottom_width} >= top width {top_width})"
            )
        return self


# Canvas layout: front edge 100 → 250, back edge at 500, y 100 → 500
DEFAULT_GEOMETRY = VowelSpaceGeometry(
    front_top_x=100.0,
    front_bottom_x=250.0,
    back_x=500.0,
    top_y=100.0,
    bottom_y=500.0,
).validate()
