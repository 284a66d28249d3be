# analysis/mapping.py
"""
Bidirectional affine mapping between screen points and (F1, F2).

    F1 = map(y, top_y, bottom_y, f1_min, f1_max)        (open vowels at the bottom)
    F2 = map(x, front_top_x, back_x, f2_max, f2_min)    (front vowels on the left)

Nothing here clamps: out-of-range inputs produce out-of-range outputs.
Only ``point_to_formants`` applies the inside test.
"""
from typing import Optional, Tuple

from analysis.geometry import VowelSpaceGeometry


def map_linear(value, start1, stop1, start2, stop2):
    """Re-map ``value`` from [start1, stop1] onto [start2, stop2] without clamping."""
    return start2 + (stop2 - start2) * ((value - start1) / (stop1 - start1))


# ---------------------------------------------------------
# Inside test
# ---------------------------------------------------------

def front_x_at(y, geometry: VowelSpaceGeometry) -> float:
    """x of the slanted front edge at height ``y`` (same blend used to draw it)."""
    t = (y - geometry.top_y) / geometry.height
    return geometry.front_top_x + t * (geometry.front_bottom_x - geometry.front_top_x)


def is_inside(x, y, geometry: VowelSpaceGeometry) -> bool:
    # Edges themselves count as outside
    if not (geometry.top_y < y < geometry.bottom_y):
        return False
    return front_x_at(y, geometry) < x < geometry.back_x


# ---------------------------------------------------------
# Forward / inverse maps
# ---------------------------------------------------------

def map_point_to_formants(x, y, geometry: VowelSpaceGeometry, rng) -> Tuple[float, float]:
    f1 = map_linear(y, geometry.top_y, geometry.bottom_y, rng.f1_min, rng.f1_max)
    f2 = map_linear(x, geometry.front_top_x, geometry.back_x, rng.f2_max, rng.f2_min)
    return f1, f2


def point_to_formants(x, y, geometry: VowelSpaceGeometry, rng):
    """
    Return ``(F1, F2)`` for a point strictly inside the quadrilateral,
    otherwise None.
    """
    if not is_inside(x, y, geometry):
        return None
    return map_point_to_formants(x, y, geometry, rng)


def formants_to_point(f1, f2, rng, geometry: VowelSpaceGeometry) -> Tuple[float, float]:
    """Exact inverse of ``map_point_to_formants``; used to place reference glyphs."""
    y = map_linear(f1, rng.f1_min, rng.f1_max, geometry.top_y, geometry.bottom_y)
    x = map_linear(f2, rng.f2_max, rng.f2_min, geometry.front_top_x, geometry.back_x)
    return x, y


def front_f2_limit(f1, rng, geometry: VowelSpaceGeometry) -> Optional[float]:
    """
    Highest F2 still inside the quadrilateral at the given F1
    (F2 of the slanted front edge at that height). None when F1 is
    outside the range's vertical extent.
    """
    _x, y = formants_to_point(f1, rng.f2_max, rng, geometry)
    if not (geometry.top_y <= y <= geometry.bottom_y):
        return None
    _f1, f2 = map_point_to_formants(front_x_at(y, geometry), y, geometry, rng)
    return f2
