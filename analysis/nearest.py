# analysis/nearest.py
import numpy as np

from analysis.mapping import formants_to_point

DEFAULT_SNAP_RADIUS = 15.0  # px


def _cursor_xy(cursor):
    if hasattr(cursor, "screen_x"):
        return float(cursor.screen_x), float(cursor.screen_y)
    x, y = cursor
    return float(x), float(y)


def glyph_positions(vowel_set, geometry, rng):
    """Screen position of every reference vowel, in catalog order."""
    out = []
    for vowel in vowel_set:
        x, y = formants_to_point(vowel.f1, vowel.f2, rng, geometry)
        out.append((vowel, x, y))
    return out


def nearest(cursor, vowel_set, geometry, rng):
    """
    Closest reference vowel to the cursor in screen space.

    Returns ``(vowel, distance)`` or None for an empty set. Ties go to the
    vowel listed first.
    """
    placed = glyph_positions(vowel_set, geometry, rng)
    if not placed:
        return None

    cx, cy = _cursor_xy(cursor)
    xy = np.array([(x, y) for _v, x, y in placed], dtype=float)
    dists = np.hypot(xy[:, 0] - cx, xy[:, 1] - cy)

    # argmin returns the first occurrence of the minimum
    idx = int(np.argmin(dists))
    return placed[idx][0], float(dists[idx])


def is_snap_eligible(distance, threshold_radius=DEFAULT_SNAP_RADIUS) -> bool:
    if distance is None:
        return False
    return distance < threshold_radius
