# analysis/acoustic_ranges.py
"""
Speaker-dependent acoustic ranges for the vowel quadrilateral.

F1/F2 extents and default pitch follow the classic vowel-space
synthesizer (male schwa after Fant 1960). F3/F4 extents bound the numeric
fields. These are constants, not runtime configuration.
"""
from dataclasses import dataclass
from enum import Enum

from analysis.geometry import DEFAULT_GEOMETRY, VowelSpaceGeometry
from analysis.mapping import map_linear


class AcousticRangeError(ValueError):
    """Raised at load time when a range record breaks its invariants."""


class SpeakerCategory(Enum):
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"unknown speaker category: {value!r}") from None


@dataclass(frozen=True)
class AcousticRange:
    f1_min: float
    f1_max: float
    f2_min: float
    f2_mid1: float
    f2_mid2: float
    f2_max: float
    f3_min: float
    f3_max: float
    f4_min: float
    f4_max: float

    # Session seeds for this category
    f0_default: float
    f3_default: float
    f4_default: float

    def validate(self):
        for name, value in vars(self).items():
            if not value > 0:
                raise AcousticRangeError(f"{name} must be positive, got {value!r}")

        for formant in ("f1", "f2", "f3", "f4"):
            lo = getattr(self, f"{formant}_min")
            hi = getattr(self, f"{formant}_max")
            if not lo < hi:
                raise AcousticRangeError(
                    f"{formant.upper()} range is empty: min={lo} max={hi}"
                )

        for name in ("f2_mid1", "f2_mid2"):
            mid = getattr(self, name)
            if not self.f2_min < mid < self.f2_max:
                raise AcousticRangeError(
                    f"{name}={mid} must lie strictly between "
                    f"F2min={self.f2_min} and F2max={self.f2_max}"
                )
        return self


def partition_points(f2_min, f2_max, geometry: VowelSpaceGeometry = DEFAULT_GEOMETRY):
    """
    F2 values at which the slanted front edge meets the bottom edge
    (``mid1``) and at which it crosses half height (``mid2``).
    """
    mid_x = 0.5 * (geometry.front_top_x + geometry.front_bottom_x)
    mid1 = map_linear(geometry.front_bottom_x, geometry.front_top_x, geometry.back_x,
                      f2_max, f2_min)
    mid2 = map_linear(mid_x, geometry.front_top_x, geometry.back_x, f2_max, f2_min)
    return mid1, mid2


def _build_range(f1, f2, f3, f4, f0_default, f3_default, f4_default):
    mid1, mid2 = partition_points(*f2)
    return AcousticRange(
        f1_min=f1[0], f1_max=f1[1],
        f2_min=f2[0], f2_mid1=mid1, f2_mid2=mid2, f2_max=f2[1],
        f3_min=f3[0], f3_max=f3[1],
        f4_min=f4[0], f4_max=f4[1],
        f0_default=f0_default,
        f3_default=f3_default,
        f4_default=f4_default,
    ).validate()


# ---------------------------------------------------------
# Range table
# ---------------------------------------------------------

ACOUSTIC_RANGES = {
    SpeakerCategory.MALE: _build_range(
        f1=(250.0, 750.0),
        f2=(500.0, 2500.0),
        f3=(1500.0, 3500.0),
        f4=(2500.0, 4500.0),
        f0_default=110.0,
        f3_default=2500.0,
        f4_default=3500.0,
    ),
    SpeakerCategory.FEMALE: _build_range(
        f1=(300.0, 1100.0),
        f2=(800.0, 3000.0),
        f3=(1700.0, 4000.0),
        f4=(3000.0, 5000.0),
        f0_default=180.0,
        f3_default=2900.0,
        f4_default=4100.0,
    ),
}


def range_for(category) -> AcousticRange:
    """Look up the acoustic range for a speaker category (enum or string)."""
    return ACOUSTIC_RANGES[SpeakerCategory.coerce(category)]
