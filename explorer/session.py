# explorer/session.py
"""
Vowel space session: owns the selection state and runs the per-frame
pipeline

    pointer -> (F1, F2) -> nearest reference vowel -> snap -> synth params

UI widgets call the event methods; nothing here draws or opens audio
devices directly. The synth collaborator only needs ``apply``, ``start``
and ``stop``.
"""
from dataclasses import dataclass
import logging
import math
from typing import Optional, Tuple

from analysis.acoustic_ranges import SpeakerCategory, range_for
from analysis.geometry import DEFAULT_GEOMETRY
from analysis.mapping import point_to_formants
from analysis.nearest import DEFAULT_SNAP_RADIUS, is_snap_eligible, nearest
from analysis.playback import ActiveFormants, VoiceSourceMode, derive
from analysis.vowel_catalog import NO_REFERENCE, ReferenceVowel, default_catalog

logger = logging.getLogger(__name__)

FORMANT_FIELDS = ("F1", "F2", "F3", "F4")


@dataclass
class CursorState:
    screen_x: float = 0.0
    screen_y: float = 0.0
    inside: bool = False


@dataclass(frozen=True)
class FrameResult:
    cursor: CursorState
    formants: Optional[Tuple[float, float]] = None
    nearest: Optional[Tuple[ReferenceVowel, float]] = None
    snapped: Optional[ReferenceVowel] = None
    params: object = None


def initial_formants(category) -> ActiveFormants:
    """Schwa in the middle of the category's range."""
    rng = range_for(category)
    return ActiveFormants(
        f1=0.5 * (rng.f1_min + rng.f1_max),
        f2=0.5 * (rng.f2_min + rng.f2_max),
        f3=rng.f3_default,
        f4=rng.f4_default,
        f0=rng.f0_default,
    )


def _field_hz(name, value):
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive finite frequency, got {value!r}")
    return value


class VowelSpaceSession:
    def __init__(
        self,
        synth=None,
        catalog=None,
        geometry=DEFAULT_GEOMETRY,
        speaker=SpeakerCategory.MALE,
        source=VoiceSourceMode.VOICED,
        snap_radius=DEFAULT_SNAP_RADIUS,
    ):
        self.synth = synth
        self.catalog = catalog if catalog is not None else default_catalog()
        self.geometry = geometry
        self.snap_radius = float(snap_radius)

        self.speaker = SpeakerCategory.coerce(speaker)
        self.source = VoiceSourceMode.coerce(source)
        self.reference = NO_REFERENCE
        self.vowel_set = self.catalog.vowels_for(NO_REFERENCE, self.speaker)

        self.active = initial_formants(self.speaker)
        self.cursor = CursorState()
        self.manual_override = False
        self.pressed = False
        self.last_frame: Optional[FrameResult] = None

    # ---------------------------------------------------------
    # Derived views
    # ---------------------------------------------------------
    @property
    def acoustic_range(self):
        return range_for(self.speaker)

    def params(self):
        return derive(self.active, self.source, self.acoustic_range.f0_default)

    def readout(self):
        # Field edits hold until the next pointer move inside the quadrilateral
        suffix = " (manual)" if self.manual_override else ""
        return (
            f"F1 = {round(self.active.f1)} Hz{suffix}",
            f"F2 = {round(self.active.f2)} Hz{suffix}",
        )

    def _push_params(self):
        params = self.params()
        if self.pressed and self.synth is not None:
            self.synth.apply(params)
        return params

    # ---------------------------------------------------------
    # Per-frame pipeline
    # ---------------------------------------------------------
    def pointer_moved(self, x, y) -> FrameResult:
        # Resolve range and geometry first; the rest reads only these locals
        rng = self.acoustic_range
        geometry = self.geometry
        vowel_set = self.vowel_set

        formants = point_to_formants(x, y, geometry, rng)
        cursor = CursorState(screen_x=float(x), screen_y=float(y),
                             inside=formants is not None)
        self.cursor = cursor

        if formants is None:
            result = FrameResult(cursor=cursor)
            self.last_frame = result
            return result

        f1, f2 = formants
        self.manual_override = False
        self.active.f1 = f1
        self.active.f2 = f2

        found = nearest(cursor, vowel_set, geometry, rng)
        snapped = None
        if found is not None and is_snap_eligible(found[1], self.snap_radius):
            snapped = found[0]
            self.active.f1 = snapped.f1
            self.active.f2 = snapped.f2
            self.active.f3 = snapped.f3
            self.active.f4 = snapped.f4
            logger.debug("snapped to /%s/ (%.1f px)", snapped.label, found[1])

        params = self._push_params()
        result = FrameResult(
            cursor=cursor,
            formants=(self.active.f1, self.active.f2),
            nearest=found,
            snapped=snapped,
            params=params,
        )
        self.last_frame = result
        return result

    def pointer_pressed(self, x, y) -> FrameResult:
        result = self.pointer_moved(x, y)
        if not result.cursor.inside:
            return result
        self.pressed = True
        if self.synth is not None:
            self.synth.apply(result.params)
            self.synth.start()
        return result

    def pointer_released(self) -> None:
        self.pressed = False
        if self.synth is not None:
            self.synth.stop()

    # ---------------------------------------------------------
    # Selection events
    # ---------------------------------------------------------
    def speaker_changed(self, category) -> SpeakerCategory:
        """
        Switch speaker category. Formants are left as they are; F0 goes to
        the new category's default. A reference that forces its own
        category wins, and the effective category is returned.
        """
        category = SpeakerCategory.coerce(category)
        forced = self.catalog.forced_category(self.reference)
        if forced is not None and forced is not category:
            logger.info("reference %s keeps speaker at %s", self.reference, forced.value)
            category = forced

        self.speaker = category
        self.active.f0 = range_for(category).f0_default
        self.vowel_set = self.catalog.vowels_for(self.reference, category)
        logger.debug("speaker -> %s", category.value)
        self._push_params()
        return category

    def source_changed(self, mode) -> VoiceSourceMode:
        self.source = VoiceSourceMode.coerce(mode)
        logger.debug("source -> %s", self.source.value)
        self._push_params()
        return self.source

    def reference_changed(self, language) -> SpeakerCategory:
        """Select a reference set; returns the (possibly forced) speaker category."""
        vowel_set = self.catalog.vowels_for(language, self.speaker)
        self.reference = language
        self.vowel_set = vowel_set
        logger.debug("reference -> %s (%d vowels)", language, len(vowel_set))

        suggested = vowel_set.suggested_category
        if suggested is not None and suggested is not self.speaker:
            return self.speaker_changed(suggested)
        return self.speaker

    def formant_edited(self, name, value) -> None:
        key = str(name).upper()
        if key not in FORMANT_FIELDS:
            raise ValueError(f"unknown formant field: {name!r}")
        setattr(self.active, key.lower(), _field_hz(key, value))
        self.manual_override = True
        self._push_params()

    def f0_edited(self, value) -> None:
        self.active.f0 = _field_hz("F0", value)
        self._push_params()
