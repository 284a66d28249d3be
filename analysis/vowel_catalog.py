# analysis/vowel_catalog.py
"""
Reference vowel catalog.

Reference sets live in one JSON asset (``reference_vowels.json``), keyed by
reference language and speaker category. The asset is loaded and validated
once; lookups never mutate it. Missing F3/F4 values are estimated at lookup
time:

  - F3 from (F1, F2) with a front/back linear regression
  - F4 as F3 plus a speaker-dependent offset

Some references force a speaker category (the data only exist for one).
``vowels_for`` then returns that category's data and reports it in
``suggested_category`` so the caller can switch its own selection.
"""
from dataclasses import dataclass, replace
import json
import logging
from pathlib import Path
from typing import Optional, Tuple

from analysis.acoustic_ranges import SpeakerCategory

logger = logging.getLogger(__name__)

CATALOG_PATH = Path(__file__).with_name("reference_vowels.json")

NO_REFERENCE = "none"

# ---------------------------------------------------------
# F3/F4 estimation constants
# ---------------------------------------------------------
# F3 regression on (F1, F2); the branch is chosen by F2 against the boundary.
# Coefficients are used exactly as published by the cited model.
F3_BRANCH_BOUNDARY_HZ = 1500.0
F3_BACK_COEFFS = (0.522, 1.197, 57.0)     # F2 <= boundary
F3_FRONT_COEFFS = (0.787, -0.365, 2341.0)  # F2 > boundary

F4_OFFSETS = {
    SpeakerCategory.MALE: 1000.0,
    SpeakerCategory.FEMALE: 1200.0,
}


class CatalogError(ValueError):
    """Raised when the reference vowel asset is malformed."""


@dataclass(frozen=True)
class ReferenceVowel:
    label: str
    f1: float
    f2: float
    f3: Optional[float] = None
    f4: Optional[float] = None
    f3_estimated: bool = False
    f4_estimated: bool = False

    @property
    def formants(self):
        return self.f1, self.f2, self.f3, self.f4


@dataclass(frozen=True)
class ReferenceVowelSet:
    language: str
    category: Optional[SpeakerCategory]
    vowels: Tuple[ReferenceVowel, ...] = ()
    suggested_category: Optional[SpeakerCategory] = None
    source: str = ""

    def __iter__(self):
        return iter(self.vowels)

    def __len__(self):
        return len(self.vowels)

    def __bool__(self):
        return bool(self.vowels)


# ---------------------------------------------------------
# Missing-value estimation
# ---------------------------------------------------------

def estimate_f3(f1, f2):
    """Estimate F3 from F1/F2. F2 exactly on the boundary uses the back branch."""
    if f2 <= F3_BRANCH_BOUNDARY_HZ:
        a, b, c = F3_BACK_COEFFS
    else:
        a, b, c = F3_FRONT_COEFFS
    return a * f1 + b * f2 + c


def estimate_f4(f3, category):
    return f3 + F4_OFFSETS[SpeakerCategory.coerce(category)]


def complete_vowel(vowel: ReferenceVowel, category) -> ReferenceVowel:
    """Return ``vowel`` with F3/F4 filled in; the input is left untouched."""
    f3, f4 = vowel.f3, vowel.f4
    f3_est = f4_est = False
    if f3 is None:
        f3 = estimate_f3(vowel.f1, vowel.f2)
        f3_est = True
    if f4 is None:
        f4 = estimate_f4(f3, category)
        f4_est = True
    if not (f3_est or f4_est):
        return vowel
    return replace(vowel, f3=f3, f4=f4, f3_estimated=f3_est, f4_estimated=f4_est)


# ---------------------------------------------------------
# Loading + validation
# ---------------------------------------------------------

def _number(value, where):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CatalogError(f"{where}: expected a number, got {value!r}")
    if not value > 0:
        raise CatalogError(f"{where}: formants must be positive, got {value!r}")
    return float(value)


def _parse_vowel(entry, where) -> ReferenceVowel:
    if not isinstance(entry, dict):
        raise CatalogError(f"{where}: expected an object, got {type(entry).__name__}")

    label = entry.get("label")
    if not isinstance(label, str) or not label.strip():
        raise CatalogError(f"{where}: missing vowel label")
    where = f"{where} /{label}/"

    if "f1" not in entry or "f2" not in entry:
        raise CatalogError(f"{where}: F1 and F2 are required")
    f1 = _number(entry["f1"], f"{where} F1")
    f2 = _number(entry["f2"], f"{where} F2")
    f3 = _number(entry["f3"], f"{where} F3") if entry.get("f3") is not None else None
    f4 = _number(entry["f4"], f"{where} F4") if entry.get("f4") is not None else None

    if not f1 < f2:
        raise CatalogError(f"{where}: F1 ({f1}) must be below F2 ({f2})")
    if f3 is not None and not f2 < f3:
        raise CatalogError(f"{where}: F3 ({f3}) must be above F2 ({f2})")
    if f4 is not None and f3 is not None and not f3 < f4:
        raise CatalogError(f"{where}: F4 ({f4}) must be above F3 ({f3})")

    return ReferenceVowel(label=label, f1=f1, f2=f2, f3=f3, f4=f4)


def _category(value, where):
    try:
        return SpeakerCategory.coerce(value)
    except ValueError:
        raise CatalogError(f"{where}: unknown speaker category {value!r}") from None


@dataclass(frozen=True)
class _Reference:
    key: str
    name: str
    source: str
    forced_category: Optional[SpeakerCategory]
    sets: dict


def _parse_reference(key, raw):
    where = f"reference '{key}'"
    if not isinstance(raw, dict):
        raise CatalogError(f"{where}: expected an object")

    sets_raw = raw.get("sets")
    if not isinstance(sets_raw, dict) or not sets_raw:
        raise CatalogError(f"{where}: no vowel sets")

    sets = {}
    for cat_name, entries in sets_raw.items():
        category = _category(cat_name, where)
        if not isinstance(entries, list):
            raise CatalogError(f"{where} [{cat_name}]: expected a list of vowels")
        sets[category] = tuple(
            _parse_vowel(entry, f"{where} [{cat_name}] #{i}")
            for i, entry in enumerate(entries)
        )

    forced = raw.get("forced_category")
    if forced is not None:
        forced = _category(forced, f"{where} forced_category")
        if forced not in sets:
            raise CatalogError(
                f"{where}: forced category '{forced.value}' has no vowel set"
            )

    return _Reference(
        key=key,
        name=str(raw.get("name") or key),
        source=str(raw.get("source") or ""),
        forced_category=forced,
        sets=sets,
    )


class VowelCatalog:
    """Read-only lookup over validated reference vowel sets."""

    def __init__(self, references):
        self._references = dict(references)

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict) or not isinstance(data.get("references"), dict):
            raise CatalogError("catalog must contain a 'references' object")
        refs = {}
        for key, raw in data["references"].items():
            if key == NO_REFERENCE:
                raise CatalogError(f"'{NO_REFERENCE}' is reserved")
            refs[key] = _parse_reference(key, raw)
        return cls(refs)

    def languages(self):
        """Ordered (key, display name) pairs, as listed in the asset."""
        return [(key, ref.name) for key, ref in self._references.items()]

    def source_for(self, language) -> str:
        return self._references[language].source

    def forced_category(self, language) -> Optional[SpeakerCategory]:
        if language == NO_REFERENCE:
            return None
        return self._references[language].forced_category

    def vowels_for(self, language, category) -> ReferenceVowelSet:
        """
        Reference vowels for a language and speaker category.

        ``"none"`` yields an empty set. Unknown languages raise KeyError.
        Languages with a forced category ignore ``category``, return the
        forced category's data and name it in ``suggested_category``.
        """
        category = SpeakerCategory.coerce(category)
        if language == NO_REFERENCE:
            return ReferenceVowelSet(language=language, category=category)

        ref = self._references[language]
        suggested = None
        if ref.forced_category is not None:
            if ref.forced_category is not category:
                logger.debug("reference %s forces %s speaker data",
                             language, ref.forced_category.value)
            category = ref.forced_category
            suggested = ref.forced_category

        vowels = tuple(complete_vowel(v, category) for v in ref.sets.get(category, ()))
        return ReferenceVowelSet(
            language=language,
            category=category,
            vowels=vowels,
            suggested_category=suggested,
            source=ref.source,
        )


def load_catalog(path=None) -> VowelCatalog:
    """Load and validate a catalog asset. Malformed data raises CatalogError."""
    path = Path(path) if path is not None else CATALOG_PATH
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(f"{path}: invalid JSON ({e})") from e

    catalog = VowelCatalog.from_dict(data)
    logger.info("Loaded %d reference vowel sets from %s",
                len(catalog.languages()), path.name)
    return catalog


_default_catalog = None


def default_catalog() -> VowelCatalog:
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = load_catalog()
    return _default_catalog
