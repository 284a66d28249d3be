# explorer/vowel_colors.py

OVERLAY_COLOR = "#0880a0"     # reference glyphs
SNAP_COLOR = "#e6194b"        # glyph within snap radius
CURSOR_COLOR = "#0a0a0a"

PALETTE = [
    "#e6194b", "#3cb44b", "#4363d8", "#f58231", "#911eb4",
    "#008080", "#9a6324", "#800000", "#808000", "#000075",
]


def vowel_color_for(vowel: str) -> str:
    if vowel in VOWEL_COLORS:
        return VOWEL_COLORS[vowel]
    # Stable across runs (str hash is salted per process)
    index = sum(ord(ch) for ch in vowel) % len(PALETTE)
    return PALETTE[index]


def glyph_color(vowel: str, highlighted: bool = False, by_vowel: bool = False) -> str:
    if highlighted:
        return SNAP_COLOR
    if by_vowel:
        return vowel_color_for(vowel)
    return OVERLAY_COLOR


VOWEL_COLORS = {
    "i":  "#c2185b",
    "ɪ":  "#0097a7",
    "e":  "#7b1fa2",
    "ɛ":  "#388e3c",
    "æ":  "#ef6c00",
    "a":  "#512da8",
    "ɑ":  "#00796b",
    "ʌ":  "#afb42b",
    "ɔ":  "#00838f",
    "o":  "#ad1457",
    "ʊ":  "#689f38",
    "u":  "#6a1b9a",
    "ɝ":  "#5d4037",
}
