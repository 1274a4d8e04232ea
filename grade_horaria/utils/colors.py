from __future__ import annotations
from typing import NamedTuple, Sequence, Tuple

RGB = Tuple[int, int, int]


class BadgeStyle(NamedTuple):
    name: str
    background: str
    text: str
    border: str


# On-screen discipline badges (tailwind -100 / -800 / -200 shades)
BADGE_PALETTE: Tuple[BadgeStyle, ...] = (
    BadgeStyle("blue", "#dbeafe", "#1e40af", "#bfdbfe"),
    BadgeStyle("green", "#dcfce7", "#166534", "#bbf7d0"),
    BadgeStyle("purple", "#f3e8ff", "#6b21a8", "#e9d5ff"),
    BadgeStyle("yellow", "#fef9c3", "#854d0e", "#fef08a"),
    BadgeStyle("pink", "#fce7f3", "#9d174d", "#fbcfe8"),
    BadgeStyle("indigo", "#e0e7ff", "#3730a3", "#c7d2fe"),
    BadgeStyle("red", "#fee2e2", "#991b1b", "#fecaca"),
    BadgeStyle("orange", "#ffedd5", "#9a3412", "#fed7aa"),
    BadgeStyle("teal", "#ccfbf1", "#115e59", "#99f6e4"),
    BadgeStyle("cyan", "#cffafe", "#155e75", "#a5f3fc"),
    BadgeStyle("emerald", "#d1fae5", "#065f46", "#a7f3d0"),
    BadgeStyle("violet", "#ede9fe", "#5b21b6", "#ddd6fe"),
    BadgeStyle("amber", "#fef3c7", "#92400e", "#fde68a"),
    BadgeStyle("rose", "#ffe4e6", "#9f1239", "#fecdd3"),
    BadgeStyle("lime", "#ecfccb", "#3f6212", "#d9f99d"),
)

# Exported document: teacher fills
TEACHER_PALETTE: Tuple[RGB, ...] = (
    (255, 182, 193),
    (173, 216, 230),
    (144, 238, 144),
    (255, 218, 185),
    (221, 160, 221),
    (255, 255, 224),
    (255, 192, 203),
    (176, 196, 222),
    (152, 251, 152),
    (255, 228, 196),
    (230, 230, 250),
    (255, 239, 213),
    (250, 240, 230),
    (240, 248, 255),
    (245, 255, 250),
    (255, 245, 238),
    (248, 248, 255),
    (245, 245, 220),
    (255, 250, 240),
    (240, 255, 240),
)

NEUTRAL_FILL: RGB = (255, 255, 255)   # occupied cell without a known teacher
EMPTY_FILL: RGB = (245, 245, 245)     # "---" cell
HEADER_FILL: RGB = (30, 64, 175)
TIME_COLUMN_FILL: RGB = (243, 244, 246)
MUTED_TEXT: RGB = (107, 114, 128)


def _int32(v: int) -> int:
    return ((v + 2**31) % 2**32) - 2**31


def _utf16_units(label: str):
    data = label.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def label_hash(label: str) -> int:
    """
    hash = code + ((hash << 5) - hash) over the UTF-16 code units,
    with the shift done in 32-bit signed arithmetic so a browser
    computing the same formula lands on the same number.
    """
    h = 0
    for code in _utf16_units(label or ""):
        h = code + (_int32(_int32(h) << 5) - h)
    return h


def badge_index(label: str) -> int:
    return abs(label_hash(label)) % len(BADGE_PALETTE)


def badge_color(label: str) -> BadgeStyle:
    return BADGE_PALETTE[badge_index(label)]


def teacher_color(teacher: str, all_teachers: Sequence[str]) -> RGB:
    """
    Color of `teacher` by its position in `all_teachers` (document order).
    Empty or unknown teacher -> NEUTRAL_FILL.
    """
    if not teacher:
        return NEUTRAL_FILL
    try:
        idx = list(all_teachers).index(teacher)
    except ValueError:
        return NEUTRAL_FILL
    return TEACHER_PALETTE[idx % len(TEACHER_PALETTE)]


def rgb_to_hex(rgb: RGB) -> str:
    return "#{:02X}{:02X}{:02X}".format(*rgb)
