"""
Résolveurs de styles — fonctions pures et totales.

Priorité par propriété : valeur explicite du bloc → défaut du type → fallback global.
Aucun résolveur ne lève d'exception : une donnée legacy malformée retombe sur le défaut.
"""
import math
import re
from typing import NamedTuple, Optional

from ..blocks.base import BlockStyles

DEFAULT_PADDING = 24
ALIGNMENTS = ("left", "center", "right")
BORDER_STYLES = ("solid", "dashed", "dotted")

BUTTON_SIZE_DEFAULT = 100
BUTTON_SIZE_MIN = 80
BUTTON_SIZE_MAX = 140
BUTTON_BASE_PADDING_V = 16
BUTTON_BASE_PADDING_H = 32
BUTTON_BASE_FONT = 16

LOGO_SIZES = {"xs": 50, "small": 80, "medium": 120, "large": 160, "xl": 220}

_HEX6 = re.compile(r"^#([0-9a-fA-F]{6})$")
_PX_TOKEN = re.compile(r"^(\d+(?:\.\d+)?)(?:px)?$")


class Padding(NamedTuple):
    top: int
    bottom: int
    horizontal: int

    def css(self) -> str:
        """Ordre CSS : top horizontal bottom horizontal."""
        return f"{self.top}px {self.horizontal}px {self.bottom}px {self.horizontal}px"


FALLBACK_PADDING = Padding(DEFAULT_PADDING, DEFAULT_PADDING, DEFAULT_PADDING)


class ButtonMetrics(NamedTuple):
    padding_v: int
    padding_h: int
    font_size: int


def _round(x: float) -> int:
    return int(math.floor(x + 0.5))


def _px(token: str) -> Optional[int]:
    m = _PX_TOKEN.match(token)
    return _round(float(m.group(1))) if m else None


# ── Padding ─────────────────────────────────────────────────────────────────

def parse_legacy_padding(value) -> Padding:
    """
    Chaîne CSS shorthand legacy → Padding.
      "16px"               → 16 / 16 / 16
      "16px 24px"          → top=bottom=16, horizontal=24
      "8px 24px 16px"      → top=8, horizontal=24, bottom=16
      "8px 20px 16px 24px" → top=8, horizontal=20 (côté droit), bottom=16
    Toute autre forme → 24 partout.
    """
    if not isinstance(value, str):
        return FALLBACK_PADDING
    tokens = value.split()
    if not 1 <= len(tokens) <= 4:
        return FALLBACK_PADDING
    values = [_px(t) for t in tokens]
    if any(v is None for v in values):
        return FALLBACK_PADDING

    if len(values) == 1:
        return Padding(values[0], values[0], values[0])
    if len(values) == 2:
        return Padding(values[0], values[0], values[1])
    return Padding(values[0], values[2], values[1])


def has_discrete_padding(styles: BlockStyles) -> bool:
    return any(v is not None for v in (styles.padding_top, styles.padding_bottom, styles.padding_horizontal))


def resolve_padding(styles: BlockStyles, default: Padding = FALLBACK_PADDING) -> Padding:
    """Champs discrets d'abord ; chaîne legacy seulement si les trois sont absents."""
    if has_discrete_padding(styles):
        return Padding(
            styles.padding_top if styles.padding_top is not None else DEFAULT_PADDING,
            styles.padding_bottom if styles.padding_bottom is not None else DEFAULT_PADDING,
            styles.padding_horizontal if styles.padding_horizontal is not None else DEFAULT_PADDING,
        )
    if styles.padding and styles.padding.strip():
        return parse_legacy_padding(styles.padding)
    return default


# ── Couleurs ────────────────────────────────────────────────────────────────

def apply_opacity(color: Optional[str], opacity: Optional[int] = None) -> Optional[str]:
    """#RRGGBB + opacité < 100 → rgba(r, g, b, a). Opacité ignorée hors hex 6 chiffres."""
    if not color or opacity is None or opacity >= 100:
        return color
    m = _HEX6.match(color.strip())
    if not m:
        return color
    h = m.group(1)
    r, g, b = (int(h[i:i + 2], 16) for i in (0, 2, 4))
    alpha = max(opacity, 0) / 100
    return f"rgba({r}, {g}, {b}, {alpha:g})"


def resolve_background(styles: BlockStyles, default: str = "transparent") -> str:
    return apply_opacity(styles.background_color or default, styles.background_opacity)


def resolve_text_color(styles: BlockStyles, default: Optional[str] = None) -> Optional[str]:
    """None = couleur héritée du conteneur."""
    return styles.text_color or default


# ── Typo / alignement / bordures ────────────────────────────────────────────

def css_length(value: Optional[str], default: str) -> str:
    """"24" → "24px" ; "1.5em" conservé ; vide → défaut."""
    if value is None or not str(value).strip():
        return default
    value = str(value).strip()
    return f"{value}px" if re.fullmatch(r"\d+(?:\.\d+)?", value) else value


def resolve_font_size(styles: BlockStyles, default: str) -> str:
    return css_length(styles.font_size, default)


def resolve_text_align(styles: BlockStyles, default: str = "center") -> str:
    return styles.text_align if styles.text_align in ALIGNMENTS else default


def resolve_border(styles: BlockStyles) -> Optional[str]:
    """Déclaration CSS `border` ou None si aucune bordure."""
    width = styles.border_width or 0
    if width <= 0:
        return None
    style = styles.border_style if styles.border_style in BORDER_STYLES else "solid"
    return f"{width}px {style} {styles.border_color or '#e5e7eb'}"


# ── Bouton ──────────────────────────────────────────────────────────────────

def clamp_button_size(size: Optional[int]) -> int:
    if size is None:
        return BUTTON_SIZE_DEFAULT
    return max(BUTTON_SIZE_MIN, min(BUTTON_SIZE_MAX, size))


def button_metrics(size: Optional[int]) -> ButtonMetrics:
    """Échelle en % appliquée uniformément aux valeurs de base 16px / 32px / 16px."""
    scale = clamp_button_size(size) / 100
    return ButtonMetrics(
        _round(BUTTON_BASE_PADDING_V * scale),
        _round(BUTTON_BASE_PADDING_H * scale),
        _round(BUTTON_BASE_FONT * scale),
    )


def button_radius(styles: BlockStyles) -> str:
    if styles.button_shape == "pill":
        return "9999px"
    if styles.button_shape == "rectangle":
        return "0"
    # Documents antérieurs à button_shape : border_radius explicite
    if styles.button_shape is None and styles.border_radius:
        return styles.border_radius
    return "8px"


# ── Logos ───────────────────────────────────────────────────────────────────

def logo_width(size: Optional[str]) -> int:
    return LOGO_SIZES.get(size or "medium", LOGO_SIZES["medium"])
