"""
Thèmes email — palettes intégrées, application en masse, contrat du store.

Appliquer un thème = édition ponctuelle des couleurs des blocs connus.
Aucun bloc ne garde de référence au thème : modifier le thème ensuite
ne change rien aux blocs déjà colorés.
"""
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from ..blocks import Block
from .schemas import Theme, ThemeColors


def _theme(id: str, name: str, description: str, **colors) -> Theme:
    return Theme(id=id, name=name, description=description, colors=ThemeColors(**colors), builtin=True)


BUILTIN_THEMES: Tuple[Theme, ...] = (
    _theme("drop-dead", "Drop Dead Standard", "Cream, oat & black luxury palette",
           header_bg="#1a1a1a", header_text="#f5f0e8", body_bg="#f5f0e8", body_text="#1a1a1a",
           button_bg="#1a1a1a", button_text="#f5f0e8", accent_color="#d4c5b0", divider_color="#d4c5b0"),
    _theme("modern-minimal", "Modern Minimal", "Clean black & white",
           header_bg="#000000", header_text="#ffffff", body_bg="#ffffff", body_text="#000000",
           button_bg="#000000", button_text="#ffffff", accent_color="#f3f4f6", divider_color="#e5e7eb"),
    _theme("warm-neutral", "Warm Neutral", "Soft beige & warm tones",
           header_bg="#292524", header_text="#faf7f5", body_bg="#faf7f5", body_text="#292524",
           button_bg="#78716c", button_text="#faf7f5", accent_color="#e7e5e4", divider_color="#d6d3d1"),
    _theme("ocean-breeze", "Ocean Breeze", "Fresh blue tones",
           header_bg="#0f172a", header_text="#f0f9ff", body_bg="#f0f9ff", body_text="#0f172a",
           button_bg="#3b82f6", button_text="#ffffff", accent_color="#dbeafe", divider_color="#bfdbfe"),
    _theme("forest-green", "Forest Green", "Earthy green palette",
           header_bg="#14532d", header_text="#f0fdf4", body_bg="#f0fdf4", body_text="#14532d",
           button_bg="#16a34a", button_text="#ffffff", accent_color="#dcfce7", divider_color="#bbf7d0"),
    _theme("rose-blush", "Rose Blush", "Soft pink elegance",
           header_bg="#831843", header_text="#fdf2f8", body_bg="#fdf2f8", body_text="#831843",
           button_bg="#db2777", button_text="#ffffff", accent_color="#fce7f3", divider_color="#fbcfe8"),
)

DEFAULT_THEME = BUILTIN_THEMES[0]


class ThemeStore(Protocol):
    """Store externe des thèmes personnalisés. update / delete : None / False si id inconnu."""
    def list(self) -> List[Theme]: ...
    def create(self, theme: Theme) -> Theme: ...
    def update(self, theme_id: str, theme: Theme) -> Optional[Theme]: ...
    def delete(self, theme_id: str) -> bool: ...


def find_theme(themes: Iterable[Theme], theme_id: str) -> Optional[Theme]:
    return next((t for t in themes if t.id == theme_id), None)


def theme_styles(block_type: str, colors: ThemeColors) -> Dict[str, str]:
    """Couleurs du thème pour un type de bloc (clés BlockStyles)."""
    c = colors
    if block_type in ("heading", "header"):
        return {"background_color": c.header_bg, "text_color": c.header_text}
    if block_type == "footer":
        return {"background_color": c.header_bg, "text_color": c.header_text, "button_color": c.header_text}
    if block_type in ("text", "signature"):
        return {"background_color": c.body_bg, "text_color": c.body_text}
    if block_type == "button":
        return {"button_color": c.button_bg, "button_text_color": c.button_text, "background_color": c.body_bg}
    if block_type == "link":
        return {"background_color": c.body_bg, "text_color": c.body_text, "button_color": c.button_bg}
    if block_type == "social":
        return {"background_color": c.body_bg, "button_color": c.button_bg}
    if block_type == "divider":
        return {"text_color": c.divider_color}
    if block_type == "image":
        return {"background_color": c.body_bg}
    return {}


def apply_theme(blocks: Sequence[Block], theme: Theme) -> Tuple[Block, ...]:
    """Nouveau tuple de blocs recolorés ; les blocs d'entrée ne sont pas modifiés."""
    result = []
    for block in blocks:
        updates = theme_styles(block.type, theme.colors)
        if updates:
            block = block.model_copy(update={"styles": block.styles.model_copy(update=updates)})
        result.append(block)
    return tuple(result)
