"""
Schémas Pydantic transverses : logos, thèmes, contexte de compilation.
"""
from typing import Optional, Tuple

from pydantic import Field

from ..blocks.base import EmailModel


class Logo(EmailModel):
    """Logo de marque du registre."""
    id: str
    name: str
    src: str
    variant: str = "dark"           # light (sur fond sombre) | dark (sur fond clair)
    description: str = ""


class ThemeColors(EmailModel):
    header_bg: str = "#1a1a1a"
    header_text: str = "#f5f0e8"
    body_bg: str = "#f5f0e8"
    body_text: str = "#1a1a1a"
    button_bg: str = "#1a1a1a"
    button_text: str = "#f5f0e8"
    accent_color: str = "#d4c5b0"
    divider_color: str = "#d4c5b0"


class Theme(EmailModel):
    """Palette nommée, appliquée en masse, jamais référencée par les blocs."""
    id: str = ""
    name: str
    description: str = ""
    colors: ThemeColors = Field(default_factory=ThemeColors)
    builtin: bool = False


def _default_logos() -> Tuple[Logo, ...]:
    from .logos import BRAND_LOGOS
    return BRAND_LOGOS


class CompileContext(EmailModel):
    """
    Contexte ambiant explicite du compilateur.
    base_url : origine absolue utilisée pour réécrire les chemins "/..." des assets.
    """
    base_url: str = ""
    logos: Tuple[Logo, ...] = Field(default_factory=_default_logos)
    max_width: int = 600
    font_family: str = "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif"

    def resolve_url(self, url: Optional[str]) -> Optional[str]:
        """"/assets/x.png" → "{base_url}/assets/x.png" ; URLs absolues et "//" intactes."""
        if url and self.base_url and url.startswith("/") and not url.startswith("//"):
            return self.base_url.rstrip("/") + url
        return url
