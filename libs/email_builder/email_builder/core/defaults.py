"""
Fabrique de blocs — contenu et styles par défaut selon le type et le thème courant.
"""
from typing import Any, Dict, Optional, Tuple

from ..blocks import BLOCK_REGISTRY, Block, ImageBlock
from ..errors import ConstraintViolation
from .schemas import Logo, Theme
from .themes import DEFAULT_THEME, theme_styles

DEFAULT_LINK_URL = "{{dashboard_url}}"

_DEFAULT_CONTENT = {
    "heading": "New Heading",
    "text": "New text block...",
    "button": "Click Here",
    "link": "Click here to learn more",
}

_DEFAULT_SOCIAL_LINKS = [
    {"platform": "instagram", "url": "https://instagram.com/dropdeadhair", "enabled": True},
    {"platform": "tiktok", "url": "https://tiktok.com/@dropdeadhair", "enabled": True},
    {"platform": "email", "url": "hello@dropdeadhair.com", "enabled": True},
]

_DEFAULT_NAV_LINKS = [
    {"label": "Home", "url": "https://dropdeadhair.com", "enabled": True},
    {"label": "Services", "url": "https://dropdeadhair.com/services", "enabled": True},
    {"label": "Book Now", "url": "https://dropdeadhair.com/booking", "enabled": True, "show_arrow": True},
]


def _base_styles(block_type: str) -> Dict[str, Any]:
    styles: Dict[str, Any] = {
        "text_align": "left" if block_type == "link" else "center",
        "font_size": "24px" if block_type == "heading" else "16px",
        "padding_top": 16,
        "padding_bottom": 16,
        "padding_horizontal": 16,
    }
    if block_type == "button":
        styles.update(button_variant="primary", button_size=100, button_shape="rounded")
    elif block_type == "spacer":
        styles["height"] = "24px"
    elif block_type == "header":
        styles.update(padding_top=20, padding_bottom=20, padding_horizontal=24, border_radius="12px 12px 0 0")
    elif block_type == "footer":
        styles.update(padding_top=32, padding_bottom=32, padding_horizontal=24, border_radius="0 0 12px 12px")
    elif block_type == "signature":
        styles.update(text_align="left", padding_horizontal=24)
    return styles


def _payload(block_type: str) -> Dict[str, Any]:
    if block_type in ("button", "link"):
        return {"link_url": DEFAULT_LINK_URL}
    if block_type == "social":
        return {"social_links": [dict(link) for link in _DEFAULT_SOCIAL_LINKS]}
    if block_type == "footer":
        return {"social_links": [dict(link) for link in _DEFAULT_SOCIAL_LINKS], "footer_config": {}}
    if block_type == "header":
        return {"nav_links": [dict(link) for link in _DEFAULT_NAV_LINKS], "header_config": {}}
    if block_type == "signature":
        return {"signature_config": {"name": "Your Name", "title": "Stylist", "email": "hello@dropdeadhair.com"}}
    return {}


def new_block(block_type: str, theme: Optional[Theme] = None, **overrides) -> Block:
    """
    Crée un bloc neuf (nouvel id) coloré selon le thème.
    `overrides` : champs du bloc ; `styles` est fusionné avec les styles par défaut.
    """
    block_cls = BLOCK_REGISTRY.get(block_type)
    if block_cls is None:
        raise ConstraintViolation(f"Type de bloc inconnu : {block_type!r}")
    theme = theme or DEFAULT_THEME

    styles = _base_styles(block_type)
    styles.update(theme_styles(block_type, theme.colors))
    styles.update(overrides.pop("styles", None) or {})

    data: Dict[str, Any] = {"content": _DEFAULT_CONTENT.get(block_type, ""), **_payload(block_type)}
    data.update(overrides)
    data.pop("id", None)
    data["type"] = block_type
    data["styles"] = styles
    return block_cls.model_validate(data)


def new_logo_block(logo: Logo, theme: Optional[Theme] = None) -> ImageBlock:
    """Bloc image pré-rempli avec un logo du registre."""
    theme = theme or DEFAULT_THEME
    return new_block(
        "image", theme,
        content=logo.name,
        image_url=logo.src,
        styles={"background_color": theme.colors.header_bg, "width": "180px",
                "padding_top": 24, "padding_bottom": 24, "padding_horizontal": 24},
    )


def starter_blocks(theme: Optional[Theme] = None) -> Tuple[Block, ...]:
    """Document par défaut : header + heading + text + button + footer."""
    theme = theme or DEFAULT_THEME
    return (
        new_block("header", theme),
        new_block("heading", theme, content="Email Title",
                  styles={"padding_top": 24, "padding_bottom": 24, "padding_horizontal": 24}),
        new_block("text", theme, content="Hi {{employee_name}},\n\nAdd your email content here...",
                  styles={"text_align": "left", "padding_top": 24, "padding_bottom": 24, "padding_horizontal": 24}),
        new_block("button", theme, content="Take Action",
                  styles={"padding_top": 24, "padding_bottom": 24, "padding_horizontal": 24}),
        new_block("footer", theme),
    )
