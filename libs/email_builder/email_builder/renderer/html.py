"""
Compilateur HTML — séquence ordonnée de blocs → markup email portable.

Chaque bloc est compilé indépendamment (aucune dépendance aux voisins) puis les
fragments sont concaténés dans l'ordre du document, à l'intérieur d'un conteneur
unique de largeur max fixe. Pur, déterministe, total : une donnée optionnelle
manquante produit un rendu de repli, jamais une exception.

Styles inline uniquement (les clients mail ignorent les <style> externes).
"""
from html import escape
from typing import Iterable, Optional, Sequence, Tuple

from ..blocks import (
    Block,
    ButtonBlock,
    DividerBlock,
    FooterBlock,
    HeaderBlock,
    HeadingBlock,
    ImageBlock,
    LinkBlock,
    SignatureBlock,
    SocialBlock,
    SocialLink,
    SpacerBlock,
    TextBlock,
)
from ..blocks.base import BlockStyles
from ..core.logos import select_logo
from ..core.schemas import CompileContext
from ..core.styles import (
    ALIGNMENTS,
    BORDER_STYLES,
    FALLBACK_PADDING,
    Padding,
    button_metrics,
    button_radius,
    css_length,
    logo_width,
    resolve_background,
    resolve_border,
    resolve_font_size,
    resolve_padding,
    resolve_text_align,
    resolve_text_color,
)
from .icons import social_href, social_icon_svg

PLACEHOLDER_IMAGE_URL = "https://placehold.co/600x200?text=Image"
ARROW = " →"

Decl = Tuple[str, Optional[str]]


# ── Point d'entrée public ───────────────────────────────────────────────────

def compile_blocks(blocks: Iterable[Block], context: Optional[CompileContext] = None) -> str:
    """Compile le document. Les fragments vides (ex: social sans lien actif) sont omis."""
    ctx = context or CompileContext()
    fragments = [f for f in (render_block(b, ctx) for b in blocks) if f]
    body = "\n".join(fragments)
    return (
        f'<div style="font-family: {ctx.font_family}; max-width: {ctx.max_width}px; margin: 0 auto;">\n'
        f"{body}\n"
        f"</div>"
    )


def render_document(blocks: Iterable[Block], context: Optional[CompileContext] = None, subject: str = "") -> str:
    """Document HTML complet (envoi / aperçu hors éditeur)."""
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(subject)}</title>
</head>
<body style="margin: 0; padding: 24px 0; background-color: #f4f4f5;">
{compile_blocks(blocks, context)}
</body>
</html>"""


# ── Dispatch ────────────────────────────────────────────────────────────────

def render_block(block: Block, context: Optional[CompileContext] = None) -> str:
    """Dispatch vers le renderer du type de bloc."""
    ctx = context or CompileContext()
    if isinstance(block, HeadingBlock):   return render_heading_block(block, ctx)
    if isinstance(block, TextBlock):      return render_text_block(block, ctx)
    if isinstance(block, ImageBlock):     return render_image_block(block, ctx)
    if isinstance(block, ButtonBlock):    return render_button_block(block, ctx)
    if isinstance(block, LinkBlock):      return render_link_block(block, ctx)
    if isinstance(block, DividerBlock):   return render_divider_block(block, ctx)
    if isinstance(block, SpacerBlock):    return render_spacer_block(block, ctx)
    if isinstance(block, SocialBlock):    return render_social_block(block, ctx)
    if isinstance(block, FooterBlock):    return render_footer_block(block, ctx)
    if isinstance(block, HeaderBlock):    return render_header_block(block, ctx)
    if isinstance(block, SignatureBlock): return render_signature_block(block, ctx)
    return f"<!-- Bloc non implémenté : {getattr(block, 'type', '?')} -->"


# ── Helpers ─────────────────────────────────────────────────────────────────

def _attr(value: Optional[str]) -> str:
    return escape(value or "", quote=True)


def _css(*decls: Decl) -> str:
    """("color", "#000"), ("border", None) → "color: #000" (valeurs None ignorées)."""
    return "; ".join(f"{prop}: {value}" for prop, value in decls if value is not None and value != "")


def _box(st: BlockStyles, default_padding: Padding = FALLBACK_PADDING, default_bg: str = "transparent") -> Tuple[Decl, ...]:
    """Déclarations communes : fond, padding, bordure, arrondi."""
    return (
        ("background-color", resolve_background(st, default_bg)),
        ("padding", resolve_padding(st, default_padding).css()),
        ("border", resolve_border(st)),
        ("border-radius", st.border_radius),
    )


def _social_icons(links: Sequence[SocialLink], color: str, size: int) -> str:
    icon_style = _css(
        ("display", "inline-block"), ("width", f"{size}px"), ("height", f"{size}px"),
        ("margin", "0 8px"), ("text-decoration", "none"),
    )
    return "".join(
        f'<a href="{_attr(social_href(link.platform, link.url))}" style="{icon_style}" target="_blank" rel="noopener">'
        f"{social_icon_svg(link.platform, color, size)}</a>"
        for link in links
    )


def _logo_html(cfg, ctx: CompileContext) -> str:
    """Logo résolu (id → variante → premier) ou placeholder si registre vide."""
    width = logo_width(cfg.logo_size)
    logo = select_logo(ctx.logos, cfg.logo_id, cfg.logo_variant)
    if logo is None:
        height = round(width / 3)
        style = _css(
            ("display", "inline-block"), ("width", f"{width}px"), ("height", f"{height}px"),
            ("line-height", f"{height}px"), ("border", "1px dashed currentColor"),
            ("font-size", "12px"), ("text-align", "center"), ("opacity", "0.6"),
        )
        return f'<div style="{style}">LOGO</div>'
    style = _css(("max-width", f"{width}px"), ("height", "auto"), ("display", "inline-block"))
    return f'<img src="{_attr(ctx.resolve_url(logo.src))}" alt="{_attr(logo.name)}" width="{width}" style="{style}" />'


# ── Renderers par type ──────────────────────────────────────────────────────

def render_heading_block(b: HeadingBlock, ctx: CompileContext) -> str:
    st = b.styles
    style = _css(
        *_box(st),
        ("color", resolve_text_color(st)),
        ("font-size", resolve_font_size(st, "24px")),
        ("font-weight", st.font_weight or "bold"),
        ("text-align", resolve_text_align(st)),
        ("margin", "0"),
    )
    return f'<h1 style="{style}">{b.content}</h1>'


def render_text_block(b: TextBlock, ctx: CompileContext) -> str:
    st = b.styles
    style = _css(
        *_box(st),
        ("color", resolve_text_color(st)),
        ("font-size", resolve_font_size(st, "16px")),
        ("font-weight", st.font_weight),
        ("text-align", resolve_text_align(st, "left")),
        ("margin", "0"),
        ("line-height", "1.6"),
    )
    content = b.content.replace("\r\n", "\n").replace("\n", "<br>")
    return f'<p style="{style}">{content}</p>'


def render_image_block(b: ImageBlock, ctx: CompileContext) -> str:
    st = b.styles
    src = ctx.resolve_url(b.image_url) if b.image_url and b.image_url.strip() else PLACEHOLDER_IMAGE_URL
    img_style = _css(
        ("max-width", "100%"),
        ("width", st.width),
        ("height", "auto"),
        ("border-radius", st.border_radius),
        ("display", "inline-block"),
    )
    img = f'<img src="{_attr(src)}" alt="{_attr(b.content or "Email image")}" style="{img_style}" />'
    if b.link_url:
        img = f'<a href="{_attr(b.link_url)}" target="_blank" rel="noopener">{img}</a>'

    wrapper = _css(
        ("text-align", resolve_text_align(st)),
        ("background-color", resolve_background(st)),
        ("padding", resolve_padding(st).css()),
        ("border", resolve_border(st)),
    )
    return f'<div style="{wrapper}">{img}</div>'


def render_button_block(b: ButtonBlock, ctx: CompileContext) -> str:
    st = b.styles
    m = button_metrics(st.button_size)
    color = st.button_color or "#3b82f6"

    if st.button_variant == "secondary":
        colors: Tuple[Decl, ...] = (
            ("background-color", "transparent"),
            ("color", color),
            ("border", f"2px solid {color}"),
        )
    else:
        colors = (
            ("background-color", color),
            ("color", st.button_text_color or "#ffffff"),
        )

    btn_style = _css(
        ("display", "inline-block"),
        *colors,
        ("padding", f"{m.padding_v}px {m.padding_h}px"),
        ("font-size", f"{m.font_size}px"),
        ("font-weight", "bold"),
        ("text-decoration", "none"),
        ("border-radius", button_radius(st)),
    )
    label = b.content + (ARROW if st.show_arrow else "")

    wrapper = _css(
        ("text-align", resolve_text_align(st)),
        ("background-color", resolve_background(st)),
        ("padding", resolve_padding(st).css()),
        ("border", resolve_border(st)),
    )
    return f'<div style="{wrapper}"><a href="{_attr(b.link_url or "#")}" style="{btn_style}">{label}</a></div>'


def render_link_block(b: LinkBlock, ctx: CompileContext) -> str:
    st = b.styles
    style = _css(
        *_box(st),
        ("color", resolve_text_color(st)),
        ("font-size", resolve_font_size(st, "16px")),
        ("text-align", resolve_text_align(st, "left")),
        ("margin", "0"),
        ("line-height", "1.6"),
    )
    link_style = _css(("color", st.button_color or "#3b82f6"), ("text-decoration", "underline"))
    label = b.content + (ARROW if st.show_arrow else "")
    return f'<p style="{style}"><a href="{_attr(b.link_url or "#")}" style="{link_style}">{label}</a></p>'


def render_divider_block(b: DividerBlock, ctx: CompileContext) -> str:
    st = b.styles
    thickness = st.divider_thickness if st.divider_thickness and st.divider_thickness > 0 else 1
    line = st.divider_style if st.divider_style in BORDER_STYLES else "solid"
    hr_style = _css(
        ("border", "none"),
        ("border-top", f"{thickness}px {line} {st.text_color or '#e5e7eb'}"),
        ("margin", "0"),
    )
    wrapper = _css(
        ("background-color", resolve_background(st)),
        ("padding", resolve_padding(st, Padding(16, 16, 0)).css()),
    )
    return f'<div style="{wrapper}"><hr style="{hr_style}" /></div>'


def render_spacer_block(b: SpacerBlock, ctx: CompileContext) -> str:
    st = b.styles
    height = css_length(st.height, "24px")
    style = _css(
        ("height", height),
        ("line-height", height),
        ("font-size", "1px"),
        ("background-color", resolve_background(st)),
    )
    return f'<div style="{style}">&nbsp;</div>'


def render_social_block(b: SocialBlock, ctx: CompileContext) -> str:
    enabled = [link for link in b.social_links if link.enabled]
    if not enabled:
        return ""
    st = b.styles
    icons = _social_icons(enabled, st.button_color or "#1a1a1a", st.icon_size or 32)
    wrapper = _css(("text-align", resolve_text_align(st)), *_box(st))
    return f'<div style="{wrapper}">{icons}</div>'


def render_footer_block(b: FooterBlock, ctx: CompileContext) -> str:
    st, cfg = b.styles, b.footer_config
    text_color = st.text_color or "#f5f0e8"

    logo_html = ""
    if cfg.show_logo:
        logo_html = f'<div style="margin-bottom: 16px;">{_logo_html(cfg, ctx)}</div>'

    social_html = ""
    if cfg.show_social_icons:
        enabled = [link for link in b.social_links if link.enabled]
        if enabled:
            icons = _social_icons(enabled, st.button_color or text_color, st.icon_size or 24)
            social_html = f'<div style="margin-bottom: 16px;">{icons}</div>'

    wrapper = _css(
        ("text-align", resolve_text_align(st)),
        ("background-color", resolve_background(st, "#1a1a1a")),
        ("color", text_color),
        ("padding", resolve_padding(st, Padding(32, 32, 24)).css()),
        ("border", resolve_border(st)),
        ("border-radius", st.border_radius or "0 0 12px 12px"),
    )
    copyright_html = f'<p style="margin: 0; font-size: 12px; opacity: 0.8;">{cfg.copyright_text}</p>'
    return f'<div style="{wrapper}">{logo_html}{social_html}{copyright_html}</div>'


def render_header_block(b: HeaderBlock, ctx: CompileContext) -> str:
    st, cfg = b.styles, b.header_config
    text_color = st.text_color or "#f5f0e8"

    # Logo et liens placés indépendamment dans l'une des 3 colonnes
    cells = {pos: [] for pos in ALIGNMENTS}
    if cfg.show_logo:
        pos = cfg.logo_position if cfg.logo_position in ALIGNMENTS else "left"
        cells[pos].append(f'<div style="margin: 4px 0;">{_logo_html(cfg, ctx)}</div>')

    if cfg.show_nav_links:
        enabled = [link for link in b.nav_links if link.enabled]
        if enabled:
            link_style = _css(
                ("color", text_color), ("text-decoration", "none"),
                ("font-size", "14px"), ("font-weight", "500"), ("margin", "0 12px"),
            )
            nav = "".join(
                f'<a href="{_attr(link.url)}" style="{link_style}">{link.label}{ARROW if link.show_arrow else ""}</a>'
                for link in enabled
            )
            pos = cfg.nav_position if cfg.nav_position in ALIGNMENTS else "right"
            cells[pos].append(f'<div style="margin: 4px 0;">{nav}</div>')

    tds = "".join(
        f'<td align="{pos}" valign="middle" width="33%" style="text-align: {pos};">{"".join(parts)}</td>'
        for pos, parts in cells.items()
    )
    wrapper = _css(
        ("background-color", resolve_background(st, "#1a1a1a")),
        ("color", text_color),
        ("padding", resolve_padding(st, Padding(20, 20, 24)).css()),
        ("border", resolve_border(st)),
        ("border-radius", st.border_radius or "12px 12px 0 0"),
    )
    return (
        f'<div style="{wrapper}">'
        f'<table role="presentation" width="100%" cellpadding="0" cellspacing="0" border="0" style="border-collapse: collapse;">'
        f"<tr>{tds}</tr></table></div>"
    )


# ── Signature ───────────────────────────────────────────────────────────────

_SIGNATURE_RADIUS = {"circle": "50%", "rounded": "12px", "square": "0"}


def _initials(name: str) -> str:
    letters = [w[0] for w in name.split() if w][:2]
    return "".join(letters).upper() or "?"


def _signature_image(b: SignatureBlock, ctx: CompileContext) -> str:
    cfg = b.signature_config
    size = max(24, min(240, cfg.image_size or 80))
    radius = _SIGNATURE_RADIUS.get(cfg.image_shape, "50%")
    if cfg.image_url and cfg.image_url.strip():
        style = _css(
            ("width", f"{size}px"), ("height", f"{size}px"), ("border-radius", radius),
            ("object-fit", "cover"), ("display", "block"),
        )
        return (f'<img src="{_attr(ctx.resolve_url(cfg.image_url))}" alt="{_attr(cfg.name)}" '
                f'width="{size}" height="{size}" style="{style}" />')
    style = _css(
        ("width", f"{size}px"), ("height", f"{size}px"), ("border-radius", radius),
        ("background-color", "#e5e7eb"), ("color", "#6b7280"),
        ("font-size", f"{size // 3}px"), ("font-weight", "bold"),
        ("line-height", f"{size}px"), ("text-align", "center"),
    )
    return f'<div style="{style}">{escape(_initials(cfg.name))}</div>'


def _signature_text(b: SignatureBlock) -> str:
    cfg = b.signature_config
    lines = []
    if cfg.name:
        lines.append(f'<div style="font-size: 16px; font-weight: bold;">{cfg.name}</div>')
    if cfg.title:
        lines.append(f'<div style="font-size: 14px; opacity: 0.8;">{cfg.title}</div>')
    if cfg.phone:
        lines.append(f'<div style="font-size: 13px;">{cfg.phone}</div>')
    if cfg.email:
        lines.append(f'<div style="font-size: 13px;"><a href="mailto:{_attr(cfg.email)}" style="color: inherit;">{cfg.email}</a></div>')
    if cfg.website:
        lines.append(f'<div style="font-size: 13px;"><a href="{_attr(cfg.website)}" style="color: inherit;">{cfg.website}</a></div>')
    if b.content:
        lines.append(f'<div style="font-size: 13px; margin-top: 8px;">{b.content}</div>')
    return "".join(lines)


def render_signature_block(b: SignatureBlock, ctx: CompileContext) -> str:
    st, cfg = b.styles, b.signature_config
    image, text = _signature_image(b, ctx), _signature_text(b)
    table_open = '<table role="presentation" cellpadding="0" cellspacing="0" border="0" style="border-collapse: collapse;">'

    if cfg.layout == "stacked":
        align = resolve_text_align(st, "center")
        inner = (
            f'<div style="display: inline-block; margin-bottom: 12px;">{image}</div>'
            f"<div>{text}</div>"
        )
    elif cfg.layout == "horizontal-right":
        align = resolve_text_align(st, "left")
        inner = (
            f'{table_open}<tr><td valign="middle" style="padding-right: 16px;">{text}</td>'
            f'<td valign="middle">{image}</td></tr></table>'
        )
    else:  # horizontal-left
        align = resolve_text_align(st, "left")
        inner = (
            f'{table_open}<tr><td valign="middle" style="padding-right: 16px;">{image}</td>'
            f'<td valign="middle">{text}</td></tr></table>'
        )

    wrapper = _css(
        ("text-align", align),
        *_box(st),
        ("color", resolve_text_color(st)),
    )
    return f'<div style="{wrapper}">{inner}</div>'
