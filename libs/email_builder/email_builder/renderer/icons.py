"""Icônes SVG inline des réseaux sociaux (trait, couleur paramétrable)."""

_PATHS = {
    "instagram": '<rect width="20" height="20" x="2" y="2" rx="5" ry="5"/>'
                 '<path d="M16 11.37A4 4 0 1 1 12.63 8 4 4 0 0 1 16 11.37z"/>'
                 '<line x1="17.5" x2="17.51" y1="6.5" y2="6.5"/>',
    "tiktok":    '<path d="M9 12a4 4 0 1 0 4 4V4a5 5 0 0 0 5 5"/>',
    "facebook":  '<path d="M18 2h-3a5 5 0 0 0-5 5v3H7v4h3v8h4v-8h3l1-4h-4V7a1 1 0 0 1 1-1h3z"/>',
    "email":     '<rect width="20" height="16" x="2" y="4" rx="2"/>'
                 '<path d="m22 7-8.97 5.7a1.94 1.94 0 0 1-2.06 0L2 7"/>',
}

# Plateforme inconnue → icône "lien"
_FALLBACK = ('<path d="M10 13a5 5 0 0 0 7.54.54l3-3a5 5 0 0 0-7.07-7.07l-1.72 1.71"/>'
             '<path d="M14 11a5 5 0 0 0-7.54-.54l-3 3a5 5 0 0 0 7.07 7.07l1.71-1.71"/>')


def social_icon_svg(platform: str, color: str, size: int = 32) -> str:
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" viewBox="0 0 24 24" '
        f'fill="none" stroke="{color}" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">'
        f'{_PATHS.get(platform, _FALLBACK)}</svg>'
    )


def social_href(platform: str, url: str) -> str:
    if platform == "email" and url and not url.startswith("mailto:"):
        return f"mailto:{url}"
    return url
