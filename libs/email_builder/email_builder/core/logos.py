"""
Registre des logos de marque + sélection avec fallback.

Chaîne de sélection : logo_id explicite → premier logo de la variante requise
→ premier logo du registre → None (le compilateur rend alors un placeholder).
"""
from typing import Optional, Sequence, Tuple

from .schemas import Logo

BRAND_LOGOS: Tuple[Logo, ...] = (
    Logo(id="drop-dead-main", name="Drop Dead Logo", src="/assets/brand/drop-dead-logo.svg",
         variant="dark", description="Primary wordmark logo"),
    Logo(id="drop-dead-main-light", name="Drop Dead Logo (light)", src="/assets/brand/drop-dead-logo-light.svg",
         variant="light", description="Primary wordmark logo, for dark backgrounds"),
    Logo(id="dd-secondary", name="DD Secondary", src="/assets/brand/dd-secondary-logo.svg",
         variant="dark", description="Secondary icon logo"),
    Logo(id="dd75-icon", name="DD75 Icon", src="/assets/brand/dd75-icon.svg",
         variant="dark", description="Circular icon mark"),
    Logo(id="dd75-logo", name="DD75 Logo", src="/assets/brand/dd75-logo.svg",
         variant="light", description="DD75 wordmark"),
)


def select_logo(logos: Sequence[Logo], logo_id: Optional[str] = None, variant: Optional[str] = None) -> Optional[Logo]:
    if logo_id:
        for logo in logos:
            if logo.id == logo_id:
                return logo
    if variant:
        for logo in logos:
            if logo.variant == variant:
                return logo
    return logos[0] if logos else None


def find_logo(logos: Sequence[Logo], logo_id: str) -> Optional[Logo]:
    return next((logo for logo in logos if logo.id == logo_id), None)
