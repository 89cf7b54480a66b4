"""Bloc Footer : logo, icônes sociales, copyright."""
from typing import Literal, Optional
from pydantic import Field
from .base import BaseBlock, BlockData, LenientItems
from .social import SocialLink


class FooterConfig(BlockData):
    show_logo: bool = True
    logo_id: Optional[str] = None
    logo_variant: str = "light"
    logo_size: str = "medium"
    show_social_icons: bool = True
    copyright_text: str = "© 2025 Drop Dead Gorgeous. All rights reserved."


class FooterBlock(BaseBlock):
    type: Literal["footer"] = "footer"
    social_links: LenientItems[SocialLink] = Field(default_factory=list)
    footer_config: FooterConfig = Field(default_factory=FooterConfig)
