"""Bloc Header : logo + liens de navigation, positionnables indépendamment."""
from typing import Literal, Optional
from pydantic import Field
from .base import BaseBlock, BlockData, LenientItems


class NavLink(BlockData):
    label: str = ""
    url: str = ""
    enabled: bool = True
    show_arrow: bool = False


class HeaderConfig(BlockData):
    show_logo: bool = True
    logo_id: Optional[str] = None
    logo_variant: str = "light"      # light | dark
    logo_size: str = "medium"        # xs | small | medium | large | xl
    show_nav_links: bool = True
    logo_position: str = "left"      # left | center | right
    nav_position: str = "right"


class HeaderBlock(BaseBlock):
    type: Literal["header"] = "header"
    nav_links: LenientItems[NavLink] = Field(default_factory=list)
    header_config: HeaderConfig = Field(default_factory=HeaderConfig)
