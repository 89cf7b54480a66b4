"""Bloc Social : rangée d'icônes réseaux sociaux."""
from typing import Literal
from pydantic import Field
from .base import BaseBlock, BlockData, LenientItems


class SocialLink(BlockData):
    platform: str = "instagram"      # instagram | tiktok | facebook | email
    url: str = ""
    enabled: bool = True


class SocialBlock(BaseBlock):
    type: Literal["social"] = "social"
    social_links: LenientItems[SocialLink] = Field(default_factory=list)
