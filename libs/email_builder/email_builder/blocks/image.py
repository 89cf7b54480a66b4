"""Bloc Image : image seule, lien optionnel."""
from typing import Literal, Optional
from .base import BaseBlock


class ImageBlock(BaseBlock):
    type: Literal["image"] = "image"
    image_url: Optional[str] = None
    link_url: Optional[str] = None
