"""Bloc Link : lien texte souligné."""
from typing import Literal, Optional
from .base import BaseBlock


class LinkBlock(BaseBlock):
    type: Literal["link"] = "link"
    link_url: Optional[str] = None
