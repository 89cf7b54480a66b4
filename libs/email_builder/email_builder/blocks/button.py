"""Bloc Button : call-to-action (label = content)."""
from typing import Literal, Optional
from .base import BaseBlock


class ButtonBlock(BaseBlock):
    type: Literal["button"] = "button"
    link_url: Optional[str] = None
