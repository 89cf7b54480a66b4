"""Bloc Heading : titre de section."""
from typing import Literal
from .base import BaseBlock


class HeadingBlock(BaseBlock):
    type: Literal["heading"] = "heading"
