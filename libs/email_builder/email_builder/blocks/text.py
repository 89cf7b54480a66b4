"""Bloc Text : paragraphe libre (markup inline autorisé)."""
from typing import Literal
from .base import BaseBlock


class TextBlock(BaseBlock):
    type: Literal["text"] = "text"
