"""Bloc Divider : séparateur horizontal."""
from typing import Literal
from .base import BaseBlock


class DividerBlock(BaseBlock):
    type: Literal["divider"] = "divider"
