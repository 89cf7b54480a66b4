"""Bloc Spacer : espace vertical vide."""
from typing import Literal
from .base import BaseBlock


class SpacerBlock(BaseBlock):
    type: Literal["spacer"] = "spacer"
