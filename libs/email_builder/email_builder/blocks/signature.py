"""Bloc Signature : photo + coordonnées, trois mises en page."""
from typing import Literal, Optional
from pydantic import Field
from .base import BaseBlock, BlockData, LenientInt


class SignatureConfig(BlockData):
    name: str = ""
    title: str = ""
    phone: str = ""
    email: str = ""
    website: str = ""
    image_url: Optional[str] = None
    image_shape: str = "circle"           # circle | square | rounded
    image_size: LenientInt = 80
    layout: str = "horizontal-left"       # stacked | horizontal-left | horizontal-right


class SignatureBlock(BaseBlock):
    type: Literal["signature"] = "signature"
    signature_config: SignatureConfig = Field(default_factory=SignatureConfig)
