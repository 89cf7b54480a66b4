"""
Blocs — exports publics + BlockUnion discriminé par `type`.
"""
import logging
from typing import Annotated, Any, Iterable, List, Tuple, Union

from pydantic import Field, TypeAdapter, ValidationError

from .base import BaseBlock, BlockData, BlockStyles, EmailModel, new_block_id
from .heading import HeadingBlock
from .text import TextBlock
from .image import ImageBlock
from .button import ButtonBlock
from .link import LinkBlock
from .divider import DividerBlock
from .spacer import SpacerBlock
from .social import SocialBlock, SocialLink
from .header import HeaderBlock, HeaderConfig, NavLink
from .footer import FooterBlock, FooterConfig
from .signature import SignatureBlock, SignatureConfig

log = logging.getLogger(__name__)

Block = Union[
    HeadingBlock,
    TextBlock,
    ImageBlock,
    ButtonBlock,
    LinkBlock,
    DividerBlock,
    SpacerBlock,
    SocialBlock,
    FooterBlock,
    HeaderBlock,
    SignatureBlock,
]

# Union discriminée par type
BlockUnion = Annotated[Block, Field(discriminator="type")]

BLOCK_REGISTRY: dict = {
    "heading":   HeadingBlock,
    "text":      TextBlock,
    "image":     ImageBlock,
    "button":    ButtonBlock,
    "link":      LinkBlock,
    "divider":   DividerBlock,
    "spacer":    SpacerBlock,
    "social":    SocialBlock,
    "footer":    FooterBlock,
    "header":    HeaderBlock,
    "signature": SignatureBlock,
}

BLOCK_TYPES: Tuple[str, ...] = tuple(BLOCK_REGISTRY)
SINGLETON_TYPES = frozenset({"header", "footer"})

_BLOCK_ADAPTER = TypeAdapter(BlockUnion)


def parse_block(data: Any) -> Block:
    """dict (clés camelCase ou snake_case) → bloc typé. Lève ValidationError."""
    return _BLOCK_ADAPTER.validate_python(data)


def parse_blocks(items: Iterable[Any]) -> Tuple[Block, ...]:
    """
    Liste JSON → tuple de blocs.
    Un élément invalide (type inconnu, structure cassée) est ignoré avec un warning
    plutôt que de rendre tout le document illisible.
    """
    blocks: List[Block] = []
    for i, item in enumerate(items):
        try:
            blocks.append(parse_block(item))
        except ValidationError as e:
            kind = item.get("type", "?") if isinstance(item, dict) else "?"
            log.warning("Bloc #%d (%s) ignoré : %d erreur(s) de validation", i, kind, e.error_count())
    return tuple(blocks)


def dump_blocks(blocks: Iterable[BaseBlock]) -> List[dict]:
    return [b.to_json_dict() for b in blocks]


__all__ = [
    "BaseBlock", "BlockData", "BlockStyles", "EmailModel", "new_block_id",
    "HeadingBlock", "TextBlock", "ImageBlock", "ButtonBlock", "LinkBlock",
    "DividerBlock", "SpacerBlock",
    "SocialBlock", "SocialLink",
    "HeaderBlock", "HeaderConfig", "NavLink",
    "FooterBlock", "FooterConfig",
    "SignatureBlock", "SignatureConfig",
    "Block", "BlockUnion", "BLOCK_REGISTRY", "BLOCK_TYPES", "SINGLETON_TYPES",
    "parse_block", "parse_blocks", "dump_blocks",
]
