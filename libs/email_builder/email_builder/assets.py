"""
Contrat du store d'assets + champ image ciblé par un upload.

Le store est un collaborateur externe : il reçoit des octets et retourne une URL
publique, ou lève BucketMissing / SizeExceeded / AssetUploadError.
"""
from typing import Protocol

from .blocks import Block, ImageBlock, SignatureBlock
from .errors import ConstraintViolation


class AssetStore(Protocol):
    def upload(self, data: bytes, content_type: str) -> str: ...


def image_field(block: Block) -> str:
    """Nom du champ qui reçoit l'URL uploadée pour ce bloc."""
    if isinstance(block, ImageBlock):
        return "image_url"
    if isinstance(block, SignatureBlock):
        return "signature_config"
    raise ConstraintViolation(f"Le bloc '{block.type}' n'accepte pas d'image")
