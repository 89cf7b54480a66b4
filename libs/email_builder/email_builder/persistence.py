"""
Forme persistée d'un document : {htmlBody, blocksJson}.

blocksJson (non vide, valide) fait autorité : le markup stocké n'est jamais
re-parsé, il est recompilé depuis les blocs migrés. Un blocksJson absent, vide,
`[]` ou illisible ouvre le document de départ (header + titre + texte + bouton + footer).
"""
import json
import logging
from typing import Any, Iterable, NamedTuple, Optional, Tuple

from .blocks import Block, dump_blocks, parse_blocks
from .blocks.base import EmailModel
from .core.defaults import starter_blocks
from .core.migration import migrate_blocks
from .core.schemas import CompileContext, Theme
from .renderer.html import compile_blocks

log = logging.getLogger(__name__)


class PersistedDocument(EmailModel):
    html_body: str = ""
    blocks_json: Any = None     # liste JSON ou sa forme texte


class Document(NamedTuple):
    blocks: Tuple[Block, ...]
    html: str


def _decode(raw: Any) -> Optional[list]:
    if raw is None:
        return None
    if isinstance(raw, (bytes, str)):
        if not raw.strip():
            return None
        try:
            raw = json.loads(raw)
        except ValueError:
            log.warning("blocksJson illisible — document de départ utilisé")
            return None
    if not isinstance(raw, list):
        log.warning("blocksJson n'est pas une liste (%s) — document de départ utilisé", type(raw).__name__)
        return None
    return raw


def load_document(
    persisted: PersistedDocument,
    context: Optional[CompileContext] = None,
    theme: Optional[Theme] = None,
) -> Document:
    items = _decode(persisted.blocks_json)
    blocks = migrate_blocks(parse_blocks(items)) if items else ()
    if not blocks:
        if items:
            log.warning("Aucun bloc valide dans blocksJson — document de départ utilisé")
        blocks = starter_blocks(theme)
    return Document(blocks=blocks, html=compile_blocks(blocks, context))


def dump_document(blocks: Iterable[Block], context: Optional[CompileContext] = None) -> PersistedDocument:
    """Sérialise les deux représentations ; le markup est toujours recompilé."""
    blocks = tuple(blocks)
    return PersistedDocument(html_body=compile_blocks(blocks, context), blocks_json=dump_blocks(blocks))
