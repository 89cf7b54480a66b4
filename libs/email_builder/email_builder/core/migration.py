"""
Migration au chargement — normalise chaque bloc vers la représentation courante.

Exécutée une seule fois à l'ouverture d'un document (cf. persistence.load_document) :
la chaîne `padding` legacy est convertie en padding_top / padding_bottom /
padding_horizontal puis supprimée. Si des champs discrets existent déjà, la chaîne
legacy est simplement abandonnée : les deux représentations ne pilotent jamais
le rendu en même temps. Les ids en double (documents anciens) sont renumérotés.
"""
import logging
from typing import Iterable, Tuple

from ..blocks import Block, new_block_id
from .styles import has_discrete_padding, parse_legacy_padding

log = logging.getLogger(__name__)


def migrate_block(block: Block) -> Block:
    styles = block.styles
    if styles.padding is None:
        return block

    if has_discrete_padding(styles):
        updates = {"padding": None}
    elif styles.padding.strip():
        p = parse_legacy_padding(styles.padding)
        updates = {
            "padding": None,
            "padding_top": p.top,
            "padding_bottom": p.bottom,
            "padding_horizontal": p.horizontal,
        }
    else:
        updates = {"padding": None}

    log.debug("Bloc %s (%s) : padding legacy %r migré", block.id, block.type, styles.padding)
    return block.model_copy(update={"styles": styles.model_copy(update=updates)})


def migrate_blocks(blocks: Iterable[Block]) -> Tuple[Block, ...]:
    """Migre chaque bloc ; un id déjà vu plus haut dans le document reçoit un nouvel id."""
    seen = set()
    migrated = []
    for b in blocks:
        b = migrate_block(b)
        if b.id in seen:
            fresh = new_block_id()
            log.warning("Bloc %s (%s) : id en double, renommé %s", b.id, b.type, fresh)
            b = b.model_copy(update={"id": fresh})
        seen.add(b.id)
        migrated.append(b)
    return tuple(migrated)
