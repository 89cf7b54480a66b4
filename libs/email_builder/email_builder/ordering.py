"""
Réordonnancement et contraintes de placement — fonctions pures sur des tuples.

Aucune fonction ne modifie la séquence reçue : chacune retourne un nouveau tuple
(ou le même tuple quand l'opération est un no-op).

Placement à la création :
  - header → toujours en index 0
  - footer → toujours en fin
  - autres → juste avant le footer s'il existe, sinon en fin
Singletons : au plus un header et un footer par document.
"""
from typing import Optional, Sequence, Tuple

from .blocks import Block, SINGLETON_TYPES, new_block_id
from .errors import ConstraintViolation

_SINGLETON_LABELS = {"header": "un header", "footer": "un footer"}


def index_of(blocks: Sequence[Block], block_id: str) -> int:
    """Index du bloc ou -1."""
    return next((i for i, b in enumerate(blocks) if b.id == block_id), -1)


def find_block(blocks: Sequence[Block], block_id: str) -> Optional[Block]:
    i = index_of(blocks, block_id)
    return blocks[i] if i >= 0 else None


# ── Déplacements ────────────────────────────────────────────────────────────

def move_before(blocks: Sequence[Block], source_id: str, target_id: str) -> Tuple[Block, ...]:
    """
    Retire la source puis la réinsère juste avant la cible.
    [A,B,C,D], C avant A → [C,A,B,D]. Source = cible ou id inconnu → no-op.
    """
    blocks = tuple(blocks)
    if source_id == target_id:
        return blocks
    src = index_of(blocks, source_id)
    if src < 0 or index_of(blocks, target_id) < 0:
        return blocks
    source = blocks[src]
    rest = blocks[:src] + blocks[src + 1:]
    dst = index_of(rest, target_id)
    return rest[:dst] + (source,) + rest[dst:]


def _swap(blocks: Tuple[Block, ...], i: int, j: int) -> Tuple[Block, ...]:
    items = list(blocks)
    items[i], items[j] = items[j], items[i]
    return tuple(items)


def move_up(blocks: Sequence[Block], block_id: str) -> Tuple[Block, ...]:
    blocks = tuple(blocks)
    i = index_of(blocks, block_id)
    if i <= 0:
        return blocks
    return _swap(blocks, i, i - 1)


def move_down(blocks: Sequence[Block], block_id: str) -> Tuple[Block, ...]:
    blocks = tuple(blocks)
    i = index_of(blocks, block_id)
    if i < 0 or i == len(blocks) - 1:
        return blocks
    return _swap(blocks, i, i + 1)


# ── Insertion / contraintes ─────────────────────────────────────────────────

def ensure_can_add(blocks: Sequence[Block], block_type: str) -> None:
    """Lève ConstraintViolation si le type singleton existe déjà."""
    if block_type in SINGLETON_TYPES and any(b.type == block_type for b in blocks):
        raise ConstraintViolation(
            f"Le document contient déjà {_SINGLETON_LABELS[block_type]} — un seul autorisé"
        )


def insertion_index(blocks: Sequence[Block], block_type: str) -> int:
    if block_type == "header":
        return 0
    if block_type == "footer":
        return len(blocks)
    footer = next((i for i, b in enumerate(blocks) if b.type == "footer"), -1)
    return footer if footer >= 0 else len(blocks)


def insert_block(blocks: Sequence[Block], block: Block) -> Tuple[Block, ...]:
    """Insère selon les règles de placement (contrainte singleton vérifiée avant)."""
    blocks = tuple(blocks)
    ensure_can_add(blocks, block.type)
    if index_of(blocks, block.id) >= 0:
        raise ConstraintViolation(f"Identifiant de bloc déjà utilisé : {block.id}")
    i = insertion_index(blocks, block.type)
    return blocks[:i] + (block,) + blocks[i:]


def remove_block(blocks: Sequence[Block], block_id: str) -> Tuple[Block, ...]:
    return tuple(b for b in blocks if b.id != block_id)


def clone_block(block: Block) -> Block:
    """Copie profonde indépendante avec un nouvel id."""
    return block.model_copy(update={"id": new_block_id()}, deep=True)


def duplicate_block(blocks: Sequence[Block], block_id: str) -> Tuple[Tuple[Block, ...], Block]:
    """Insère le clone juste après l'original. Retourne (séquence, clone)."""
    blocks = tuple(blocks)
    i = index_of(blocks, block_id)
    if i < 0:
        raise ConstraintViolation(f"Bloc introuvable : {block_id}")
    original = blocks[i]
    ensure_can_add(blocks, original.type)
    clone = clone_block(original)
    return blocks[:i + 1] + (clone,) + blocks[i + 1:], clone


def check_singletons(blocks: Sequence[Block]) -> None:
    """Validation d'une séquence complète (sauvegarde) : au plus un header et un footer."""
    for block_type in SINGLETON_TYPES:
        if sum(1 for b in blocks if b.type == block_type) > 1:
            raise ConstraintViolation(
                f"Le document contient plusieurs blocs {block_type} — un seul autorisé"
            )


def check_unique_ids(blocks: Sequence[Block]) -> None:
    """Validation d'une séquence complète (sauvegarde) : chaque id n'apparaît qu'une fois."""
    seen = set()
    for b in blocks:
        if b.id in seen:
            raise ConstraintViolation(f"Identifiant de bloc en double : {b.id}")
        seen.add(b.id)
