"""
Session d'édition — relie historique, contraintes et compilateur.

Toute mutation structurelle (ajout, mise à jour, suppression, déplacement,
duplication, thème) passe par `_commit` → History.commit. Après chaque commit,
undo ou redo réussi, le markup est recompilé et `on_change(blocks, html)` est
appelé : le markup est un cache dérivé, jamais une source de vérité.

Les rejets (ConstraintViolation, échec d'upload) sont levés avant toute mutation
et ne créent aucune entrée d'historique.
"""
import logging
from typing import Callable, Iterable, Optional, Tuple

from . import ordering
from .assets import AssetStore, image_field
from .blocks import Block, BlockStyles, ButtonBlock, LinkBlock
from .core.defaults import new_block, new_logo_block
from .core.logos import find_logo
from .core.migration import migrate_blocks
from .core.schemas import CompileContext, Theme
from .core.themes import DEFAULT_THEME, apply_theme
from .errors import ConstraintViolation
from .history import History
from .renderer.html import compile_blocks

log = logging.getLogger(__name__)

ChangeCallback = Callable[[Tuple[Block, ...], str], None]

_IMMUTABLE_FIELDS = ("id", "type")


def _check_fields(model, changes: dict) -> None:
    unknown = sorted(set(changes) - set(model.model_fields))
    if unknown:
        raise ConstraintViolation(f"Champ(s) inconnu(s) pour {model.__name__} : {', '.join(unknown)}")


class EmailEditor:
    """
    Usage:
        >>> editor = EmailEditor(blocks, context=CompileContext(base_url="https://app.example.com"))
        >>> header = editor.add_block("header")
        >>> editor.update_styles(header.id, background_color="#000000")
        >>> editor.undo()
        >>> editor.html
    """

    def __init__(
        self,
        blocks: Optional[Iterable[Block]] = None,
        context: Optional[CompileContext] = None,
        on_change: Optional[ChangeCallback] = None,
        theme: Optional[Theme] = None,
        max_history: Optional[int] = None,
    ):
        self.context = context or CompileContext()
        self.theme = theme or DEFAULT_THEME
        self.on_change = on_change
        self.selected_block_id: Optional[str] = None
        initial = migrate_blocks(blocks or ())
        self._history: History[Tuple[Block, ...]] = History(initial, max_depth=max_history)
        self._html = compile_blocks(initial, self.context)

    # ── État ────────────────────────────────────────────────────────────────

    @property
    def blocks(self) -> Tuple[Block, ...]:
        return self._history.present

    @property
    def html(self) -> str:
        return self._html

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def get_block(self, block_id: str) -> Block:
        block = ordering.find_block(self.blocks, block_id)
        if block is None:
            raise ConstraintViolation(f"Bloc introuvable : {block_id}")
        return block

    def _publish(self, blocks: Tuple[Block, ...]) -> None:
        self._html = compile_blocks(blocks, self.context)
        if self.selected_block_id and ordering.find_block(blocks, self.selected_block_id) is None:
            self.selected_block_id = None
        if self.on_change:
            self.on_change(blocks, self._html)

    def _commit(self, blocks: Tuple[Block, ...]) -> Tuple[Block, ...]:
        self._history.commit(blocks)
        self._publish(blocks)
        return blocks

    # ── Undo / redo ─────────────────────────────────────────────────────────

    def undo(self) -> Optional[Tuple[Block, ...]]:
        blocks = self._history.undo()
        if blocks is not None:
            self._publish(blocks)
        return blocks

    def redo(self) -> Optional[Tuple[Block, ...]]:
        blocks = self._history.redo()
        if blocks is not None:
            self._publish(blocks)
        return blocks

    # ── Création ────────────────────────────────────────────────────────────

    def add_block(self, block_type: str, **overrides) -> Block:
        """Crée un bloc coloré selon le thème de session et l'insère à sa place."""
        ordering.ensure_can_add(self.blocks, block_type)
        block = new_block(block_type, self.theme, **overrides)
        self._commit(ordering.insert_block(self.blocks, block))
        self.selected_block_id = block.id
        return block

    def add_logo_block(self, logo_id: str) -> Block:
        logo = find_logo(self.context.logos, logo_id)
        if logo is None:
            raise ConstraintViolation(f"Logo introuvable : {logo_id}")
        block = new_logo_block(logo, self.theme)
        self._commit(ordering.insert_block(self.blocks, block))
        self.selected_block_id = block.id
        return block

    def duplicate_block(self, block_id: str) -> Block:
        blocks, clone = ordering.duplicate_block(self.blocks, block_id)
        self._commit(blocks)
        self.selected_block_id = clone.id
        return clone

    # ── Modification ────────────────────────────────────────────────────────

    def update_block(self, block_id: str, **changes) -> Block:
        """
        Remplace des champs du bloc (noms d'attributs snake_case).
        Le bloc est revalidé ; id et type sont immuables. Sans changement effectif,
        aucune entrée d'historique n'est créée.
        """
        block = self.get_block(block_id)
        for field in _IMMUTABLE_FIELDS:
            if field in changes and changes[field] != getattr(block, field):
                raise ConstraintViolation(
                    f"Le champ '{field}' d'un bloc est immuable — supprimer puis recréer le bloc"
                )
        _check_fields(type(block), changes)
        data = block.model_dump()
        data.update(changes)
        updated = type(block).model_validate(data)
        if updated == block:
            return block
        self._replace(updated)
        return updated

    def update_styles(self, block_id: str, **changes) -> Block:
        block = self.get_block(block_id)
        _check_fields(BlockStyles, changes)
        styles = block.styles.model_dump()
        styles.update(changes)
        return self.update_block(block_id, styles=styles)

    def _replace(self, updated: Block) -> None:
        self._commit(tuple(updated if b.id == updated.id else b for b in self.blocks))

    def delete_block(self, block_id: str) -> None:
        self.get_block(block_id)
        self._commit(ordering.remove_block(self.blocks, block_id))

    def apply_theme(self, theme: Theme) -> None:
        """Recolore les blocs existants ; le thème devient celui des prochains blocs."""
        self.theme = theme
        self._commit(apply_theme(self.blocks, theme))
        log.info("Thème '%s' appliqué à %d bloc(s)", theme.name, len(self.blocks))

    # ── Déplacements ────────────────────────────────────────────────────────

    def move_block(self, source_id: str, target_id: str) -> bool:
        """Glisser-déposer : source réinsérée avant la cible. False si no-op."""
        return self._commit_if_changed(ordering.move_before(self.blocks, source_id, target_id))

    def move_block_up(self, block_id: str) -> bool:
        return self._commit_if_changed(ordering.move_up(self.blocks, block_id))

    def move_block_down(self, block_id: str) -> bool:
        return self._commit_if_changed(ordering.move_down(self.blocks, block_id))

    def _commit_if_changed(self, blocks: Tuple[Block, ...]) -> bool:
        if [b.id for b in blocks] == [b.id for b in self.blocks]:
            return False
        self._commit(blocks)
        return True

    # ── Sélection / variables ───────────────────────────────────────────────

    def select(self, block_id: Optional[str]) -> None:
        if block_id is not None:
            self.get_block(block_id)
        self.selected_block_id = block_id

    def insert_variable(self, variable: str) -> Block:
        """
        Insère {{variable}} dans le bloc sélectionné.
        Bouton / lien : remplace l'URL ; autres blocs : ajouté au contenu.
        """
        if not self.selected_block_id:
            raise ConstraintViolation("Sélectionnez d'abord un bloc pour insérer une variable")
        block = self.get_block(self.selected_block_id)
        token = f"{{{{{variable}}}}}"
        if isinstance(block, (ButtonBlock, LinkBlock)):
            return self.update_block(block.id, link_url=token)
        return self.update_block(block.id, content=block.content + token)

    # ── Assets ──────────────────────────────────────────────────────────────

    def attach_asset(self, block_id: str, url: str) -> bool:
        """
        Applique l'URL d'un upload terminé. Si le bloc a été supprimé entre-temps,
        le résultat est abandonné (False) sans mutation.
        """
        block = ordering.find_block(self.blocks, block_id)
        if block is None:
            log.info("Upload terminé pour un bloc supprimé (%s) — résultat ignoré", block_id)
            return False
        field = image_field(block)
        if field == "signature_config":
            cfg = block.signature_config.model_copy(update={"image_url": url})
            self._replace(block.model_copy(update={"signature_config": cfg}))
        else:
            self._replace(block.model_copy(update={field: url}))
        return True

    def upload_image(self, block_id: str, store: AssetStore, data: bytes, content_type: str) -> str:
        """
        Upload synchrone puis rattachement. En cas d'échec (BucketMissing,
        SizeExceeded, AssetUploadError) l'exception remonte et le bloc est inchangé.
        """
        image_field(self.get_block(block_id))
        url = store.upload(data, content_type)
        self.attach_asset(block_id, url)
        return url
