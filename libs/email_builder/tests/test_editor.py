"""Tests session d'édition — historique, recompilation, contraintes, variables, assets."""
import pytest

from email_builder.blocks import parse_blocks
from email_builder.core import BUILTIN_THEMES, CompileContext
from email_builder.core.defaults import starter_blocks
from email_builder.editor import EmailEditor
from email_builder.errors import BucketMissing, ConstraintViolation, SizeExceeded
from email_builder.renderer import compile_blocks


class FakeStore:
    def __init__(self, url="https://cdn.test/img.png", error=None):
        self.url = url
        self.error = error
        self.calls = []

    def upload(self, data, content_type):
        self.calls.append((data, content_type))
        if self.error:
            raise self.error
        return self.url


@pytest.fixture
def changes():
    return []


@pytest.fixture
def editor(changes):
    blocks = parse_blocks([
        {"id": "A", "type": "text", "content": "A"},
        {"id": "B", "type": "image"},
        {"id": "C", "type": "button", "content": "Go"},
    ])
    return EmailEditor(blocks, on_change=lambda b, h: changes.append((b, h)))


def _ids(editor):
    return [b.id for b in editor.blocks]


# ── Mutations + historique ───────────────────────────────────────────────────

def test_html_compiled_at_start(editor):
    assert editor.html == compile_blocks(editor.blocks)
    assert not editor.can_undo


def test_add_block_commits_and_notifies(editor, changes):
    block = editor.add_block("divider")
    assert _ids(editor)[-1] == block.id
    assert editor.can_undo
    assert len(changes) == 1
    blocks, html = changes[0]
    assert blocks == editor.blocks
    assert html == editor.html == compile_blocks(blocks)


def test_add_header_twice_rejected_without_history(editor, changes):
    editor.add_block("header")
    with pytest.raises(ConstraintViolation):
        editor.add_block("header")
    assert [b.type for b in editor.blocks].count("header") == 1
    assert len(changes) == 1
    editor.undo()
    assert not editor.can_undo


def test_new_blocks_take_session_theme_colors():
    ocean = next(t for t in BUILTIN_THEMES if t.id == "ocean-breeze")
    ed = EmailEditor(theme=ocean)
    btn = ed.add_block("button")
    assert btn.styles.button_color == "#3b82f6"


def test_update_block(editor):
    editor.update_block("A", content="Nouveau")
    assert editor.get_block("A").content == "Nouveau"
    assert "Nouveau" in editor.html
    editor.undo()
    assert editor.get_block("A").content == "A"


def test_update_type_or_id_rejected(editor):
    with pytest.raises(ConstraintViolation):
        editor.update_block("A", type="heading")
    with pytest.raises(ConstraintViolation):
        editor.update_block("A", id="Z")
    assert not editor.can_undo


def test_update_styles_merges(editor):
    editor.update_styles("A", text_color="#111111")
    editor.update_styles("A", font_size="20px")
    st = editor.get_block("A").styles
    assert (st.text_color, st.font_size) == ("#111111", "20px")


def test_undo_after_delete_restores_same_id(editor):
    editor.delete_block("B")
    assert "B" not in _ids(editor)
    editor.undo()
    assert _ids(editor) == ["A", "B", "C"]


def test_delete_unknown_rejected(editor):
    with pytest.raises(ConstraintViolation):
        editor.delete_block("Z")


def test_redo_after_undo(editor, changes):
    editor.delete_block("A")
    editor.undo()
    editor.redo()
    assert _ids(editor) == ["B", "C"]
    assert len(changes) == 3
    assert changes[-1][1] == editor.html


def test_undo_on_fresh_session_is_noop(editor, changes):
    assert editor.undo() is None
    assert changes == []


# ── Déplacements ─────────────────────────────────────────────────────────────

def test_move_block(editor):
    assert editor.move_block("C", "A") is True
    assert _ids(editor) == ["C", "A", "B"]
    editor.undo()
    assert _ids(editor) == ["A", "B", "C"]


def test_noop_moves_create_no_history(editor, changes):
    assert editor.move_block("A", "A") is False
    assert editor.move_block_up("A") is False
    assert editor.move_block_down("C") is False
    assert not editor.can_undo
    assert changes == []


def test_move_up_down(editor):
    editor.move_block_down("A")
    editor.move_block_up("C")
    assert _ids(editor) == ["B", "C", "A"]


def test_duplicate_selects_clone(editor):
    clone = editor.duplicate_block("A")
    assert _ids(editor)[1] == clone.id
    assert editor.selected_block_id == clone.id


# ── Thème ────────────────────────────────────────────────────────────────────

def test_apply_theme_is_undoable(editor):
    rose = next(t for t in BUILTIN_THEMES if t.id == "rose-blush")
    before = editor.blocks
    editor.apply_theme(rose)
    assert editor.get_block("C").styles.button_color == "#db2777"
    assert editor.theme is rose
    editor.undo()
    assert editor.blocks == before


# ── Sélection / variables ────────────────────────────────────────────────────

def test_insert_variable_without_selection(editor):
    with pytest.raises(ConstraintViolation):
        editor.insert_variable("first_name")


def test_insert_variable_in_text(editor):
    editor.select("A")
    editor.insert_variable("first_name")
    assert editor.get_block("A").content == "A{{first_name}}"


def test_insert_variable_in_button_sets_link(editor):
    editor.select("C")
    editor.insert_variable("dashboard_url")
    assert editor.get_block("C").link_url == "{{dashboard_url}}"
    assert editor.get_block("C").content == "Go"


def test_selection_cleared_when_block_deleted(editor):
    editor.select("A")
    editor.delete_block("A")
    assert editor.selected_block_id is None


def test_select_unknown_rejected(editor):
    with pytest.raises(ConstraintViolation):
        editor.select("Z")


# ── Assets ───────────────────────────────────────────────────────────────────

def test_upload_image_sets_url(editor):
    store = FakeStore()
    url = editor.upload_image("B", store, b"png", "image/png")
    assert url == "https://cdn.test/img.png"
    assert editor.get_block("B").image_url == url
    assert store.calls == [(b"png", "image/png")]


@pytest.mark.parametrize("error", [BucketMissing("email-assets"), SizeExceeded(10 * 1_048_576, 5 * 1_048_576)])
def test_upload_failure_keeps_block(editor, error):
    editor.update_block("B", image_url="https://old/img.png")
    with pytest.raises(type(error)) as exc:
        editor.upload_image("B", FakeStore(error=error), b"x", "image/png")
    assert editor.get_block("B").image_url == "https://old/img.png"
    assert exc.value.message


def test_bucket_and_size_messages_are_distinct():
    assert BucketMissing("b").message != SizeExceeded(2, 1).message


def test_upload_to_non_image_block_rejected(editor):
    store = FakeStore()
    with pytest.raises(ConstraintViolation):
        editor.upload_image("A", store, b"x", "image/png")
    assert store.calls == []


def test_late_upload_on_deleted_block_is_discarded(editor, changes):
    editor.delete_block("B")
    n = len(changes)
    assert editor.attach_asset("B", "https://cdn.test/late.png") is False
    assert len(changes) == n
    assert "late.png" not in editor.html


def test_attach_asset_on_signature():
    ed = EmailEditor(starter_blocks())
    sig = ed.add_block("signature")
    assert ed.attach_asset(sig.id, "/uploads/me.png") is True
    assert ed.get_block(sig.id).signature_config.image_url == "/uploads/me.png"


def test_add_logo_block():
    ed = EmailEditor(context=CompileContext(base_url="https://app.io"))
    block = ed.add_logo_block("dd75-icon")
    assert block.image_url == "/assets/brand/dd75-icon.svg"
    assert 'src="https://app.io/assets/brand/dd75-icon.svg"' in ed.html
    with pytest.raises(ConstraintViolation):
        ed.add_logo_block("inconnu")


def test_editor_migrates_legacy_padding():
    ed = EmailEditor(parse_blocks([{"id": "A", "type": "text", "styles": {"padding": "8px 12px"}}]))
    st = ed.get_block("A").styles
    assert st.padding is None
    assert (st.padding_top, st.padding_horizontal) == (8, 12)


# ── Ids en double / mises à jour sans effet ──────────────────────────────────

def test_duplicate_ids_are_made_unique_on_open():
    blocks = parse_blocks([
        {"id": "X", "type": "text", "content": "un"},
        {"id": "X", "type": "text", "content": "deux"},
    ])
    editor = EmailEditor(blocks)
    editor.delete_block("X")
    assert [b.content for b in editor.blocks] == ["deux"]


def test_update_without_change_creates_no_history(editor, changes):
    editor.update_block("A", content="A")
    editor.update_styles("A")
    assert not editor.can_undo
    assert changes == []


def test_update_unknown_field_rejected(editor):
    with pytest.raises(ConstraintViolation):
        editor.update_block("A", link_url="/x")
    with pytest.raises(ConstraintViolation):
        editor.update_styles("A", colour="#000")
    assert not editor.can_undo
