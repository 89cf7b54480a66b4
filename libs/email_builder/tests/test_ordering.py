"""Tests réordonnancement + contraintes singleton (fonctions pures)."""
import pytest

from email_builder.blocks import parse_blocks
from email_builder.core.defaults import new_block
from email_builder.errors import ConstraintViolation
from email_builder.ordering import (
    check_unique_ids,
    duplicate_block,
    ensure_can_add,
    insert_block,
    move_before,
    move_down,
    move_up,
    remove_block,
)


def _seq(*ids, types=None):
    types = types or {}
    return parse_blocks([{"id": i, "type": types.get(i, "text"), "content": i} for i in ids])


def _ids(blocks):
    return [b.id for b in blocks]


# ── Déplacements ─────────────────────────────────────────────────────────────

def test_move_c_before_a():
    seq = _seq("A", "B", "C", "D")
    assert _ids(move_before(seq, "C", "A")) == ["C", "A", "B", "D"]


def test_move_forward_before_target():
    seq = _seq("A", "B", "C", "D")
    assert _ids(move_before(seq, "A", "D")) == ["B", "C", "A", "D"]


def test_move_onto_itself_is_noop():
    seq = _seq("A", "B")
    assert move_before(seq, "A", "A") == seq


def test_move_unknown_id_is_noop():
    seq = _seq("A", "B")
    assert move_before(seq, "Z", "A") == seq


def test_move_does_not_mutate_input():
    seq = _seq("A", "B", "C")
    move_before(seq, "C", "A")
    assert _ids(seq) == ["A", "B", "C"]


def test_move_up_down_boundaries():
    seq = _seq("A", "B", "C")
    assert _ids(move_up(seq, "B")) == ["B", "A", "C"]
    assert _ids(move_down(seq, "B")) == ["A", "C", "B"]
    assert move_up(seq, "A") == seq
    assert move_down(seq, "C") == seq


# ── Insertion ────────────────────────────────────────────────────────────────

def test_header_inserted_first():
    seq = _seq("A", "B")
    out = insert_block(seq, new_block("header"))
    assert out[0].type == "header"


def test_footer_inserted_last():
    seq = _seq("A", "B")
    out = insert_block(seq, new_block("footer"))
    assert out[-1].type == "footer"


def test_other_blocks_inserted_before_footer():
    seq = _seq("H", "A", "F", types={"H": "header", "F": "footer"})
    out = insert_block(seq, new_block("text", content="nouveau"))
    assert [b.type for b in out] == ["header", "text", "text", "footer"]
    assert out[2].content == "nouveau"


def test_other_blocks_appended_without_footer():
    seq = _seq("A")
    out = insert_block(seq, new_block("divider"))
    assert out[-1].type == "divider"


def test_second_header_rejected():
    seq = _seq("H", "A", types={"H": "header"})
    with pytest.raises(ConstraintViolation, match="header"):
        insert_block(seq, new_block("header"))
    assert _ids(seq) == ["H", "A"]


def test_second_footer_rejected():
    seq = _seq("A", "F", types={"F": "footer"})
    with pytest.raises(ConstraintViolation):
        ensure_can_add(seq, "footer")


def test_remove_block():
    assert _ids(remove_block(_seq("A", "B"), "A")) == ["B"]


# ── Duplication ──────────────────────────────────────────────────────────────

def test_duplicate_inserted_after_original_with_new_id():
    seq = _seq("A", "B", "C")
    out, clone = duplicate_block(seq, "B")
    assert _ids(out)[:2] == ["A", "B"]
    assert out[2] is clone
    assert clone.id not in ("A", "B", "C")
    assert clone.content == "B"


def test_duplicate_is_deep_copy():
    seq = parse_blocks([{"id": "S", "type": "social", "socialLinks": [{"platform": "tiktok", "url": "u"}]}])
    _, clone = duplicate_block(seq, "S")
    assert clone.social_links == seq[0].social_links
    assert clone.social_links is not seq[0].social_links


def test_duplicate_singleton_rejected():
    seq = _seq("H", types={"H": "header"})
    with pytest.raises(ConstraintViolation):
        duplicate_block(seq, "H")


def test_duplicate_unknown_id_rejected():
    with pytest.raises(ConstraintViolation):
        duplicate_block(_seq("A"), "Z")


def test_check_unique_ids():
    check_unique_ids(_seq("A", "B"))
    with pytest.raises(ConstraintViolation) as exc:
        check_unique_ids(_seq("A", "B", "A"))
    assert "A" in exc.value.message
