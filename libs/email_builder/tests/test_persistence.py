"""Tests forme persistée {htmlBody, blocksJson} : chargement, fallback, sérialisation."""
import json

import pytest

from email_builder.blocks import dump_blocks, parse_blocks
from email_builder.core import CompileContext
from email_builder.persistence import PersistedDocument, dump_document, load_document
from email_builder.renderer import compile_blocks

STARTER_TYPES = ["header", "heading", "text", "button", "footer"]


@pytest.mark.parametrize("raw", [None, "", "   ", "[]", [], "{pas du json", '{"a": 1}'])
def test_missing_or_unusable_blocks_json_gives_starter(raw):
    doc = load_document(PersistedDocument(html_body="<p>vieux</p>", blocks_json=raw))
    assert [b.type for b in doc.blocks] == STARTER_TYPES
    assert "vieux" not in doc.html


def test_all_items_invalid_gives_starter():
    doc = load_document(PersistedDocument(blocks_json=[{"type": "carousel"}]))
    assert [b.type for b in doc.blocks] == STARTER_TYPES


def test_blocks_json_is_authoritative_and_html_recompiled():
    items = [{"id": "t", "type": "text", "content": "Bonjour"}]
    doc = load_document(PersistedDocument(html_body="<p>périmé</p>", blocks_json=json.dumps(items)))
    assert [b.id for b in doc.blocks] == ["t"]
    assert "Bonjour" in doc.html
    assert "périmé" not in doc.html


def test_load_migrates_legacy_padding():
    doc = load_document(PersistedDocument(blocks_json=[{"id": "t", "type": "text", "styles": {"padding": "10px"}}]))
    st = doc.blocks[0].styles
    assert st.padding is None
    assert st.padding_top == 10


def test_camel_case_keys_accepted():
    doc = PersistedDocument.model_validate({"htmlBody": "<p/>", "blocksJson": "[]"})
    assert doc.html_body == "<p/>"
    assert doc.blocks_json == "[]"


def test_dump_then_load_round_trip():
    ctx = CompileContext(base_url="https://app.io")
    blocks = parse_blocks([
        {"id": "h", "type": "header"},
        {"id": "i", "type": "image", "imageUrl": "/uploads/a.png"},
        {"id": "b", "type": "button", "content": "Go", "styles": {"buttonSize": 120}},
    ])
    saved = dump_document(blocks, ctx)
    assert saved.html_body == compile_blocks(blocks, ctx)
    assert saved.blocks_json == dump_blocks(blocks)

    stored = json.loads(json.dumps(saved.to_json_dict()))
    doc = load_document(PersistedDocument.model_validate(stored), ctx)
    assert doc.blocks == blocks
    assert doc.html == saved.html_body


def test_malformed_legacy_fields_keep_user_content():
    doc = load_document(PersistedDocument(blocks_json=[
        {"id": "T", "type": "text", "content": "CONTENU UTILISATEUR", "styles": {"textAlign": ["center"]}},
        {"id": "F", "type": "footer", "footerConfig": None, "socialLinks": None},
    ]))
    assert [b.id for b in doc.blocks] == ["T", "F"]
    assert "CONTENU UTILISATEUR" in doc.html


def test_duplicate_ids_renamed_on_load():
    doc = load_document(PersistedDocument(blocks_json=[
        {"id": "X", "type": "text", "content": "un"},
        {"id": "X", "type": "text", "content": "deux"},
    ]))
    ids = [b.id for b in doc.blocks]
    assert ids[0] == "X"
    assert ids[1] != "X"
    assert [b.content for b in doc.blocks] == ["un", "deux"]
