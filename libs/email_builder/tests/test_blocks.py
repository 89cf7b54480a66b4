"""Tests modèle de blocs — parsing blocksJson, tolérance legacy, sérialisation camelCase."""
import pytest
from pydantic import ValidationError

from email_builder.blocks import (
    BLOCK_TYPES,
    ButtonBlock,
    FooterBlock,
    HeaderBlock,
    SignatureBlock,
    SocialBlock,
    TextBlock,
    dump_blocks,
    parse_block,
    parse_blocks,
)


def test_block_types_closed_set():
    assert set(BLOCK_TYPES) == {
        "heading", "text", "image", "button", "divider", "spacer",
        "link", "social", "footer", "header", "signature",
    }


def test_parse_block_dispatches_on_type():
    b = parse_block({"id": "b1", "type": "button", "content": "Go", "linkUrl": "/x"})
    assert isinstance(b, ButtonBlock)
    assert b.link_url == "/x"


def test_parse_block_unknown_type_raises():
    with pytest.raises(ValidationError):
        parse_block({"id": "x", "type": "carousel"})


def test_parse_blocks_skips_invalid_items():
    blocks = parse_blocks([
        {"id": "a", "type": "text", "content": "ok"},
        {"id": "b", "type": "carousel"},
        "pas un bloc",
        {"id": "c", "type": "spacer"},
    ])
    assert [b.id for b in blocks] == ["a", "c"]


def test_lenient_ints_accept_legacy_px_strings():
    b = parse_block({"id": "t", "type": "text", "styles": {
        "paddingTop": "16px", "paddingBottom": 8.0, "paddingHorizontal": "20",
        "backgroundOpacity": "nope",
    }})
    assert b.styles.padding_top == 16
    assert b.styles.padding_bottom == 8
    assert b.styles.padding_horizontal == 20
    assert b.styles.background_opacity is None


def test_unknown_fields_ignored():
    b = parse_block({"id": "t", "type": "text", "legacyThing": 1, "styles": {"glow": True}})
    assert isinstance(b, TextBlock)


def test_nested_configs_have_defaults():
    f = parse_block({"id": "f", "type": "footer"})
    assert isinstance(f, FooterBlock)
    assert f.footer_config.show_social_icons is True
    assert f.footer_config.logo_size == "medium"

    h = parse_block({"id": "h", "type": "header", "headerConfig": {"logoPosition": "center"}})
    assert isinstance(h, HeaderBlock)
    assert h.header_config.logo_position == "center"
    assert h.header_config.nav_position == "right"

    s = parse_block({"id": "s", "type": "signature", "signatureConfig": {"imageSize": "96px"}})
    assert isinstance(s, SignatureBlock)
    assert s.signature_config.image_size == 96
    assert s.signature_config.layout == "horizontal-left"


def test_blocks_are_frozen():
    b = parse_block({"id": "t", "type": "text"})
    with pytest.raises(ValidationError):
        b.content = "modifié"


def test_dump_uses_camel_case_and_drops_none():
    b = parse_block({"id": "s", "type": "social", "socialLinks": [
        {"platform": "instagram", "url": "https://instagram.com/x", "enabled": False},
    ]})
    assert isinstance(b, SocialBlock)
    data = dump_blocks([b])[0]
    assert data["socialLinks"][0] == {"platform": "instagram", "url": "https://instagram.com/x", "enabled": False}
    assert "styles" in data and data["styles"] == {}


def test_round_trip_through_blocks_json():
    items = [
        {"id": "h", "type": "header", "navLinks": [{"label": "Home", "url": "/", "enabled": True, "showArrow": True}]},
        {"id": "b", "type": "button", "content": "Go", "linkUrl": "{{dashboard_url}}",
         "styles": {"buttonSize": 120, "buttonShape": "pill", "paddingTop": 10}},
    ]
    blocks = parse_blocks(items)
    assert parse_blocks(dump_blocks(blocks)) == blocks


# ── Données legacy mal formées ───────────────────────────────────────────────

def test_null_configs_and_lists_fall_back_to_defaults():
    blocks = parse_blocks([
        {"id": "H", "type": "heading"},
        {"id": "F", "type": "footer", "footerConfig": None, "socialLinks": None},
    ])
    assert [b.id for b in blocks] == ["H", "F"]
    footer = blocks[1]
    assert footer.social_links == []
    assert footer.footer_config.show_logo is True


def test_wrongly_typed_style_becomes_unset():
    b = parse_block({"id": "t", "type": "text", "content": "Gardé", "styles": {"textAlign": ["center"], "textColor": "#111"}})
    assert b.content == "Gardé"
    assert b.styles.text_align is None
    assert b.styles.text_color == "#111"


def test_styles_not_an_object_gives_empty_styles():
    b = parse_block({"id": "t", "type": "text", "styles": "padding: 8px"})
    assert b.styles.text_align is None and b.styles.padding is None


def test_list_items_that_are_not_objects_are_dropped():
    b = parse_block({"id": "h", "type": "header", "navLinks": [None, "x", {"label": "Shop", "url": "/s", "enabled": "peut-être"}]})
    assert [n.label for n in b.nav_links] == ["Shop"]
    assert b.nav_links[0].enabled is True


def test_null_id_gets_generated():
    b = parse_block({"id": None, "type": "spacer"})
    assert b.id
