"""Renderer HTML — compilation des blocs en markup email."""
from .html import compile_blocks, render_block, render_document, PLACEHOLDER_IMAGE_URL

__all__ = ["compile_blocks", "render_block", "render_document", "PLACEHOLDER_IMAGE_URL"]
