"""Email Builder - Documents email en blocs, compilation HTML, édition avec historique."""
from .blocks import Block, BLOCK_TYPES, parse_block, parse_blocks, dump_blocks
from .core import CompileContext, Logo, Theme, ThemeColors, BUILTIN_THEMES, DEFAULT_THEME, starter_blocks
from .renderer import compile_blocks, render_document
from .history import History
from .editor import EmailEditor
from .assets import AssetStore
from .preview import render_preview
from .persistence import Document, PersistedDocument, load_document, dump_document
from .imaging import crop_image
from .errors import (
    EmailBuilderError, ConstraintViolation,
    AssetUploadError, BucketMissing, SizeExceeded, InvalidImage,
)

__version__ = "0.1.0"
__all__ = [
    "Block", "BLOCK_TYPES", "parse_block", "parse_blocks", "dump_blocks",
    "CompileContext", "Logo", "Theme", "ThemeColors", "BUILTIN_THEMES", "DEFAULT_THEME", "starter_blocks",
    "compile_blocks", "render_document",
    "History", "EmailEditor", "AssetStore",
    "render_preview",
    "Document", "PersistedDocument", "load_document", "dump_document",
    "crop_image",
    "EmailBuilderError", "ConstraintViolation",
    "AssetUploadError", "BucketMissing", "SizeExceeded", "InvalidImage",
]
