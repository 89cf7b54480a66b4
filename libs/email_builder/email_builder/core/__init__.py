"""Core module pour email_builder."""
from .schemas import Logo, Theme, ThemeColors, CompileContext
from .logos import BRAND_LOGOS, select_logo, find_logo
from .themes import BUILTIN_THEMES, DEFAULT_THEME, ThemeStore, apply_theme, find_theme
from .migration import migrate_block, migrate_blocks
from .defaults import new_block, new_logo_block, starter_blocks

__all__ = [
    "Logo", "Theme", "ThemeColors", "CompileContext",
    "BRAND_LOGOS", "select_logo", "find_logo",
    "BUILTIN_THEMES", "DEFAULT_THEME", "ThemeStore", "apply_theme", "find_theme",
    "migrate_block", "migrate_blocks",
    "new_block", "new_logo_block", "starter_blocks",
]
