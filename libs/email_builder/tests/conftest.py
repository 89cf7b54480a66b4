"""Rend le package email_builder importable sans installation."""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
