"""
Aperçu — remplace les variables {{nom}} par des libellés lisibles.

Transformation d'affichage uniquement : le markup reçu n'est jamais modifié
(les str sont immuables) et le résultat n'est jamais persisté.

  - dans une valeur d'attribut entre guillemets : {{token}} → [token], le reste
    de la valeur intact (…/path/{{token}} → …/path/[token])
  - dans le texte : {{token}} → <span surligné>[token]</span>

Seules les variables déclarées sont remplacées ; les autres restent telles quelles.
"""
import re
from typing import Iterable

HIGHLIGHT_STYLE = "background: #fef3c7; padding: 2px 6px; border-radius: 4px;"

_TAG = re.compile(r"<[^>]*>")
_QUOTED = re.compile(r"(\"[^\"]*\"|'[^']*')")


def _placeholder(variable: str) -> re.Pattern:
    return re.compile(r"\{\{\s*" + re.escape(variable) + r"\s*\}\}")


def _in_attributes(tag: str, patterns) -> str:
    def quoted(m: re.Match) -> str:
        value = m.group(0)
        for name, pattern in patterns:
            value = pattern.sub(f"[{name}]", value)
        return value
    return _QUOTED.sub(quoted, tag)


def _in_text(text: str, patterns) -> str:
    for name, pattern in patterns:
        text = pattern.sub(f'<span style="{HIGHLIGHT_STYLE}">[{name}]</span>', text)
    return text


def render_preview(html: str, variables: Iterable[str]) -> str:
    patterns = [(v, _placeholder(v)) for v in dict.fromkeys(variables) if v]
    if not patterns or not html:
        return html
    out = []
    pos = 0
    for m in _TAG.finditer(html):
        out.append(_in_text(html[pos:m.start()], patterns))
        out.append(_in_attributes(m.group(0), patterns))
        pos = m.end()
    out.append(_in_text(html[pos:], patterns))
    return "".join(out)
