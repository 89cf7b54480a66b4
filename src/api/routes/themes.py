"""
Thèmes email — palettes intégrées (lecture seule) + thèmes personnalisés en DB.

GET    /api/email/themes        → intégrés puis personnalisés
POST   /api/email/themes        → création
PUT    /api/email/themes/{id}   → mise à jour (thème personnalisé uniquement)
DELETE /api/email/themes/{id}
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from email_builder.core import BUILTIN_THEMES, Theme, find_theme
from email_builder.errors import ConstraintViolation

from ...database import SqlThemeStore, get_db
from ...models import ThemeInput
from ..errors import http_error

log = logging.getLogger(__name__)
router = APIRouter(tags=["Email themes"])


def _ensure_custom(theme_id: str):
    if find_theme(BUILTIN_THEMES, theme_id):
        raise http_error(ConstraintViolation(f"Le thème intégré '{theme_id}' n'est pas modifiable"))


def _out(theme: Theme) -> dict:
    return theme.model_dump(by_alias=True)


@router.get("/api/email/themes")
def list_themes(db: Session = Depends(get_db)):
    custom = SqlThemeStore(db).list()
    return [_out(t) for t in (*BUILTIN_THEMES, *custom)]


@router.post("/api/email/themes")
def create_theme(body: ThemeInput, db: Session = Depends(get_db)):
    theme = SqlThemeStore(db).create(Theme(name=body.name, description=body.description, colors=body.colors))
    return _out(theme)


@router.put("/api/email/themes/{theme_id}")
def update_theme(theme_id: str, body: ThemeInput, db: Session = Depends(get_db)):
    _ensure_custom(theme_id)
    theme = SqlThemeStore(db).update(theme_id, Theme(name=body.name, description=body.description, colors=body.colors))
    if theme is None:
        raise HTTPException(404, f"Thème {theme_id} introuvable")
    return _out(theme)


@router.delete("/api/email/themes/{theme_id}")
def delete_theme(theme_id: str, db: Session = Depends(get_db)):
    _ensure_custom(theme_id)
    if not SqlThemeStore(db).delete(theme_id):
        raise HTTPException(404, f"Thème {theme_id} introuvable")
    log.info("Thème supprimé : %s", theme_id)
    return {"deleted": True, "id": theme_id}
