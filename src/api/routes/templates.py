"""
Templates email — CRUD + compilation + aperçu.

POST   /api/email/compile                  → {html}
POST   /api/email/preview                  → {html}
GET    /api/email/templates                → liste
POST   /api/email/templates                → création (blocks absent → document de départ)
GET    /api/email/templates/{tid}          → blocs + html recompilé
PUT    /api/email/templates/{tid}          → blocs → recompilation → stockage des deux
DELETE /api/email/templates/{tid}
GET    /api/email/templates/{tid}/preview  → HTML d'aperçu (variables déclarées)
"""
import logging
import os
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from email_builder.blocks import dump_blocks
from email_builder.core import CompileContext, migrate_blocks, starter_blocks
from email_builder.errors import ConstraintViolation
from email_builder.ordering import check_singletons, check_unique_ids
from email_builder.persistence import Document, PersistedDocument, dump_document, load_document
from email_builder.preview import render_preview
from email_builder.renderer import compile_blocks

from ...database import (
    get_db, jd, jl,
    db_create_template, db_delete_template, db_get_template, db_list_templates, db_update_template,
)
from ...models import CompileInput, EmailTemplateDB, PreviewInput, TemplateCreate, TemplateUpdate
from ..errors import http_error

log = logging.getLogger(__name__)
router = APIRouter(tags=["Email templates"])


def _context(base_url: Optional[str] = None) -> CompileContext:
    return CompileContext(base_url=base_url or os.getenv("BASE_URL", "http://localhost:8001"))


def _get_template_or_404(db: Session, tid: str) -> EmailTemplateDB:
    tpl = db_get_template(db, tid)
    if not tpl:
        raise HTTPException(404, f"Template {tid} introuvable")
    return tpl


def _load(tpl: EmailTemplateDB) -> Document:
    return load_document(PersistedDocument(html_body=tpl.html_body or "", blocks_json=tpl.blocks_json), _context())


def _save_fields(blocks) -> dict:
    """Blocs validés → colonnes html_body + blocks_json."""
    blocks = tuple(blocks)
    try:
        check_unique_ids(blocks)
        check_singletons(blocks)
    except ConstraintViolation as e:
        raise http_error(e)
    saved = dump_document(migrate_blocks(blocks), _context())
    return {"html_body": saved.html_body, "blocks_json": jd(saved.blocks_json)}


def _summary(tpl: EmailTemplateDB) -> dict:
    return {
        "id":          tpl.id,
        "name":        tpl.name,
        "subject":     tpl.subject,
        "description": tpl.description,
        "variables":   jl(tpl.variables),
        "isActive":    tpl.is_active,
        "createdAt":   tpl.created_at.isoformat() if tpl.created_at else None,
        "updatedAt":   tpl.updated_at.isoformat() if tpl.updated_at else None,
    }


def _detail(tpl: EmailTemplateDB) -> dict:
    doc = _load(tpl)
    return {**_summary(tpl), "blocks": dump_blocks(doc.blocks), "htmlBody": doc.html}


# ── Compilation / aperçu ─────────────────────────────────────────────────────

@router.post("/api/email/compile")
def compile_email(body: CompileInput):
    blocks = migrate_blocks(body.blocks)
    return {"html": compile_blocks(blocks, _context(body.base_url))}


@router.post("/api/email/preview")
def preview_email(body: PreviewInput):
    return {"html": render_preview(body.html, body.variables)}


# ── CRUD templates ───────────────────────────────────────────────────────────

@router.get("/api/email/templates")
def list_templates(db: Session = Depends(get_db)):
    return [_summary(t) for t in db_list_templates(db)]


@router.post("/api/email/templates")
def create_template(body: TemplateCreate, db: Session = Depends(get_db)):
    blocks = body.blocks if body.blocks else starter_blocks()
    tpl = db_create_template(db, EmailTemplateDB(
        name=body.name,
        subject=body.subject,
        description=body.description,
        variables=jd(body.variables),
        **_save_fields(blocks),
    ))
    log.info("Template créé : %s (%s)", tpl.name, tpl.id)
    return _detail(tpl)


@router.get("/api/email/templates/{tid}")
def get_template(tid: str, db: Session = Depends(get_db)):
    return _detail(_get_template_or_404(db, tid))


@router.put("/api/email/templates/{tid}")
def update_template(tid: str, body: TemplateUpdate, db: Session = Depends(get_db)):
    tpl = _get_template_or_404(db, tid)
    fields = {k: v for k, v in body.model_dump(exclude={"blocks", "variables"}).items() if v is not None}
    if body.variables is not None:
        fields["variables"] = jd(body.variables)
    if body.blocks is not None:
        fields.update(_save_fields(body.blocks))
    tpl = db_update_template(db, tpl, **fields)
    return _detail(tpl)


@router.delete("/api/email/templates/{tid}")
def delete_template(tid: str, db: Session = Depends(get_db)):
    tpl = _get_template_or_404(db, tid)
    db_delete_template(db, tpl)
    log.info("Template supprimé : %s", tid)
    return {"deleted": True, "id": tid}


@router.get("/api/email/templates/{tid}/preview", response_class=HTMLResponse)
def preview_template(tid: str, db: Session = Depends(get_db)):
    tpl = _get_template_or_404(db, tid)
    return HTMLResponse(render_preview(_load(tpl).html, jl(tpl.variables)))
