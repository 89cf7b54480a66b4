"""SQLite — init + session + CRUD helpers"""
import json, logging, os
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from email_builder.core import Theme, ThemeColors

from .models import Base, EmailTemplateDB, EmailThemeDB

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"

DB_PATH      = os.getenv("DB_PATH", str(DATA_DIR / "email_builder.db"))
Path(DB_PATH).parent.mkdir(parents=True, exist_ok=True)
ENGINE       = create_engine(f"sqlite:///{DB_PATH}", connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)


def init_db(engine=ENGINE):
    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── JSON helpers ──
def jl(s: Optional[str]) -> list:
    try: return json.loads(s or "[]")
    except ValueError: return []

def jd(o) -> str:
    return json.dumps(o, ensure_ascii=False)


# ── Templates ──
def db_list_templates(db: Session) -> List[EmailTemplateDB]:
    return db.query(EmailTemplateDB).order_by(EmailTemplateDB.created_at.desc()).all()

def db_get_template(db: Session, tid: str) -> Optional[EmailTemplateDB]:
    return db.query(EmailTemplateDB).filter_by(id=tid).first()

def db_create_template(db: Session, obj: EmailTemplateDB) -> EmailTemplateDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_update_template(db: Session, tpl: EmailTemplateDB, **kwargs) -> EmailTemplateDB:
    for k, v in kwargs.items():
        setattr(tpl, k, v)
    tpl.updated_at = datetime.utcnow()
    db.commit(); db.refresh(tpl); return tpl

def db_delete_template(db: Session, tpl: EmailTemplateDB):
    db.delete(tpl); db.commit()


# ── Thèmes personnalisés ──
def db_list_themes(db: Session) -> List[EmailThemeDB]:
    return db.query(EmailThemeDB).order_by(EmailThemeDB.created_at).all()

def db_get_theme(db: Session, theme_id: str) -> Optional[EmailThemeDB]:
    return db.query(EmailThemeDB).filter_by(id=theme_id).first()


def _to_theme(row: EmailThemeDB) -> Theme:
    try:
        colors = ThemeColors.model_validate(json.loads(row.colors or "{}"))
    except ValueError:
        log.warning("Couleurs illisibles pour le thème %s — palette par défaut", row.id)
        colors = ThemeColors()
    return Theme(id=row.id, name=row.name, description=row.description or "", colors=colors)


class SqlThemeStore:
    """ThemeStore sur la table email_themes (thèmes intégrés exclus)."""

    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Theme]:
        return [_to_theme(row) for row in db_list_themes(self.db)]

    def create(self, theme: Theme) -> Theme:
        row = EmailThemeDB(name=theme.name, description=theme.description, colors=jd(theme.colors.model_dump()))
        self.db.add(row); self.db.commit(); self.db.refresh(row)
        log.info("Thème créé : %s (%s)", row.name, row.id)
        return _to_theme(row)

    def update(self, theme_id: str, theme: Theme) -> Optional[Theme]:
        row = db_get_theme(self.db, theme_id)
        if not row:
            return None
        row.name = theme.name
        row.description = theme.description
        row.colors = jd(theme.colors.model_dump())
        self.db.commit(); self.db.refresh(row)
        return _to_theme(row)

    def delete(self, theme_id: str) -> bool:
        row = db_get_theme(self.db, theme_id)
        if not row:
            return False
        self.db.delete(row); self.db.commit()
        return True
