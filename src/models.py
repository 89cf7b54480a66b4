"""
Data models — EmailTemplate, EmailTheme
SQLAlchemy (SQLite) + Pydantic v2 (entrées API en camelCase)
"""
import uuid
from datetime import datetime
from typing import List, Optional

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from email_builder.blocks import BlockUnion
from email_builder.core import ThemeColors


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class EmailTemplateDB(Base):
    __tablename__ = "email_templates"
    id:          Mapped[str]           = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name:        Mapped[str]           = mapped_column(sa.String, nullable=False)
    subject:     Mapped[str]           = mapped_column(sa.String, default="")
    description: Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    html_body:   Mapped[str]           = mapped_column(sa.Text, default="")
    blocks_json: Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)   # JSON list de blocs
    variables:   Mapped[str]           = mapped_column(sa.Text, default="[]")    # JSON list de noms
    is_active:   Mapped[bool]          = mapped_column(sa.Boolean, default=True)
    created_at:  Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at:  Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class EmailThemeDB(Base):
    __tablename__ = "email_themes"
    id:          Mapped[str]      = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name:        Mapped[str]      = mapped_column(sa.String, nullable=False)
    description: Mapped[str]      = mapped_column(sa.Text, default="")
    colors:      Mapped[str]      = mapped_column(sa.Text, default="{}")          # JSON ThemeColors
    created_at:  Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow)


# ── PYDANTIC SCHEMAS ────────────────────────────────────────────────────

class ApiModel(BaseModel):
    """Entrées API : camelCase (format de l'éditeur) ou snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CompileInput(ApiModel):
    blocks:   List[BlockUnion] = Field(default_factory=list)
    base_url: Optional[str]    = None


class PreviewInput(ApiModel):
    html:      str
    variables: List[str] = Field(default_factory=list)


class TemplateCreate(ApiModel):
    name:        str
    subject:     str                        = ""
    description: Optional[str]              = None
    variables:   List[str]                  = Field(default_factory=list)
    blocks:      Optional[List[BlockUnion]] = None   # absent → document de départ


class TemplateUpdate(ApiModel):
    name:        Optional[str]              = None
    subject:     Optional[str]              = None
    description: Optional[str]              = None
    variables:   Optional[List[str]]        = None
    is_active:   Optional[bool]             = None
    blocks:      Optional[List[BlockUnion]] = None


class ThemeInput(ApiModel):
    name:        str
    description: str         = ""
    colors:      ThemeColors = Field(default_factory=ThemeColors)
