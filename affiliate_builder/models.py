"""
Data models — Project, Product, CTA, Domain, Generation
SQLAlchemy (SQLite) + Pydantic v2 + Enums
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from .core.schemas import BrandColors, HtaccessConfig, PageLayout


# ── ENUMS ──────────────────────────────────────────────────────────────

class GenerationStatus(str, Enum):
    PENDING    = "pending"
    PROCESSING = "processing"
    COMPLETED  = "completed"
    FAILED     = "failed"


class CtaPlacement(str, Enum):
    HERO         = "hero"
    HEADER       = "header"
    PRODUCT_CARD = "product-card"
    BANNER       = "banner"
    FOOTER       = "footer"


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


def _uuid() -> str:
    return str(uuid.uuid4())


class ProjectDB(Base):
    __tablename__ = "projects"
    id:                 Mapped[str]           = mapped_column(sa.String, primary_key=True, default=_uuid)
    name:               Mapped[str]           = mapped_column(sa.String, nullable=False)
    slug:               Mapped[str]           = mapped_column(sa.String, unique=True, nullable=False)
    brand_name:         Mapped[str]           = mapped_column(sa.String, nullable=False)
    brand_description:  Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    amazon_tracking_id: Mapped[str]           = mapped_column(sa.String, default="")
    amazon_marketplace: Mapped[str]           = mapped_column(sa.String, default="amazon.com")
    brand_colors:       Mapped[str]           = mapped_column(sa.Text, default="{}")
    template:           Mapped[str]           = mapped_column(sa.String, default="modern")
    selected_pages:     Mapped[str]           = mapped_column(sa.Text, default='["home"]')
    # NULL = jamais initialisé ; "{}" = vidé volontairement
    page_layouts:       Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    htaccess_config:    Mapped[str]           = mapped_column(sa.Text, default="{}")
    created_at:         Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)
    last_generated_at:  Mapped[Optional[datetime]] = mapped_column(sa.DateTime, nullable=True)
    generation_count:   Mapped[int]           = mapped_column(sa.Integer, default=0)

    products:    Mapped[List["ProductDB"]]    = relationship("ProductDB",    back_populates="project", cascade="all, delete-orphan")
    ctas:        Mapped[List["CtaDB"]]        = relationship("CtaDB",        back_populates="project", cascade="all, delete-orphan")
    domains:     Mapped[List["DomainDB"]]     = relationship("DomainDB",     back_populates="project", cascade="all, delete-orphan")
    generations: Mapped[List["GenerationDB"]] = relationship("GenerationDB", back_populates="project", cascade="all, delete-orphan")


class ProductDB(Base):
    __tablename__ = "products"
    id:                 Mapped[str]           = mapped_column(sa.String, primary_key=True, default=_uuid)
    project_id:         Mapped[str]           = mapped_column(sa.String, sa.ForeignKey("projects.id"), nullable=False)
    asin:               Mapped[str]           = mapped_column(sa.String, nullable=False)
    title:              Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    custom_title:       Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    custom_description: Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    image_url:          Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    sort_order:         Mapped[int]           = mapped_column(sa.Integer, default=0)

    project: Mapped["ProjectDB"] = relationship("ProjectDB", back_populates="products")


class CtaDB(Base):
    __tablename__ = "ctas"
    id:         Mapped[str]           = mapped_column(sa.String, primary_key=True, default=_uuid)
    project_id: Mapped[str]           = mapped_column(sa.String, sa.ForeignKey("projects.id"), nullable=False)
    name:       Mapped[str]           = mapped_column(sa.String, nullable=False)
    label:      Mapped[str]           = mapped_column(sa.String, nullable=False)
    link_type:  Mapped[str]           = mapped_column(sa.String, default="custom")
    placement:  Mapped[str]           = mapped_column(sa.String, default=CtaPlacement.HERO.value)
    custom_url: Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    product_id: Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    is_active:  Mapped[bool]          = mapped_column(sa.Boolean, default=True)

    project: Mapped["ProjectDB"] = relationship("ProjectDB", back_populates="ctas")


class DomainDB(Base):
    __tablename__ = "domains"
    id:         Mapped[str]  = mapped_column(sa.String, primary_key=True, default=_uuid)
    project_id: Mapped[str]  = mapped_column(sa.String, sa.ForeignKey("projects.id"), nullable=False)
    domain:     Mapped[str]  = mapped_column(sa.String, nullable=False)
    is_primary: Mapped[bool] = mapped_column(sa.Boolean, default=False)

    project: Mapped["ProjectDB"] = relationship("ProjectDB", back_populates="domains")


class GenerationDB(Base):
    __tablename__ = "generations"
    __table_args__ = (sa.UniqueConstraint("project_id", "version"),)
    id:                 Mapped[str]           = mapped_column(sa.String, primary_key=True, default=_uuid)
    project_id:         Mapped[str]           = mapped_column(sa.String, sa.ForeignKey("projects.id"), nullable=False)
    version:            Mapped[int]           = mapped_column(sa.Integer, nullable=False)
    status:             Mapped[str]           = mapped_column(sa.String, default=GenerationStatus.PENDING.value)
    ai_provider:        Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    zip_path:           Mapped[str]           = mapped_column(sa.String, default="")
    zip_size:           Mapped[int]           = mapped_column(sa.Integer, default=0)
    total_files:        Mapped[int]           = mapped_column(sa.Integer, default=0)
    pages_generated:    Mapped[int]           = mapped_column(sa.Integer, default=0)
    generation_time_ms: Mapped[Optional[int]] = mapped_column(sa.Integer, nullable=True)
    error_log:          Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    created_at:         Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)

    project: Mapped["ProjectDB"] = relationship("ProjectDB", back_populates="generations")


# ── PYDANTIC SCHEMAS ────────────────────────────────────────────────────

class ProductInput(BaseModel):
    asin:               str
    title:              Optional[str] = None
    custom_title:       Optional[str] = None
    custom_description: Optional[str] = None
    image_url:          Optional[str] = None
    sort_order:         int           = 0


class CtaInput(BaseModel):
    name:       str
    label:      str
    link_type:  str           = "custom"
    placement:  CtaPlacement  = CtaPlacement.HERO
    custom_url: Optional[str] = None
    product_id: Optional[str] = None
    is_active:  bool          = True


class DomainInput(BaseModel):
    domain:     str
    is_primary: bool = False


class ProjectCreate(BaseModel):
    name:               str
    slug:               Optional[str]     = None
    brand_name:         str
    brand_description:  Optional[str]     = None
    amazon_tracking_id: str               = ""
    amazon_marketplace: str               = "amazon.com"
    brand_colors:       BrandColors       = Field(default_factory=BrandColors)
    template:           str               = "modern"
    selected_pages:     List[str]         = Field(default_factory=lambda: ["home"])
    htaccess_config:    HtaccessConfig    = Field(default_factory=HtaccessConfig)
    products:           List[ProductInput] = Field(default_factory=list)
    ctas:               List[CtaInput]     = Field(default_factory=list)
    domains:            List[DomainInput]  = Field(default_factory=list)


class LayoutUpdate(BaseModel):
    """Corps de PUT /projects/{id}/layout, remplace tous les layouts."""
    page_layouts: Dict[str, PageLayout] = Field(..., alias="pageLayouts")

    model_config = ConfigDict(populate_by_name=True)


class GenerateOptions(BaseModel):
    regenerate_content: bool          = True
    text_provider:      Optional[str] = None
    page:               Optional[str] = None
