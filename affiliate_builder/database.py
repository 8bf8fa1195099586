"""SQLite — init + session + CRUD helpers"""
import json
import logging
import re
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from . import config
from .core.schemas import (
    CTA,
    BrandColors,
    Domain,
    HtaccessConfig,
    PageLayouts,
    Product,
    ProjectSnapshot,
    dump_page_layouts,
    parse_page_layouts,
)
from .layout.defaults import generate_default_layouts
from .models import Base, CtaDB, DomainDB, GenerationDB, ProductDB, ProjectCreate, ProjectDB

log = logging.getLogger(__name__)

ENGINE       = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def _make_engine(db_url: str):
    if db_url.startswith("sqlite:///"):
        Path(db_url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(db_url, connect_args={"check_same_thread": False})
    return create_engine(db_url)


def init_db(db_url: Optional[str] = None):
    """Crée le moteur (DB_URL / DB_PATH par défaut) et les tables."""
    global ENGINE
    ENGINE = _make_engine(db_url or config.db_url())
    SessionLocal.configure(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    return ENGINE


def get_db():
    if ENGINE is None:
        init_db()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── JSON helpers ──
def jl(s: Optional[str], default=None):
    try:
        return json.loads(s) if s else default
    except ValueError:
        return default

def jd(o) -> str:
    return json.dumps(o, ensure_ascii=False)


def slugify(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-") or "site"


# ── Project ──
def _unique_slug(db: Session, base: str) -> str:
    """base, puis base-2, base-3… si déjà pris."""
    slug, n = base, 1
    while db.query(ProjectDB.id).filter_by(slug=slug).first():
        n += 1
        slug = f"{base}-{n}"
    return slug


def db_create_project(db: Session, data: ProjectCreate) -> ProjectDB:
    obj = ProjectDB(
        name=data.name,
        slug=_unique_slug(db, slugify(data.slug or data.name)),
        brand_name=data.brand_name,
        brand_description=data.brand_description,
        amazon_tracking_id=data.amazon_tracking_id,
        amazon_marketplace=data.amazon_marketplace,
        brand_colors=data.brand_colors.model_dump_json(),
        template=data.template,
        selected_pages=jd(data.selected_pages),
        page_layouts=None,
        htaccess_config=data.htaccess_config.model_dump_json(),
    )
    obj.products = [ProductDB(**p.model_dump()) for p in data.products]
    obj.ctas     = [CtaDB(**{**c.model_dump(), "placement": c.placement.value}) for c in data.ctas]
    obj.domains  = [DomainDB(**d.model_dump()) for d in data.domains]
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_project(db: Session, project_id: str) -> Optional[ProjectDB]:
    return db.query(ProjectDB).filter_by(id=project_id).first()

def db_list_projects(db: Session) -> List[ProjectDB]:
    return db.query(ProjectDB).order_by(ProjectDB.created_at.desc()).all()


# ── Page layouts ──
def _stored_layouts(p: ProjectDB) -> Optional[PageLayouts]:
    """Layouts persistés ; None si jamais initialisés ou illisibles."""
    if p.page_layouts is None:
        return None
    try:
        return parse_page_layouts(p.page_layouts)
    except ValidationError as e:
        log.warning("page_layouts illisible pour %s, défauts du template utilisés : %s", p.id, e.errors()[:1])
        return None


def db_get_page_layouts(p: ProjectDB) -> PageLayouts:
    """
    Layouts du projet. Jamais initialisés (NULL) → défauts du template (non persistés,
    ils le seront au premier PUT). Un layout sauvegardé vide est respecté tel quel.
    """
    layouts = _stored_layouts(p)
    if layouts is not None:
        return layouts

    pages = jl(p.selected_pages, ["home"]) or ["home"]
    log.info("Layouts par défaut pour %s (template %s, pages %s)", p.id, p.template, pages)
    return generate_default_layouts(p.template, pages)

def db_save_page_layouts(db: Session, p: ProjectDB, layouts: PageLayouts) -> ProjectDB:
    p.page_layouts = dump_page_layouts(layouts)
    db.commit(); db.refresh(p); return p


# ── Snapshot ──
def to_snapshot(p: ProjectDB) -> ProjectSnapshot:
    return ProjectSnapshot(
        id=p.id,
        name=p.name,
        slug=p.slug,
        brand_name=p.brand_name,
        brand_description=p.brand_description,
        amazon_tracking_id=p.amazon_tracking_id or "",
        amazon_marketplace=p.amazon_marketplace or "amazon.com",
        brand_colors=BrandColors(**jl(p.brand_colors, {})),
        template=p.template,
        selected_pages=jl(p.selected_pages, ["home"]) or ["home"],
        page_layouts=_stored_layouts(p),
        htaccess_config=HtaccessConfig(**jl(p.htaccess_config, {})),
        products=[
            Product(id=x.id, asin=x.asin, title=x.title, custom_title=x.custom_title,
                    custom_description=x.custom_description, image_url=x.image_url,
                    sort_order=x.sort_order)
            for x in p.products
        ],
        ctas=[
            CTA(id=c.id, name=c.name, label=c.label, link_type=c.link_type, placement=c.placement,
                custom_url=c.custom_url, product_id=c.product_id, is_active=c.is_active)
            for c in p.ctas
        ],
        domains=[Domain(domain=d.domain, is_primary=d.is_primary) for d in p.domains],
    )

def db_load_project(db: Session, project_id: str) -> Optional[ProjectSnapshot]:
    """Snapshot complet ; None si absent. page_layouts reste None si jamais initialisé."""
    p = db_get_project(db, project_id)
    return to_snapshot(p) if p else None


# ── Generation ──
def db_next_version(db: Session, project_id: str) -> int:
    last = (db.query(GenerationDB).filter_by(project_id=project_id)
            .order_by(GenerationDB.version.desc()).first())
    return (last.version if last else 0) + 1

def db_create_generation(db: Session, obj: GenerationDB) -> GenerationDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_update_generation(db: Session, gen: GenerationDB, **kwargs) -> GenerationDB:
    for k, v in kwargs.items():
        setattr(gen, k, v)
    db.commit(); db.refresh(gen); return gen

def db_list_generations(db: Session, project_id: str, limit: int = 20) -> List[GenerationDB]:
    return (db.query(GenerationDB).filter_by(project_id=project_id)
            .order_by(GenerationDB.version.desc()).limit(limit).all())


def db_get_generation(db: Session, project_id: str, version: int) -> Optional[GenerationDB]:
    return db.query(GenerationDB).filter_by(project_id=project_id, version=version).first()


def db_latest_generation(db: Session, project_id: str, status: Optional[str] = None) -> Optional[GenerationDB]:
    q = db.query(GenerationDB).filter_by(project_id=project_id)
    if status:
        q = q.filter_by(status=status)
    return q.order_by(GenerationDB.version.desc()).first()
