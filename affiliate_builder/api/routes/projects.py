import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ...assets import find_brand_assets
from ...blocks.registry import get_block_definition, validate_properties
from ...core.schemas import PageLayout, PageLayouts
from ...database import (
    db_create_project, db_get_page_layouts, db_get_project, db_list_projects,
    db_load_project, db_save_page_layouts, get_db, jl,
)
from ...generation import render_page_html
from ...models import LayoutUpdate, ProjectCreate

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Projects"])


def _dump(layouts: PageLayouts) -> dict:
    return {page: layout.model_dump(by_alias=True) for page, layout in layouts.items()}


@router.post("/projects")
def api_create_project(data: ProjectCreate, db: Session = Depends(get_db)):
    p = db_create_project(db, data)
    return {"id": p.id, "slug": p.slug, "template": p.template, "selected_pages": jl(p.selected_pages, [])}


@router.get("/projects")
def api_list_projects(db: Session = Depends(get_db)):
    return [{"id": p.id, "name": p.name, "slug": p.slug, "template": p.template,
             "products": len(p.products), "generations": p.generation_count}
            for p in db_list_projects(db)]


@router.get("/projects/{project_id}")
def api_get_project(project_id: str, db: Session = Depends(get_db)):
    snapshot = db_load_project(db, project_id)
    if not snapshot: raise HTTPException(404, "Projet introuvable")
    return snapshot.model_dump(mode="json", exclude={"page_layouts"})


# ── Layouts ──
@router.get("/projects/{project_id}/layout")
def api_get_layout(project_id: str, db: Session = Depends(get_db)):
    p = db_get_project(db, project_id)
    if not p: raise HTTPException(404, "Projet introuvable")
    return {"pageLayouts": _dump(db_get_page_layouts(p)), "selectedPages": jl(p.selected_pages, [])}


@router.put("/projects/{project_id}/layout")
def api_save_layout(project_id: str, data: LayoutUpdate, db: Session = Depends(get_db)):
    p = db_get_project(db, project_id)
    if not p: raise HTTPException(404, "Projet introuvable")

    errors = []
    seen   = set()
    layouts: PageLayouts = {}
    for page, layout in data.page_layouts.items():
        blocks = sorted(layout.blocks, key=lambda b: b.order)
        for i, block in enumerate(blocks):
            block.order = i
            if block.instance_id in seen:
                errors.append(f"{page}/{block.instance_id} instanceId en double")
            seen.add(block.instance_id)
            definition = get_block_definition(block.block_type)
            # types inconnus acceptés : ignorés au rendu
            if definition:
                errors += [f"{page}/{block.instance_id} {e}"
                           for e in validate_properties(definition, block.properties, partial=True)]
        layouts[page] = PageLayout(blocks=blocks)

    if errors:
        raise HTTPException(422, {"errors": errors})

    db_save_page_layouts(db, p, layouts)
    log.info("Layouts sauvegardés pour %s (%d pages)", project_id, len(layouts))
    return {"pageLayouts": _dump(layouts)}


# ── Preview ──
@router.get("/projects/{project_id}/preview", response_class=HTMLResponse)
def api_preview(project_id: str, page: Optional[str] = None, db: Session = Depends(get_db)):
    """Aperçu sans IA : copie par défaut, layouts sauvegardés ou template."""
    snapshot = db_load_project(db, project_id)
    if not snapshot: raise HTTPException(404, "Projet introuvable")
    html = render_page_html(snapshot, page=page, assets=find_brand_assets(snapshot.id))
    return HTMLResponse(content=html)
