from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from ...ai.provider import get_content_provider
from ...database import (
    db_create_generation, db_get_generation, db_get_project, db_latest_generation,
    db_list_generations, db_load_project, db_next_version, db_update_generation, get_db,
)
from ...generation import GenerationError, generate_site
from ...models import GenerateOptions, GenerationDB, GenerationStatus

router = APIRouter(prefix="/api", tags=["Generation"])


def _generation_dict(g: GenerationDB) -> dict:
    return {"id": g.id, "version": g.version, "status": g.status, "ai_provider": g.ai_provider,
            "zip_path": g.zip_path, "zip_size": g.zip_size, "total_files": g.total_files,
            "pages_generated": g.pages_generated, "generation_time_ms": g.generation_time_ms,
            "error_log": g.error_log, "created_at": g.created_at.isoformat() if g.created_at else None}


@router.post("/projects/{project_id}/generate")
def api_generate(project_id: str, options: Optional[GenerateOptions] = None, db: Session = Depends(get_db)):
    options  = options or GenerateOptions()
    snapshot = db_load_project(db, project_id)
    if not snapshot: raise HTTPException(404, "Projet introuvable")

    provider = get_content_provider(options.text_provider) if options.regenerate_content else None
    gen = db_create_generation(db, GenerationDB(
        project_id=project_id,
        version=db_next_version(db, project_id),
        status=GenerationStatus.PROCESSING.value,
        ai_provider=provider.name if provider else None,
    ))

    try:
        result = generate_site(snapshot, version=gen.version, provider=provider,
                               use_ai=provider is not None, page=options.page)
    except GenerationError as e:
        db_update_generation(db, gen, status=GenerationStatus.FAILED.value, error_log=str(e))
        raise HTTPException(500, {"generation_id": gen.id, "error": str(e)})

    db_update_generation(db, gen,
        status=GenerationStatus.COMPLETED.value,
        zip_path=str(result.archive.path),
        zip_size=result.archive.size_bytes,
        total_files=result.archive.total_files,
        pages_generated=1,
        generation_time_ms=result.duration_ms,
    )
    p = db_get_project(db, project_id)
    p.last_generated_at = datetime.utcnow()
    p.generation_count  = (p.generation_count or 0) + 1
    db.commit()
    return {**_generation_dict(gen), "used_ai": result.used_ai}


@router.get("/projects/{project_id}/history")
def api_history(project_id: str, db: Session = Depends(get_db)):
    if not db_get_project(db, project_id): raise HTTPException(404, "Projet introuvable")
    return [_generation_dict(g) for g in db_list_generations(db, project_id)]


@router.get("/projects/{project_id}/history/{version}")
def api_history_version(project_id: str, version: int, db: Session = Depends(get_db)):
    if not db_get_project(db, project_id): raise HTTPException(404, "Projet introuvable")
    g = db_get_generation(db, project_id, version)
    if not g: raise HTTPException(404, "Génération introuvable")
    return _generation_dict(g)


@router.get("/projects/{project_id}/generate/status")
def api_generation_status(project_id: str, db: Session = Depends(get_db)):
    """Dernière génération, quel que soit son statut."""
    if not db_get_project(db, project_id): raise HTTPException(404, "Projet introuvable")
    g = db_latest_generation(db, project_id)
    if not g: raise HTTPException(404, "Aucune génération")
    return _generation_dict(g)


# ── Téléchargement ──
def _zip_response(slug: str, g: Optional[GenerationDB]) -> FileResponse:
    if not g or g.status != GenerationStatus.COMPLETED.value:
        raise HTTPException(404, "Aucune génération terminée")
    if not g.zip_path or not Path(g.zip_path).is_file():
        raise HTTPException(404, "Archive introuvable")
    return FileResponse(g.zip_path, media_type="application/zip", filename=f"{slug}-v{g.version}.zip")


# /latest déclaré avant /{version}
@router.get("/projects/{project_id}/download/latest")
def api_download_latest(project_id: str, db: Session = Depends(get_db)):
    p = db_get_project(db, project_id)
    if not p: raise HTTPException(404, "Projet introuvable")
    return _zip_response(p.slug, db_latest_generation(db, project_id, GenerationStatus.COMPLETED.value))


@router.get("/projects/{project_id}/download/{version}")
def api_download_version(project_id: str, version: int, db: Session = Depends(get_db)):
    p = db_get_project(db, project_id)
    if not p: raise HTTPException(404, "Projet introuvable")
    return _zip_response(p.slug, db_get_generation(db, project_id, version))
