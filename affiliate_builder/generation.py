"""
Pipeline de génération — snapshot projet → HTML → .htaccess → archive zip.

  1. contenu IA (optionnel, jamais bloquant)
  2. assets uploadés (logo / favicon)
  3. RenderContext
  4. rendu : layout sauvegardé de la page → blocs ; sinon template complet
  5. .htaccess + archive

Tout ou rien : une erreur lève GenerationError, aucune archive partielle.
"""
import logging
import time
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel

from . import config
from .ai.provider import ContentProvider, ContentRequest, fetch_content
from .assets import BrandAssets, find_brand_assets
from .context.builder import build_render_context
from .context.content import ContentBundle
from .core.schemas import ProjectSnapshot
from .core.template_engine import render_template
from .packaging.archive import ArchiveResult, build_archive
from .packaging.htaccess import build_htaccess, resolve_primary_domain
from .renderer.css import page_css
from .renderer.html import render_blocks, render_document, sort_blocks
from .templates import load_template

log = logging.getLogger(__name__)


class GenerationError(ValueError):
    """Échec de génération (rendu, I/O, archive)."""


class GenerationResult(BaseModel):
    page:        str
    html:        str
    htaccess:    str
    archive:     ArchiveResult
    used_ai:     bool
    duration_ms: int


def main_page(project: ProjectSnapshot) -> str:
    """Page rendue en index.html : home si sélectionnée, sinon la première."""
    pages = project.selected_pages or ["home"]
    return "home" if "home" in pages else pages[0]


def render_page_html(
    project: ProjectSnapshot,
    page: Optional[str] = None,
    content: Optional[ContentBundle] = None,
    assets: Optional[BrandAssets] = None,
    year: Optional[int] = None,
) -> str:
    """Document HTML complet d'une page. Pur : aucune I/O hormis la lecture du template."""
    page          = page or main_page(project)
    context       = build_render_context(project, content=content, assets=assets, year=year)
    template_html = load_template(project.template)
    layout        = (project.page_layouts or {}).get(page)

    if layout is not None:
        body = render_blocks(sort_blocks(layout.blocks), context)
        return render_document(body, context, css=page_css(context, template_html))

    log.debug("Pas de layout pour %s/%s, rendu template %s", project.id, page, project.template)
    return render_template(template_html, context.template_data())


def generate_site(
    project: ProjectSnapshot,
    version: int = 1,
    output_dir: Union[str, Path, None] = None,
    uploads_dir: Union[str, Path, None] = None,
    provider: Optional[ContentProvider] = None,
    use_ai: bool = True,
    page: Optional[str] = None,
) -> GenerationResult:
    started = time.monotonic()
    page    = page or main_page(project)
    log.info("Génération %s v%d (template %s, page %s)", project.slug, version, project.template, page)

    try:
        content  = fetch_content(ContentRequest.from_project(project), provider) if use_ai else None
        assets   = find_brand_assets(project.id, uploads_dir)
        html     = render_page_html(project, page=page, content=content, assets=assets)
        htaccess = build_htaccess(project.htaccess_config, resolve_primary_domain(project.domains))
        path     = Path(output_dir or config.output_dir()) / (project.slug or project.id) / f"v{version}.zip"
        archive  = build_archive(path, html, htaccess, assets.files())
    except Exception as e:
        log.error("Génération échouée pour %s : %s", project.id, e)
        raise GenerationError(f"Génération échouée pour {project.id} : {e}") from e

    duration_ms = int((time.monotonic() - started) * 1000)
    log.info("Génération %s v%d terminée en %d ms", project.slug, version, duration_ms)
    return GenerationResult(
        page=page,
        html=html,
        htaccess=htaccess,
        archive=archive,
        used_ai=content is not None,
        duration_ms=duration_ms,
    )
