from fastapi import APIRouter, HTTPException

from ...blocks.base import BlockCategory
from ...blocks.registry import BLOCK_REGISTRY, get_block_definition, get_blocks_by_category
from ...layout.defaults import TEMPLATE_IDS, template_pages

router = APIRouter(prefix="/api", tags=["Blocks"])


@router.get("/blocks")
def api_blocks():
    return [b.model_dump(mode="json") for b in BLOCK_REGISTRY]


@router.get("/blocks/category/{category}")
def api_blocks_by_category(category: str):
    if category not in {c.value for c in BlockCategory}:
        raise HTTPException(404, f"Catégorie inconnue : {category}")
    return [b.model_dump(mode="json") for b in get_blocks_by_category(category)]


@router.get("/blocks/{block_id}")
def api_block(block_id: str):
    b = get_block_definition(block_id)
    if not b: raise HTTPException(404, "Bloc introuvable")
    return b.model_dump(mode="json")


@router.get("/templates")
def api_templates():
    return [{"id": t, "pages": template_pages(t)} for t in TEMPLATE_IDS]
