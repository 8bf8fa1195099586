"""
Schémas Pydantic du site affilié.
Structure : ProjectSnapshot → PageLayouts → PageLayout → BlockInstance

Le JSON persisté (colonne page_layouts) est en camelCase :
  {"home": {"blocks": [{"instanceId": "...", "blockType": "hero-standard",
                        "order": 0, "properties": {"title": "..."}}]}}
"""
import json
import uuid
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


# ── Layout ──────────────────────────────────────────────────────────────────

class BlockInstance(BaseModel):
    """Un bloc posé sur une page. `properties` = overrides partiels."""
    model_config = ConfigDict(populate_by_name=True)

    instance_id: str            = Field(default_factory=lambda: str(uuid.uuid4()), alias="instanceId")
    block_type:  str            = Field(..., alias="blockType")
    order:       int            = Field(default=0, ge=0)
    properties:  Dict[str, Any] = Field(default_factory=dict)


class PageLayout(BaseModel):
    blocks: List[BlockInstance] = Field(default_factory=list)


PageLayouts = Dict[str, PageLayout]

_LAYOUTS_ADAPTER = TypeAdapter(Dict[str, PageLayout])


def parse_page_layouts(raw: Union[str, bytes, dict, None]) -> PageLayouts:
    """JSON (str) ou dict → PageLayouts validés. Lève ValidationError si malformé."""
    if raw is None:
        return {}
    if isinstance(raw, (str, bytes)):
        return _LAYOUTS_ADAPTER.validate_json(raw or "{}")
    return _LAYOUTS_ADAPTER.validate_python(raw)


def dump_page_layouts(layouts: PageLayouts) -> str:
    """PageLayouts → JSON camelCase (format persisté)."""
    data = {
        page: layout.model_dump(by_alias=True)
        for page, layout in layouts.items()
    }
    return json.dumps(data, ensure_ascii=False)


# ── Projet (snapshot fourni par la persistance) ────────────────────────────

class BrandColors(BaseModel):
    primary:   str = "#2563eb"
    secondary: str = "#1e40af"
    accent:    str = "#f59e0b"


class HtaccessConfig(BaseModel):
    enable_gzip:    bool                                   = True
    enable_caching: bool                                   = True
    force_https:    bool                                   = True
    www_redirect:   Literal["to-www", "to-non-www", "none"] = "none"
    custom_rules:   Optional[str]                          = None


class Product(BaseModel):
    id:                 Optional[str] = None
    asin:               str
    title:              Optional[str] = None
    custom_title:       Optional[str] = None
    custom_description: Optional[str] = None
    image_url:          Optional[str] = None
    sort_order:         int           = 0


class CTA(BaseModel):
    id:         Optional[str] = None
    name:       str
    label:      str
    link_type:  str           = "custom"
    placement:  str           = "hero"
    custom_url: Optional[str] = None
    product_id: Optional[str] = None
    is_active:  bool          = True


class Domain(BaseModel):
    domain:     str
    is_primary: bool = False


class ProjectSnapshot(BaseModel):
    """
    Projet + relations, tel que chargé par la persistance.
    page_layouts = None → jamais initialisé (les défauts du template seront générés).
    """
    id:                 str
    name:               str                   = ""
    slug:               str                   = ""
    brand_name:         str
    brand_description:  Optional[str]         = None
    amazon_tracking_id: str                   = ""
    amazon_marketplace: str                   = "amazon.com"
    brand_colors:       BrandColors           = Field(default_factory=BrandColors)
    template:           str                   = "modern"
    selected_pages:     List[str]             = Field(default_factory=lambda: ["home"])
    page_layouts:       Optional[PageLayouts] = None
    htaccess_config:    HtaccessConfig        = Field(default_factory=HtaccessConfig)
    products:           List[Product]         = Field(default_factory=list)
    ctas:               List[CTA]             = Field(default_factory=list)
    domains:            List[Domain]          = Field(default_factory=list)
