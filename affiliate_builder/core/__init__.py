"""Core module pour affiliate_builder."""
from .schemas import (
    BlockInstance,
    PageLayout,
    PageLayouts,
    parse_page_layouts,
    dump_page_layouts,
    BrandColors,
    HtaccessConfig,
    Product,
    CTA,
    Domain,
    ProjectSnapshot,
)
from .template_engine import render_template, is_falsy

__all__ = [
    "BlockInstance",
    "PageLayout",
    "PageLayouts",
    "parse_page_layouts",
    "dump_page_layouts",
    "BrandColors",
    "HtaccessConfig",
    "Product",
    "CTA",
    "Domain",
    "ProjectSnapshot",
    "render_template",
    "is_falsy",
]
