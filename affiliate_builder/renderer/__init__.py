from .css import extract_css, page_css, substitute_colors
from .html import SECTION_RENDERERS, render_block, render_blocks, render_document, sort_blocks

__all__ = [
    "extract_css",
    "page_css",
    "substitute_colors",
    "SECTION_RENDERERS",
    "render_block",
    "render_blocks",
    "render_document",
    "sort_blocks",
]
