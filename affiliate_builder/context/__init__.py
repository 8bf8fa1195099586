from .builder import ProductCard, RenderContext, build_render_context
from .content import ContentBundle, coalesce, default_copy, resolve_copy

__all__ = [
    "ProductCard",
    "RenderContext",
    "build_render_context",
    "ContentBundle",
    "coalesce",
    "default_copy",
    "resolve_copy",
]
