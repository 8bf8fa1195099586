from .defaults import TEMPLATE_IDS, generate_default_layouts, template_pages
from .store import LayoutEditor, LayoutError, project_lock

__all__ = [
    "TEMPLATE_IDS",
    "generate_default_layouts",
    "template_pages",
    "LayoutEditor",
    "LayoutError",
    "project_lock",
]
