"""Templates HTML de page (fallback sans layout + source de la CSS)."""
from pathlib import Path

TEMPLATES_DIR    = Path(__file__).parent
DEFAULT_TEMPLATE = "default"


def template_path(template_id: str) -> Path:
    """<template_id>.html si présent, sinon default.html."""
    candidate = TEMPLATES_DIR / f"{template_id}.html"
    if template_id and candidate.is_file():
        return candidate
    return TEMPLATES_DIR / f"{DEFAULT_TEMPLATE}.html"


def load_template(template_id: str) -> str:
    return template_path(template_id).read_text(encoding="utf-8")
