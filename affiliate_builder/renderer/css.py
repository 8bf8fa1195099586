"""
CSS du site — extraite du fichier template, couleurs de marque substituées.

  extract_css(template_html)    →  corps du premier <style>
  substitute_colors(css, ctx)   →  §primaryColor§ / §primaryDark§ / §secondaryColor§ / §accentColor§
"""
import re

from ..context.builder import RenderContext
from ..core.template_engine import substitute_variables

_STYLE = re.compile(r"<style[^>]*>(.*?)</style>", re.S | re.I)


def extract_css(template_html: str) -> str:
    """Corps du premier <style> du template, "" si absent."""
    m = _STYLE.search(template_html or "")
    return m.group(1) if m else ""


def substitute_colors(css: str, context: RenderContext) -> str:
    """Remplace les 4 placeholders couleur ; les autres § restent intacts."""
    return substitute_variables(css, context.color_variables())


def page_css(context: RenderContext, template_html: str) -> str:
    return substitute_colors(extract_css(template_html), context)
