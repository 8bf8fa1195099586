"""
Renderer de blocs — layout ordonné de BlockInstance → fragment HTML.

Dispatch : BlockType → fonction de section (table construite une fois).
  - types alias : products-spotlight → produits, reviews-summary → témoignages
  - no-op explicites : content-trust, content-faq, content-text
  - type inconnu : ignoré (aucune sortie, aucune erreur)

Chaque section reçoit (context, propriétés effectives) où
propriétés effectives = défauts du registre ⊕ overrides de l'instance.
"""
import logging
from html import escape
from typing import Any, Callable, Dict, Iterable, List

from ..blocks.base import BlockType
from ..blocks.registry import effective_properties
from ..context.builder import RenderContext
from ..context.content import coalesce
from ..core.schemas import BlockInstance

log = logging.getLogger(__name__)

SectionRenderer = Callable[[RenderContext, Dict[str, Any]], str]

_ARROW = ('<svg width="20" height="20" fill="none" stroke="currentColor" stroke-width="2" '
          'viewBox="0 0 24 24"><path d="M5 12h14M12 5l7 7-7 7"/></svg>')

_NAV_LINKS = (("#features", "Features"), ("#products", "Products"), ("#compare", "Compare"), ("#reviews", "Reviews"))


def _e(value: Any) -> str:
    return escape(str(value), quote=True)


def _brand_mark(ctx: RenderContext) -> str:
    if ctx.has_logo and ctx.logo_url:
        return f'<img src="{_e(ctx.logo_url)}" alt="{_e(ctx.brand_name)}" class="logo-img">'
    return _e(ctx.brand_name)


def _section_header(title: str, subtitle: str) -> str:
    return f"""      <div class="section-header">
        <h2>{_e(title)}</h2>
        <p>{_e(subtitle)}</p>
      </div>"""


# ── Sections ────────────────────────────────────────────────────────────────

def render_nav(ctx: RenderContext, props: Dict[str, Any]) -> str:
    sticky = " header--sticky" if props.get("sticky") else ""
    links  = "\n".join(f'        <a href="{href}">{label}</a>' for href, label in _NAV_LINKS)
    return f"""
  <!-- Header -->
  <header class="header{sticky}">
    <div class="container header-inner">
      <a href="/" class="logo">{_brand_mark(ctx)}</a>
      <nav class="nav">
{links}
      </nav>
      <a href="{_e(ctx.main_cta_url)}" class="header-cta" target="_blank" rel="nofollow noopener">{_e(ctx.main_cta_label)}</a>
    </div>
  </header>"""


def render_hero(ctx: RenderContext, props: Dict[str, Any]) -> str:
    badge     = coalesce(props.get("badge"), ctx.hero_badge, "TOP RATED")
    title     = coalesce(props.get("title"), ctx.hero_title, ctx.brand_name)
    subtitle  = coalesce(props.get("subtitle"), ctx.hero_description, "")
    alignment = coalesce(props.get("alignment"), "center")
    return f"""
  <!-- Hero -->
  <section class="hero hero--{_e(alignment)}">
    <div class="container">
      <div class="hero-content">
        <span class="hero-badge">{_e(badge)}</span>
        <h1>{_e(title)}</h1>
        <p>{_e(subtitle)}</p>
        <div class="hero-buttons">
          <a href="{_e(ctx.main_cta_url)}" class="btn btn-primary" target="_blank" rel="nofollow noopener">
            {_e(ctx.main_cta_label)}
            {_ARROW}
          </a>
          <a href="#products" class="btn btn-outline">View Products</a>
        </div>
      </div>
    </div>
  </section>"""


def render_features(ctx: RenderContext, props: Dict[str, Any]) -> str:
    title    = coalesce(props.get("title"), ctx.features_title, "Why Choose Us?")
    subtitle = coalesce(props.get("subtitle"), ctx.features_subtitle, "")
    columns  = coalesce(props.get("columns"), 4)
    cards = "".join(f"""
        <div class="feature-card">
          <div class="feature-icon">{_e(f.icon)}</div>
          <h3>{_e(f.title)}</h3>
          <p>{_e(f.description)}</p>
        </div>""" for f in ctx.features)
    return f"""
  <!-- Features -->
  <section class="features" id="features">
    <div class="container">
{_section_header(title, subtitle)}
      <div class="features-grid" data-columns="{_e(columns)}">
        {cards}
      </div>
    </div>
  </section>"""


def render_products(ctx: RenderContext, props: Dict[str, Any]) -> str:
    title         = coalesce(props.get("title"), ctx.products_title, "Our Top Products")
    subtitle      = coalesce(props.get("subtitle"), ctx.products_subtitle, "")
    columns       = coalesce(props.get("columns"), 3)
    show_ratings  = props.get("showRatings", True) is not False
    show_prices   = props.get("showPrices", True) is not False

    def card(p) -> str:
        rating = f'<span class="product-rating">★★★★★ {_e(p.rating)}</span>' if show_ratings else ""
        price  = f'<span class="product-price">{_e(p.price)}</span>' if show_prices else ""
        return f"""
        <div class="product-card">
          <div class="product-image">
            <img src="{_e(p.image_url)}" alt="{_e(p.title)}" loading="lazy">
          </div>
          <div class="product-content">
            <h3>{_e(p.title)}</h3>
            <p>{_e(p.description)}</p>
            <div class="product-meta">
              {rating}
              {price}
            </div>
            <a href="{_e(p.affiliate_url)}" class="product-cta" target="_blank" rel="nofollow noopener sponsored">
              {_e(p.cta_label)}
            </a>
          </div>
        </div>"""

    cards = "".join(card(p) for p in ctx.products)
    return f"""
  <!-- Products -->
  <section class="products" id="products">
    <div class="container">
{_section_header(title, subtitle)}
      <div class="products-grid" data-columns="{_e(columns)}">
        {cards}
      </div>
    </div>
  </section>"""


def render_comparison(ctx: RenderContext, props: Dict[str, Any]) -> str:
    title    = coalesce(props.get("title"), ctx.comparison_title, "Why We Stand Out")
    subtitle = coalesce(props.get("subtitle"), ctx.comparison_subtitle, "")
    header   = "".join(f"<th>{_e(p.name)}</th>" for p in ctx.comparison_products)
    rows = "".join(f"""
          <tr>
            <td><strong>{_e(row.name)}</strong></td>
            {"".join(f"<td>{_e(v)}</td>" for v in row.values)}
          </tr>""" for row in ctx.comparison_features)
    return f"""
  <!-- Comparison -->
  <section class="comparison" id="compare">
    <div class="container">
{_section_header(title, subtitle)}
      <table class="comparison-table">
        <thead>
          <tr>
            <th>Feature</th>
            {header}
          </tr>
        </thead>
        <tbody>
          {rows}
        </tbody>
      </table>
    </div>
  </section>"""


def render_testimonials(ctx: RenderContext, props: Dict[str, Any]) -> str:
    title    = coalesce(props.get("title"), ctx.testimonials_title, "What Our Customers Say")
    subtitle = coalesce(props.get("subtitle"), ctx.testimonials_subtitle, "")
    cards = "".join(f"""
        <div class="testimonial-card">
          <p class="testimonial-text">"{_e(t.text)}"</p>
          <div class="testimonial-author">
            <div class="testimonial-avatar">{_e(t.initial or t.name[:1])}</div>
            <div>
              <div class="testimonial-name">{_e(t.name)}</div>
              <div class="testimonial-title">{_e(t.title)}</div>
            </div>
          </div>
        </div>""" for t in ctx.testimonials)
    return f"""
  <!-- Testimonials -->
  <section class="testimonials" id="reviews">
    <div class="container">
{_section_header(title, subtitle)}
      <div class="testimonials-grid">
        {cards}
      </div>
    </div>
  </section>"""


def render_cta_banner(ctx: RenderContext, props: Dict[str, Any]) -> str:
    # `text` = variante mono-ligne du titre
    title    = coalesce(props.get("title"), props.get("text"), ctx.cta_section_title, "Ready to Get Started?")
    subtitle = coalesce(props.get("subtitle"), ctx.cta_section_description, "")
    style    = coalesce(props.get("style"), "primary")
    return f"""
  <!-- CTA Section -->
  <section class="cta-section cta-section--{_e(style)}">
    <div class="container">
      <h2>{_e(title)}</h2>
      <p>{_e(subtitle)}</p>
      <a href="{_e(ctx.main_cta_url)}" class="btn" target="_blank" rel="nofollow noopener">
        {_e(ctx.main_cta_label)}
        {_ARROW}
      </a>
    </div>
  </section>"""


def render_footer(ctx: RenderContext, props: Dict[str, Any]) -> str:
    quick_links = "\n".join(f'            <li><a href="{href}">{label}</a></li>' for href, label in _NAV_LINKS)
    return f"""
  <!-- Footer -->
  <footer class="footer">
    <div class="container">
      <div class="footer-grid">
        <div class="footer-brand">
          <a href="/" class="logo">{_brand_mark(ctx)}</a>
          <p>{_e(ctx.brand_description)}</p>
        </div>
        <div class="footer-column">
          <h4>Quick Links</h4>
          <ul>
{quick_links}
          </ul>
        </div>
        <div class="footer-column">
          <h4>Support</h4>
          <ul>
            <li><a href="#">Contact Us</a></li>
            <li><a href="#">FAQ</a></li>
            <li><a href="#">Shipping Info</a></li>
            <li><a href="#">Returns</a></li>
          </ul>
        </div>
        <div class="footer-column">
          <h4>Legal</h4>
          <ul>
            <li><a href="#">Privacy Policy</a></li>
            <li><a href="#">Terms of Service</a></li>
            <li><a href="#">Affiliate Disclosure</a></li>
          </ul>
        </div>
      </div>

      <div class="affiliate-disclosure">
        <strong>Affiliate Disclosure:</strong> {_e(ctx.affiliate_disclosure)}
      </div>

      <div class="footer-bottom">
        <p>&copy; {ctx.year} {_e(ctx.brand_name)}. All rights reserved.</p>
        <p>As an Amazon Associate, we earn from qualifying purchases.</p>
      </div>
    </div>
  </footer>"""


def render_nothing(ctx: RenderContext, props: Dict[str, Any]) -> str:
    return ""


# ── Dispatch ────────────────────────────────────────────────────────────────

SECTION_RENDERERS: Dict[BlockType, SectionRenderer] = {
    BlockType.NAV_SIMPLE:         render_nav,
    BlockType.HERO_STANDARD:      render_hero,
    BlockType.FEATURES_GRID:      render_features,
    BlockType.PRODUCTS_GRID:      render_products,
    BlockType.COMPARISON_TABLE:   render_comparison,
    BlockType.TESTIMONIALS:       render_testimonials,
    BlockType.CTA_BANNER:         render_cta_banner,
    BlockType.FOOTER_STANDARD:    render_footer,
    # alias legacy
    BlockType.PRODUCTS_SPOTLIGHT: render_products,
    BlockType.REVIEWS_SUMMARY:    render_testimonials,
    # sans rendu statique
    BlockType.CONTENT_TRUST:      render_nothing,
    BlockType.CONTENT_FAQ:        render_nothing,
    BlockType.CONTENT_TEXT:       render_nothing,
}


def sort_blocks(blocks: Iterable[BlockInstance]) -> List[BlockInstance]:
    """Tri stable par `order` (à faire une fois, avant render_blocks)."""
    return sorted(blocks, key=lambda b: b.order)


def render_block(block: BlockInstance, context: RenderContext) -> str:
    """HTML d'un bloc, "" si le type est inconnu ou sans rendu."""
    block_type = BlockType.parse(block.block_type)
    if block_type is None:
        log.debug("Bloc ignoré : type inconnu %r (%s)", block.block_type, block.instance_id)
        return ""
    renderer = SECTION_RENDERERS[block_type]
    return renderer(context, effective_properties(block_type.value, block.properties))


def render_blocks(blocks: Iterable[BlockInstance], context: RenderContext) -> str:
    """Blocs supposés déjà triés. Sections vides écartées, jointure par "\\n"."""
    sections = []
    for block in blocks:
        html = render_block(block, context)
        if html.strip():
            sections.append(html)
    return "\n".join(sections)


# ── Document complet ────────────────────────────────────────────────────────

def render_document(body: str, context: RenderContext, css: str = "", lang: str = "en") -> str:
    """Enveloppe un fragment dans un document HTML (titre, meta, favicon, CSS inline)."""
    title   = f"{context.brand_name} - {context.tagline}" if context.tagline else context.brand_name
    favicon = (f'\n  <link rel="icon" href="{_e(context.favicon_url)}">'
               if context.has_favicon and context.favicon_url else "")
    return f"""<!DOCTYPE html>
<html lang="{lang}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{_e(title)}</title>
  <meta name="description" content="{_e(context.meta_description)}">{favicon}
  <style>{css}</style>
</head>
<body>
{body}
</body>
</html>"""
