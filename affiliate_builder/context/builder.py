"""
Construction du RenderContext — sac de valeurs plat, entièrement résolu,
reconstruit à chaque rendu à partir du snapshot projet + contenu IA + assets.
"""
from datetime import datetime
from html import escape
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..assets import BrandAssets
from ..core.colors import darken, normalize_hex
from ..core.schemas import CTA, Product, ProjectSnapshot
from .content import (
    AFFILIATE_DISCLOSURE,
    DEFAULT_FEATURES,
    DEFAULT_RATING,
    DEFAULT_TESTIMONIALS,
    ContentBundle,
    coalesce,
    default_copy,
    resolve_copy,
    resolve_list,
)

COMPARISON_SIZE      = 3
PRICE_PLACEHOLDER    = "Check Price"
PRODUCT_CTA_FALLBACK = "View on Amazon"

# Lignes fixes du tableau comparatif (contenu illustratif, pas calculé)
COMPARISON_ROWS = ("Quality Rating", "Prime Eligible", "Free Returns", "Our Pick")


class FeatureItem(BaseModel):
    icon:        str
    title:       str
    description: str


class ProductCard(BaseModel):
    title:         str
    description:   str
    image_url:     str
    affiliate_url: str
    rating:        str
    price:         str
    cta_label:     str


class ComparisonProduct(BaseModel):
    name: str


class ComparisonRow(BaseModel):
    name:   str
    values: List[str]


class TestimonialItem(BaseModel):
    text:    str
    name:    str
    title:   str
    initial: str


class RenderContext(BaseModel):
    brand_name:           str
    brand_description:    str
    tagline:              str
    meta_description:     str
    year:                 int
    primary_color:        str
    primary_dark:         str
    secondary_color:      str
    accent_color:         str
    has_logo:             bool          = False
    logo_url:             Optional[str] = None
    has_favicon:          bool          = False
    favicon_url:          Optional[str] = None
    affiliate_disclosure: str

    hero_badge:       str
    hero_title:       str
    hero_description: str
    hero_image:       str = ""

    main_cta_label: str
    main_cta_url:   str

    features_title:    str
    features_subtitle: str
    features:          List[FeatureItem] = Field(default_factory=list)

    products_title:    str
    products_subtitle: str
    products:          List[ProductCard] = Field(default_factory=list)

    comparison_title:    str
    comparison_subtitle: str
    comparison_products: List[ComparisonProduct] = Field(default_factory=list)
    comparison_features: List[ComparisonRow]     = Field(default_factory=list)

    testimonials_title:    str
    testimonials_subtitle: str
    testimonials:          List[TestimonialItem] = Field(default_factory=list)

    cta_section_title:       str
    cta_section_description: str

    def color_variables(self) -> Dict[str, str]:
        """Placeholders CSS §primaryColor§ / §primaryDark§ / §secondaryColor§ / §accentColor§."""
        return {
            "primaryColor":   self.primary_color,
            "primaryDark":    self.primary_dark,
            "secondaryColor": self.secondary_color,
            "accentColor":    self.accent_color,
        }

    def template_data(self, escape_html: bool = True) -> Dict[str, Any]:
        """Sac de données plat pour le moteur de template (clés snake_case + couleurs)."""
        data = {**self.model_dump(), **self.color_variables()}
        return _escape_all(data) if escape_html else data


def _escape_all(value: Any) -> Any:
    if isinstance(value, str):
        return escape(value, quote=True)
    if isinstance(value, dict):
        return {k: _escape_all(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_escape_all(v) for v in value]
    return value


# ── URLs Amazon ─────────────────────────────────────────────────────────────

def affiliate_url(asin: str, marketplace: str, tracking_id: str) -> str:
    url = f"https://www.{marketplace}/dp/{asin}"
    return f"{url}?tag={tracking_id}" if tracking_id else url


def store_url(marketplace: str, tracking_id: str) -> str:
    url = f"https://www.{marketplace}/"
    return f"{url}?tag={tracking_id}" if tracking_id else url


def amazon_image_url(asin: str) -> str:
    return f"https://images-na.ssl-images-amazon.com/images/P/{asin}.01._SCLZZZZZZZ_.jpg"


# ── CTAs ────────────────────────────────────────────────────────────────────

def _active_ctas(project: ProjectSnapshot) -> List[CTA]:
    return [c for c in project.ctas if c.is_active]


def _cta_for(project: ProjectSnapshot, placement: str) -> Optional[CTA]:
    return next((c for c in _active_ctas(project) if c.placement == placement), None)


def _cta_url(cta: Optional[CTA], project: ProjectSnapshot, products: List[Product]) -> str:
    """URL d'un CTA : custom_url > produit lié > premier produit > boutique."""
    marketplace, tag = project.amazon_marketplace, project.amazon_tracking_id
    if cta is not None:
        if cta.custom_url:
            return cta.custom_url
        if cta.product_id:
            linked = next((p for p in products if p.id == cta.product_id), None)
            if linked:
                return affiliate_url(linked.asin, marketplace, tag)
    if products:
        return affiliate_url(products[0].asin, marketplace, tag)
    return store_url(marketplace, tag)


# ── Produits ────────────────────────────────────────────────────────────────

def _product_card(
    product: Product,
    project: ProjectSnapshot,
    content: Optional[ContentBundle],
    cta_label: str,
) -> ProductCard:
    ai = content.product_copy(product.asin) if content else None
    return ProductCard(
        title=coalesce(product.custom_title, ai and ai.title, product.title, f"Product {product.asin}"),
        description=coalesce(
            product.custom_description,
            ai and ai.description,
            f"A top-rated pick recommended by {project.brand_name}.",
        ),
        image_url=coalesce(product.image_url, amazon_image_url(product.asin)),
        affiliate_url=affiliate_url(product.asin, project.amazon_marketplace, project.amazon_tracking_id),
        rating=coalesce(ai and ai.rating, DEFAULT_RATING),
        price=PRICE_PLACEHOLDER,
        cta_label=cta_label,
    )


def _comparison_rows(count: int) -> List[ComparisonRow]:
    our_pick = ["✓"] + ["—"] * (count - 1) if count else []
    return [
        ComparisonRow(name=COMPARISON_ROWS[0], values=["★★★★★"] * count),
        ComparisonRow(name=COMPARISON_ROWS[1], values=["✓"] * count),
        ComparisonRow(name=COMPARISON_ROWS[2], values=["✓"] * count),
        ComparisonRow(name=COMPARISON_ROWS[3], values=our_pick),
    ]


# ── Point d'entrée ──────────────────────────────────────────────────────────

def build_render_context(
    project: ProjectSnapshot,
    content: Optional[ContentBundle] = None,
    assets: Optional[BrandAssets] = None,
    year: Optional[int] = None,
) -> RenderContext:
    """Résout toutes les valeurs dont les renderers ont besoin. Aucune I/O."""
    assets   = assets or BrandAssets()
    defaults = default_copy(project.brand_name, project.brand_description)
    products = sorted(project.products, key=lambda p: p.sort_order)

    def copy(key: str, override: Any = None) -> str:
        return resolve_copy(key, content, defaults, override=override)

    primary = normalize_hex(project.brand_colors.primary, "#2563eb")

    card_cta     = _cta_for(project, "product-card")
    hero_cta     = _cta_for(project, "hero") or next(iter(_active_ctas(project)), None)
    cards        = [
        _product_card(p, project, content, card_cta.label if card_cta else PRODUCT_CTA_FALLBACK)
        for p in products
    ]
    compared     = cards[:COMPARISON_SIZE]

    return RenderContext(
        brand_name=project.brand_name,
        brand_description=coalesce(project.brand_description, defaults["meta_description"]),
        tagline=copy("tagline"),
        meta_description=copy("meta_description"),
        year=year or datetime.now().year,
        primary_color=primary,
        primary_dark=darken(primary, 15),
        secondary_color=normalize_hex(project.brand_colors.secondary, "#1e40af"),
        accent_color=normalize_hex(project.brand_colors.accent, "#f59e0b"),
        has_logo=assets.logo is not None,
        logo_url=assets.logo_url,
        has_favicon=assets.favicon is not None,
        favicon_url=assets.favicon_url,
        affiliate_disclosure=AFFILIATE_DISCLOSURE.format(brand=project.brand_name),
        hero_badge=copy("hero_badge"),
        hero_title=copy("hero_title"),
        hero_description=copy("hero_description"),
        main_cta_label=copy("main_cta_label", override=hero_cta.label if hero_cta else None),
        main_cta_url=_cta_url(hero_cta, project, products),
        features_title=copy("features_title"),
        features_subtitle=copy("features_subtitle"),
        features=resolve_list(content.features if content else [], DEFAULT_FEATURES),
        products_title=copy("products_title"),
        products_subtitle=copy("products_subtitle"),
        products=cards,
        comparison_title=copy("comparison_title"),
        comparison_subtitle=copy("comparison_subtitle"),
        comparison_products=[ComparisonProduct(name=c.title) for c in compared],
        comparison_features=_comparison_rows(len(compared)),
        testimonials_title=copy("testimonials_title"),
        testimonials_subtitle=copy("testimonials_subtitle"),
        testimonials=resolve_list(content.testimonials if content else [], DEFAULT_TESTIMONIALS),
        cta_section_title=copy("cta_section_title"),
        cta_section_description=copy("cta_section_description"),
    )
