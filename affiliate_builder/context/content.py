"""
Sources de contenu du site : copie IA (ContentBundle) et copie par défaut.

Politique de priorité, déclarée une seule fois :
    propriété d'instance > contenu IA > copie par défaut > littéral
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


def is_missing(value: Any) -> bool:
    """None et chaînes vides/blanches comptent comme absentes."""
    return value is None or (isinstance(value, str) and not value.strip())


def coalesce(*values: Any) -> Any:
    """Première valeur non absente ; la dernière sert de littéral de repli."""
    for value in values:
        if not is_missing(value):
            return value
    return values[-1] if values else None


# ── Contenu généré par IA ───────────────────────────────────────────────────

class _Copy(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class HeroCopy(_Copy):
    badge:       Optional[str] = None
    title:       Optional[str] = None
    description: Optional[str] = None


class FeatureCopy(_Copy):
    icon:        str = "★"
    title:       str = ""
    description: str = ""


class ProductCopy(_Copy):
    asin:        str           = ""
    title:       Optional[str] = None
    description: Optional[str] = None
    rating:      Optional[str] = None


class TestimonialCopy(_Copy):
    text:    str = ""
    name:    str = ""
    title:   str = ""
    initial: str = ""


class ComparisonFeatureCopy(_Copy):
    name:        str = ""
    description: str = ""


class ComparisonCopy(_Copy):
    features: List[ComparisonFeatureCopy] = Field(default_factory=list)


class CtaCopy(_Copy):
    section_title:       Optional[str] = Field(default=None, alias="sectionTitle")
    section_description: Optional[str] = Field(default=None, alias="sectionDescription")
    button_label:        Optional[str] = Field(default=None, alias="buttonLabel")


class MetaCopy(_Copy):
    title:       Optional[str] = None
    description: Optional[str] = None
    tagline:     Optional[str] = None


class SectionCopy(_Copy):
    title:    Optional[str] = None
    subtitle: Optional[str] = None


class ContentBundle(_Copy):
    """Réponse structurée du fournisseur IA. Tous les champs sont optionnels."""
    hero:                 HeroCopy              = Field(default_factory=HeroCopy)
    features:             List[FeatureCopy]     = Field(default_factory=list)
    products:             List[ProductCopy]     = Field(default_factory=list)
    testimonials:         List[TestimonialCopy] = Field(default_factory=list)
    comparison:           ComparisonCopy        = Field(default_factory=ComparisonCopy)
    cta:                  CtaCopy               = Field(default_factory=CtaCopy)
    meta:                 MetaCopy              = Field(default_factory=MetaCopy)
    features_section:     SectionCopy           = Field(default_factory=SectionCopy, alias="featuresSection")
    products_section:     SectionCopy           = Field(default_factory=SectionCopy, alias="productsSection")
    testimonials_section: SectionCopy           = Field(default_factory=SectionCopy, alias="testimonialsSection")
    comparison_section:   SectionCopy           = Field(default_factory=SectionCopy, alias="comparisonSection")

    def product_copy(self, asin: str) -> Optional[ProductCopy]:
        return next((p for p in self.products if p.asin == asin), None)


# ── Copie par défaut ────────────────────────────────────────────────────────

DEFAULT_FEATURES: List[Dict[str, str]] = [
    {"icon": "★", "title": "Top Rated Picks", "description": "Only products with outstanding customer ratings make our list."},
    {"icon": "✓", "title": "Verified Quality", "description": "Every recommendation is researched and compared before it is featured."},
    {"icon": "⚡", "title": "Fast Delivery", "description": "Most products ship quickly with Prime eligible delivery."},
    {"icon": "🛡️", "title": "Buy With Confidence", "description": "Secure checkout and hassle-free returns through Amazon."},
]

DEFAULT_TESTIMONIALS: List[Dict[str, str]] = [
    {"text": "I found exactly what I needed in minutes. The recommendations were spot on.",
     "name": "Sarah M.", "title": "Verified Buyer", "initial": "S"},
    {"text": "Clear comparisons and honest picks. I will definitely come back before my next purchase.",
     "name": "James T.", "title": "Happy Customer", "initial": "J"},
    {"text": "Great selection and the product arrived quickly. Highly recommended.",
     "name": "Emily R.", "title": "Verified Buyer", "initial": "E"},
]

DEFAULT_RATING = "4.8"

AFFILIATE_DISCLOSURE = (
    "{brand} is a participant in the Amazon Services LLC Associates Program, an affiliate "
    "advertising program designed to provide a means for sites to earn advertising fees by "
    "advertising and linking to Amazon.com. We may earn a commission when you purchase "
    "through links on this site, at no additional cost to you."
)


def default_copy(brand_name: str, brand_description: Optional[str] = None) -> Dict[str, str]:
    """Copie de repli, paramétrée par la marque."""
    description = brand_description or f"Discover the best products hand-picked by {brand_name}."
    return {
        "tagline":               "Expert Picks You Can Trust",
        "meta_description":      description,
        "hero_badge":            "TOP RATED",
        "hero_title":            f"Discover the Best of {brand_name}",
        "hero_description":      description,
        "main_cta_label":        "Shop Now",
        "features_title":        "Why Choose Us?",
        "features_subtitle":     "Discover the advantages of our products.",
        "products_title":        "Our Top Products",
        "products_subtitle":     "Hand-picked products with the best value for money.",
        "comparison_title":      "Why We Stand Out",
        "comparison_subtitle":   "See how we compare to the competition.",
        "testimonials_title":    "What Our Customers Say",
        "testimonials_subtitle": "Real feedback from satisfied users.",
        "cta_section_title":     "Ready to Find Your Perfect Product?",
        "cta_section_description": "Join thousands of happy customers and shop our top picks today.",
    }


def _ai_values(content: Optional[ContentBundle]) -> Dict[str, Optional[str]]:
    if content is None:
        return {}
    return {
        "tagline":                 content.meta.tagline,
        "meta_description":        content.meta.description,
        "hero_badge":              content.hero.badge,
        "hero_title":              content.hero.title,
        "hero_description":        content.hero.description,
        "main_cta_label":          content.cta.button_label,
        "features_title":          content.features_section.title,
        "features_subtitle":       content.features_section.subtitle,
        "products_title":          content.products_section.title,
        "products_subtitle":       content.products_section.subtitle,
        "comparison_title":        content.comparison_section.title,
        "comparison_subtitle":     content.comparison_section.subtitle,
        "testimonials_title":      content.testimonials_section.title,
        "testimonials_subtitle":   content.testimonials_section.subtitle,
        "cta_section_title":       content.cta.section_title,
        "cta_section_description": content.cta.section_description,
    }


def resolve_copy(
    key: str,
    content: Optional[ContentBundle],
    defaults: Dict[str, str],
    override: Any = None,
    literal: str = "",
) -> str:
    """Résout un champ de copie : override > IA > défaut > littéral."""
    return coalesce(override, _ai_values(content).get(key), defaults.get(key), literal)


def resolve_list(ai_items: list, default_items: List[Dict[str, str]]) -> List[Dict[str, str]]:
    """
    Liste de taille fixe len(default_items) : items IA d'abord, complétés
    par les défauts de même position, tronqués au-delà.
    """
    size  = len(default_items)
    items = [item.model_dump() for item in ai_items[:size]]
    return items + [dict(item) for item in default_items[len(items):]]
