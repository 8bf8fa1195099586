"""
Layouts par défaut — générés depuis la config du template quand un projet
n'a jamais eu de page_layouts.

Résolution par page : entrée exacte du template → `home` du template → `home` générique.
"""
import uuid
from typing import Dict, Iterable, List, Tuple

from ..core.schemas import BlockInstance, PageLayout, PageLayouts

BlockSeed  = Tuple[str, dict]
PageConfig = Dict[str, List[BlockSeed]]

_FOOTER_3 = ("footer-standard", {"showSocialLinks": True, "columns": 3})
_FOOTER_4 = ("footer-standard", {"showSocialLinks": True, "columns": 4})
_GRID_3   = ("products-grid", {"columns": 3, "showRatings": True, "showPrices": True})


TEMPLATE_CONFIGS: Dict[str, PageConfig] = {
    # Modern : sobre
    "modern": {
        "home": [
            ("nav-simple",    {"sticky": True, "showSearch": True}),
            ("hero-standard", {"title": "Welcome", "subtitle": "Discover our top-rated products", "alignment": "center"}),
            _GRID_3,
            ("content-trust", {"showSecurePayment": True, "showMoneyBack": True, "showSupport": True, "layout": "horizontal"}),
            _FOOTER_3,
        ],
        "products": [
            ("nav-simple", {"sticky": True, "showSearch": True}),
            _GRID_3,
            _FOOTER_3,
        ],
        "about": [
            ("nav-simple",    {"sticky": True}),
            ("content-text",  {"heading": "About Us", "body": "Learn more about our mission and values.", "alignment": "left"}),
            ("content-trust", {"showSecurePayment": True, "showMoneyBack": True, "layout": "grid"}),
            _FOOTER_3,
        ],
    },

    # Landing : orienté conversion
    "landing": {
        "home": [
            ("nav-simple",       {"sticky": True, "showSearch": False}),
            ("hero-standard",    {"badge": "TOP RATED 2024", "alignment": "left"}),
            ("features-grid",    {"columns": 4}),
            _GRID_3,
            ("comparison-table", {}),
            ("testimonials",     {}),
            ("cta-banner",       {"style": "primary", "fullWidth": True}),
            _FOOTER_4,
        ],
        "products": [
            ("nav-simple", {"sticky": True}),
            _GRID_3,
            ("cta-banner", {"style": "secondary"}),
            _FOOTER_4,
        ],
    },

    "review-hub": {
        "home": [
            ("nav-simple",    {"sticky": True, "showSearch": True}),
            ("hero-standard", {"title": "Expert Reviews You Can Trust", "subtitle": "In-depth analysis and honest ratings", "alignment": "center"}),
            _GRID_3,
            _FOOTER_3,
        ],
        "reviews": [
            ("nav-simple",         {"sticky": True, "showSearch": True}),
            ("reviews-summary",    {"showProscons": True, "rating": 4}),
            ("products-spotlight", {"layout": "left", "showSpecs": True}),
            _FOOTER_3,
        ],
    },

    "comparison": {
        "home": [
            ("nav-simple",    {"sticky": True, "showSearch": True}),
            ("hero-standard", {"title": "Compare & Choose", "subtitle": "Side-by-side product comparisons", "alignment": "center"}),
            ("products-grid", {"columns": 2, "showRatings": True, "showPrices": True}),
            ("content-trust", {"showSecurePayment": True, "showMoneyBack": True, "layout": "horizontal"}),
            _FOOTER_3,
        ],
        "compare": [
            ("nav-simple",      {"sticky": True}),
            ("products-grid",   {"columns": 2, "showRatings": True, "showPrices": True}),
            ("reviews-summary", {"showProscons": True}),
            ("footer-standard", {"showSocialLinks": True, "columns": 2}),
        ],
    },

    "deals": {
        "home": [
            ("nav-simple",    {"sticky": True, "showSearch": True}),
            ("cta-banner",    {"text": "Limited Time Offers - Shop Now!", "style": "accent", "fullWidth": True}),
            ("hero-standard", {"title": "Today's Best Deals", "subtitle": "Save big on top products", "alignment": "center"}),
            _GRID_3,
            _FOOTER_3,
        ],
    },

    "classic": {
        "home": [
            ("nav-simple",    {"sticky": False, "showSearch": True}),
            ("hero-standard", {"title": "Welcome to Our Store", "subtitle": "Quality products for every need", "alignment": "left"}),
            ("products-grid", {"columns": 4, "showRatings": True, "showPrices": True}),
            ("content-text",  {"heading": "About Our Products", "body": "We carefully select each product to ensure quality and value."}),
            _FOOTER_4,
        ],
    },

    "minimal": {
        "home": [
            ("nav-simple",         {"sticky": True, "showSearch": False}),
            ("hero-standard",      {"title": "Simple. Clean. Essential.", "alignment": "center"}),
            ("products-spotlight", {"layout": "left", "showSpecs": False}),
            ("footer-standard",    {"showSocialLinks": False, "columns": 2}),
        ],
    },

    "single-product": {
        "home": [
            ("nav-simple",         {"sticky": True, "showSearch": False}),
            ("hero-standard",      {"title": "Introducing Our Flagship Product", "alignment": "center"}),
            ("products-spotlight", {"layout": "right", "showSpecs": True}),
            ("reviews-summary",    {"showProscons": True, "rating": 5}),
            ("content-faq",        {"heading": "Common Questions", "expandable": True}),
            ("cta-banner",         {"text": "Get yours today!", "style": "primary", "fullWidth": True}),
            ("footer-standard",    {"showSocialLinks": True, "columns": 2}),
        ],
    },

    "tech-review": {
        "home": [
            ("nav-simple",    {"sticky": True, "showSearch": True}),
            ("hero-standard", {"title": "Tech Reviews & Guides", "subtitle": "Expert analysis for informed decisions", "alignment": "center"}),
            _GRID_3,
            _FOOTER_3,
        ],
        "reviews": [
            ("nav-simple",         {"sticky": True, "showSearch": True}),
            ("reviews-summary",    {"showProscons": True, "rating": 4}),
            ("products-spotlight", {"layout": "left", "showSpecs": True}),
            _FOOTER_3,
        ],
    },

    "lifestyle": {
        "home": [
            ("nav-simple",    {"sticky": True, "showSearch": False}),
            ("hero-standard", {"title": "Elevate Your Lifestyle", "subtitle": "Curated products for modern living", "alignment": "center"}),
            ("products-grid", {"columns": 3, "showRatings": False, "showPrices": True}),
            ("content-text",  {"heading": "Our Philosophy", "body": "We believe in quality over quantity.", "alignment": "center"}),
            _FOOTER_3,
        ],
    },

    "blog-affiliate": {
        "home": [
            ("nav-simple",    {"sticky": True, "showSearch": True}),
            ("hero-standard", {"title": "Insights & Recommendations", "subtitle": "Expert advice and product picks", "alignment": "left"}),
            ("content-text",  {"heading": "Latest Articles", "body": "Check out our recent posts for tips and reviews."}),
            _GRID_3,
            _FOOTER_4,
        ],
    },

    "top-lists": {
        "home": [
            ("nav-simple",    {"sticky": True, "showSearch": True}),
            ("hero-standard", {"title": "Top 10 Best Products", "subtitle": "Our expert picks ranked and reviewed", "alignment": "center"}),
            ("products-grid", {"columns": 2, "showRatings": True, "showPrices": True}),
            ("cta-banner",    {"text": "See the full list", "style": "primary"}),
            _FOOTER_3,
        ],
    },

    "niche-authority": {
        "home": [
            ("nav-simple",    {"sticky": True, "showSearch": True}),
            ("hero-standard", {"title": "Your Trusted Resource", "subtitle": "Comprehensive guides and expert recommendations", "alignment": "center"}),
            _GRID_3,
            ("content-text",  {"heading": "Why Trust Us", "body": "Years of experience and thousands of products tested."}),
            ("content-faq",   {"heading": "Buying Guide FAQ", "expandable": True}),
            _FOOTER_4,
        ],
    },

    "quick-picks": {
        "home": [
            ("nav-simple",      {"sticky": True, "showSearch": True}),
            ("hero-standard",   {"title": "Quick Picks", "subtitle": "Fast decisions, great products", "alignment": "center"}),
            ("products-grid",   {"columns": 4, "showRatings": True, "showPrices": True}),
            ("footer-standard", {"showSocialLinks": False, "columns": 2}),
        ],
    },

    "premium": {
        "home": [
            ("nav-simple",         {"sticky": True, "showSearch": False}),
            ("hero-standard",      {"title": "Premium Collection", "subtitle": "Exceptional quality for discerning tastes", "alignment": "center"}),
            ("products-spotlight", {"layout": "left", "showSpecs": True}),
            ("content-trust",      {"showSecurePayment": True, "showMoneyBack": True, "layout": "horizontal"}),
            _FOOTER_3,
        ],
    },
}

# Templates sans config dédiée
GENERIC_CONFIG: PageConfig = {
    "home": [
        ("nav-simple",    {"sticky": True, "showSearch": True}),
        ("hero-standard", {"title": "Welcome", "subtitle": "Discover our products", "alignment": "center"}),
        _GRID_3,
        _FOOTER_3,
    ],
}

TEMPLATE_IDS: Tuple[str, ...] = tuple(TEMPLATE_CONFIGS)


def template_pages(template_id: str) -> List[str]:
    """Pages déclarées explicitement par un template (générique : ['home'])."""
    return list(TEMPLATE_CONFIGS.get(template_id, GENERIC_CONFIG))


def _seeds_for(config: PageConfig, page: str) -> List[BlockSeed]:
    if page in config:
        return config[page]
    return config.get("home", GENERIC_CONFIG["home"])


def generate_default_layouts(template_id: str, selected_pages: Iterable[str]) -> PageLayouts:
    """
    Génère un PageLayout par page sélectionnée.
    Chaque instance reçoit un id neuf, order = position, et une copie des propriétés
    (le catalogue n'est jamais partagé avec un layout projet).
    """
    config = TEMPLATE_CONFIGS.get(template_id) or GENERIC_CONFIG
    layouts: PageLayouts = {}

    for page in selected_pages:
        layouts[page] = PageLayout(blocks=[
            BlockInstance(
                instance_id=str(uuid.uuid4()),
                block_type=block_type,
                order=index,
                properties=dict(properties),
            )
            for index, (block_type, properties) in enumerate(_seeds_for(config, page))
        ])

    return layouts
