"""
Registre des blocs — catalogue statique des types de blocs.

Ordre de déclaration = ordre renvoyé par get_blocks_by_category().
Aucune mutation à l'exécution.
"""
from typing import Any, Dict, List, Optional, Union

from .base import (
    BlockCategory,
    BlockType,
    BlockTypeDefinition,
    PropertyField,
    PropertyFieldType as T,
    SelectOption,
)


def _options(*pairs: tuple) -> List[SelectOption]:
    return [SelectOption(label=label, value=value) for label, value in pairs]


_ALIGNMENT = (("Left", "left"), ("Center", "center"), ("Right", "right"))


BLOCK_REGISTRY: tuple = (
    # Hero
    BlockTypeDefinition(
        id=BlockType.HERO_STANDARD.value,
        name="Hero - Standard",
        category=BlockCategory.HERO,
        description="Full-width hero with headline, description, and CTA",
        cta_slots=["hero-main", "hero-secondary"],
        properties=[
            PropertyField(name="title", label="Title", type=T.TEXT, required=True, default_value="Welcome to Our Site"),
            PropertyField(name="subtitle", label="Subtitle", type=T.TEXTAREA, default_value=""),
            PropertyField(name="backgroundImage", label="Background Image", type=T.IMAGE),
            PropertyField(name="alignment", label="Alignment", type=T.SELECT, options=_options(*_ALIGNMENT), default_value="center"),
            PropertyField(name="ctaId", label="Primary CTA", type=T.CTA_REF),
        ],
        default_properties={
            "title": "Welcome to Our Site",
            "subtitle": "",
            "backgroundImage": "",
            "alignment": "center",
            "ctaId": None,
        },
    ),

    # Navigation
    BlockTypeDefinition(
        id=BlockType.NAV_SIMPLE.value,
        name="Navigation - Simple",
        category=BlockCategory.NAVIGATION,
        description="Simple header with logo and menu",
        cta_slots=["header-cta"],
        properties=[
            PropertyField(name="logoUrl", label="Logo", type=T.IMAGE),
            PropertyField(name="sticky", label="Sticky Header", type=T.BOOLEAN, default_value=True),
            PropertyField(name="showSearch", label="Show Search", type=T.BOOLEAN, default_value=False),
        ],
        default_properties={"logoUrl": "", "sticky": True, "showSearch": False},
    ),

    # Produits
    BlockTypeDefinition(
        id=BlockType.PRODUCTS_GRID.value,
        name="Product Grid",
        category=BlockCategory.PRODUCTS,
        description="Grid layout for product cards",
        cta_slots=["product-card-cta"],
        properties=[
            PropertyField(name="productIds", label="Products", type=T.PRODUCT_REFS, required=True),
            PropertyField(name="columns", label="Columns", type=T.NUMBER, min=2, max=4, default_value=3),
            PropertyField(name="showRatings", label="Show Ratings", type=T.BOOLEAN, default_value=True),
            PropertyField(name="showPrices", label="Show Prices", type=T.BOOLEAN, default_value=True),
        ],
        default_properties={"productIds": [], "columns": 3, "showRatings": True, "showPrices": True},
    ),
    BlockTypeDefinition(
        id=BlockType.PRODUCTS_SPOTLIGHT.value,
        name="Product Spotlight",
        category=BlockCategory.PRODUCTS,
        description="Featured product with large image and details",
        cta_slots=["spotlight-cta", "spotlight-secondary"],
        properties=[
            PropertyField(name="productId", label="Product", type=T.PRODUCT_REF, required=True),
            PropertyField(name="layout", label="Layout", type=T.SELECT,
                          options=_options(("Image Left", "left"), ("Image Right", "right")), default_value="left"),
            PropertyField(name="showSpecs", label="Show Specifications", type=T.BOOLEAN, default_value=True),
            PropertyField(name="ctaId", label="CTA Button", type=T.CTA_REF),
        ],
        default_properties={"productId": None, "layout": "left", "showSpecs": True, "ctaId": None},
    ),

    # Avis
    BlockTypeDefinition(
        id=BlockType.REVIEWS_SUMMARY.value,
        name="Review Summary",
        category=BlockCategory.REVIEWS,
        description="Overall score with pros, cons, and verdict",
        cta_slots=["review-cta"],
        properties=[
            PropertyField(name="productId", label="Product", type=T.PRODUCT_REF, required=True),
            PropertyField(name="showProscons", label="Show Pros/Cons", type=T.BOOLEAN, default_value=True),
            PropertyField(name="rating", label="Rating (1-5)", type=T.NUMBER, min=1, max=5, default_value=4),
            PropertyField(name="verdict", label="Verdict", type=T.TEXTAREA),
        ],
        default_properties={"productId": None, "showProscons": True, "rating": 4, "verdict": ""},
    ),

    # Contenu
    BlockTypeDefinition(
        id=BlockType.CONTENT_TEXT.value,
        name="Content - Text Block",
        category=BlockCategory.CONTENT,
        description="Rich text content section",
        properties=[
            PropertyField(name="heading", label="Heading", type=T.TEXT),
            PropertyField(name="body", label="Body", type=T.TEXTAREA, required=True),
            PropertyField(name="alignment", label="Alignment", type=T.SELECT, options=_options(*_ALIGNMENT), default_value="left"),
        ],
        default_properties={"heading": "", "body": "", "alignment": "left"},
    ),

    # CTA
    BlockTypeDefinition(
        id=BlockType.CTA_BANNER.value,
        name="CTA Banner",
        category=BlockCategory.CTA,
        description="Full-width call-to-action banner",
        cta_slots=["banner-cta"],
        properties=[
            PropertyField(name="ctaId", label="CTA", type=T.CTA_REF, required=True),
            PropertyField(name="style", label="Style", type=T.SELECT,
                          options=_options(("Primary", "primary"), ("Secondary", "secondary"), ("Accent", "accent")),
                          default_value="primary"),
            PropertyField(name="fullWidth", label="Full Width", type=T.BOOLEAN, default_value=True),
            PropertyField(name="text", label="Banner Text", type=T.TEXT),
        ],
        default_properties={"ctaId": None, "style": "primary", "fullWidth": True, "text": ""},
    ),

    BlockTypeDefinition(
        id=BlockType.CONTENT_TRUST.value,
        name="Trust Badges",
        category=BlockCategory.CONTENT,
        description="Security and trust indicators",
        properties=[
            PropertyField(name="showSecurePayment", label="Secure Payment", type=T.BOOLEAN, default_value=True),
            PropertyField(name="showMoneyBack", label="Money Back Guarantee", type=T.BOOLEAN, default_value=True),
            PropertyField(name="showFreeShipping", label="Free Shipping", type=T.BOOLEAN, default_value=False),
            PropertyField(name="showSupport", label="24/7 Support", type=T.BOOLEAN, default_value=True),
            PropertyField(name="layout", label="Layout", type=T.SELECT,
                          options=_options(("Horizontal", "horizontal"), ("Grid", "grid")), default_value="horizontal"),
        ],
        default_properties={
            "showSecurePayment": True,
            "showMoneyBack": True,
            "showFreeShipping": False,
            "showSupport": True,
            "layout": "horizontal",
        },
    ),

    BlockTypeDefinition(
        id=BlockType.CONTENT_FAQ.value,
        name="FAQ",
        category=BlockCategory.CONTENT,
        description="Accordion-style FAQ section",
        properties=[
            PropertyField(name="heading", label="Section Heading", type=T.TEXT, default_value="Frequently Asked Questions"),
            PropertyField(name="expandable", label="Expandable Items", type=T.BOOLEAN, default_value=True),
            PropertyField(name="items", label="FAQ Items (JSON)", type=T.TEXTAREA,
                          placeholder='[{"question": "...", "answer": "..."}]'),
        ],
        default_properties={"heading": "Frequently Asked Questions", "expandable": True, "items": "[]"},
    ),

    # Footer
    BlockTypeDefinition(
        id=BlockType.FOOTER_STANDARD.value,
        name="Footer - Standard",
        category=BlockCategory.FOOTER,
        description="Multi-column footer with links",
        cta_slots=["footer-cta"],
        properties=[
            PropertyField(name="copyright", label="Copyright Text", type=T.TEXT, default_value="© 2024 All rights reserved"),
            PropertyField(name="showSocialLinks", label="Show Social Links", type=T.BOOLEAN, default_value=True),
            PropertyField(name="columns", label="Columns", type=T.NUMBER, min=2, max=4, default_value=3),
        ],
        default_properties={"copyright": "© 2024 All rights reserved", "showSocialLinks": True, "columns": 3},
    ),

    BlockTypeDefinition(
        id=BlockType.FEATURES_GRID.value,
        name="Features Grid",
        category=BlockCategory.CONTENT,
        description="Grid of feature cards with icons",
        properties=[
            PropertyField(name="title", label="Section Title", type=T.TEXT, default_value="Why Choose Us?"),
            PropertyField(name="subtitle", label="Subtitle", type=T.TEXT, default_value="Discover the advantages of our products."),
            PropertyField(name="columns", label="Columns", type=T.NUMBER, min=2, max=4, default_value=4),
        ],
        default_properties={
            "title": "Why Choose Us?",
            "subtitle": "Discover the advantages of our products.",
            "columns": 4,
        },
    ),

    BlockTypeDefinition(
        id=BlockType.COMPARISON_TABLE.value,
        name="Comparison Table",
        category=BlockCategory.CONTENT,
        description="Product comparison table",
        properties=[
            PropertyField(name="title", label="Section Title", type=T.TEXT, default_value="Why We Stand Out"),
            PropertyField(name="subtitle", label="Subtitle", type=T.TEXT, default_value="See how we compare to the competition."),
        ],
        default_properties={
            "title": "Why We Stand Out",
            "subtitle": "See how we compare to the competition.",
        },
    ),

    BlockTypeDefinition(
        id=BlockType.TESTIMONIALS.value,
        name="Testimonials",
        category=BlockCategory.REVIEWS,
        description="Customer testimonials section",
        properties=[
            PropertyField(name="title", label="Section Title", type=T.TEXT, default_value="What Our Customers Say"),
            PropertyField(name="subtitle", label="Subtitle", type=T.TEXT, default_value="Real feedback from satisfied users."),
        ],
        default_properties={
            "title": "What Our Customers Say",
            "subtitle": "Real feedback from satisfied users.",
        },
    ),
)

_BY_ID: Dict[str, BlockTypeDefinition] = {b.id: b for b in BLOCK_REGISTRY}


# ── Lookups ─────────────────────────────────────────────────────────────────

def get_block_definition(block_id: str) -> Optional[BlockTypeDefinition]:
    """Lookup exact par id. Inconnu → None (l'appelant décide : 404 ou skip)."""
    return _BY_ID.get(block_id)


def get_blocks_by_category(category: Union[BlockCategory, str]) -> List[BlockTypeDefinition]:
    """Filtre le catalogue, ordre de déclaration conservé."""
    value = category.value if isinstance(category, BlockCategory) else category
    return [b for b in BLOCK_REGISTRY if b.category.value == value]


def default_properties_for(block_id: str) -> Dict[str, Any]:
    """Copie des propriétés par défaut d'un type (état initial d'un bloc ajouté)."""
    definition = get_block_definition(block_id)
    return dict(definition.default_properties) if definition else {}


def effective_properties(block_id: str, overrides: Dict[str, Any]) -> Dict[str, Any]:
    """{**defaults, **overrides} : une clé absente prend la valeur par défaut du type."""
    return {**default_properties_for(block_id), **(overrides or {})}


# ── Validation (hors chemin de rendu) ───────────────────────────────────────

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip()) or value == []


def validate_properties(
    definition: BlockTypeDefinition,
    properties: Dict[str, Any],
    partial: bool = False,
) -> List[str]:
    """
    Vérifie des propriétés contre le schéma du type de bloc.
    Retourne la liste des erreurs (vide = valide). Les clés non déclarées sont ignorées.
    partial=True : overrides seuls, les champs obligatoires absents sont tolérés.
    """
    errors = []
    for field in definition.properties:
        value = properties.get(field.name)

        if _is_blank(value):
            if field.required and not partial:
                errors.append(f"{field.name} : champ obligatoire")
            continue

        if field.type == T.NUMBER:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"{field.name} : nombre attendu")
                continue
            if field.min is not None and value < field.min:
                errors.append(f"{field.name} : minimum {field.min:g}")
            if field.max is not None and value > field.max:
                errors.append(f"{field.name} : maximum {field.max:g}")
        elif field.type == T.BOOLEAN:
            if not isinstance(value, bool):
                errors.append(f"{field.name} : booléen attendu")
        elif field.type == T.SELECT:
            allowed = [o.value for o in field.options or []]
            if value not in allowed:
                errors.append(f"{field.name} : valeur {value!r} hors options {allowed}")
        elif field.type == T.PRODUCT_REFS:
            if not isinstance(value, list):
                errors.append(f"{field.name} : liste attendue")
        elif field.type in (T.TEXT, T.TEXTAREA, T.IMAGE):
            if not isinstance(value, str):
                errors.append(f"{field.name} : texte attendu")
    return errors


def check_registry() -> List[str]:
    """Clés de default_properties non déclarées dans properties (bug de registre)."""
    problems = []
    for definition in BLOCK_REGISTRY:
        declared = set(definition.property_names())
        for key in definition.default_properties:
            if key not in declared:
                problems.append(f"{definition.id}.{key} : propriété par défaut non déclarée")
    return problems
