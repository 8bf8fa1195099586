"""
Types de base du registre de blocs.
BlockType = énumération fermée des identifiants connus (dispatch renderer).
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BlockCategory(str, Enum):
    HERO       = "hero"
    NAVIGATION = "navigation"
    PRODUCTS   = "products"
    REVIEWS    = "reviews"
    CONTENT    = "content"
    CTA        = "cta"
    FOOTER     = "footer"


class PropertyFieldType(str, Enum):
    TEXT         = "text"
    TEXTAREA     = "textarea"
    IMAGE        = "image"
    SELECT       = "select"
    NUMBER       = "number"
    BOOLEAN      = "boolean"
    PRODUCT_REF  = "productRef"
    PRODUCT_REFS = "productRefs"
    CTA_REF      = "ctaRef"


class BlockType(str, Enum):
    NAV_SIMPLE         = "nav-simple"
    HERO_STANDARD      = "hero-standard"
    FEATURES_GRID      = "features-grid"
    PRODUCTS_GRID      = "products-grid"
    PRODUCTS_SPOTLIGHT = "products-spotlight"
    REVIEWS_SUMMARY    = "reviews-summary"
    COMPARISON_TABLE   = "comparison-table"
    TESTIMONIALS       = "testimonials"
    CTA_BANNER         = "cta-banner"
    CONTENT_TEXT       = "content-text"
    CONTENT_TRUST      = "content-trust"
    CONTENT_FAQ        = "content-faq"
    FOOTER_STANDARD    = "footer-standard"

    @classmethod
    def parse(cls, value: Any) -> Optional["BlockType"]:
        """Identifiant persisté → BlockType, ou None si inconnu."""
        try:
            return cls(value)
        except ValueError:
            return None


class SelectOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class PropertyField(BaseModel):
    """Champ éditable d'un type de bloc (panneau de propriétés)."""
    model_config = ConfigDict(frozen=True)

    name:          str
    label:         str
    type:          PropertyFieldType
    required:      bool                         = False
    default_value: Any                          = None
    options:       Optional[List[SelectOption]] = None
    min:           Optional[float]              = None
    max:           Optional[float]              = None
    placeholder:   Optional[str]                = None


class BlockTypeDefinition(BaseModel):
    """Entrée du registre, immuable, chargée une fois au démarrage."""
    model_config = ConfigDict(frozen=True)

    id:                 str
    name:               str
    category:           BlockCategory
    description:        str                 = ""
    cta_slots:          List[str]           = Field(default_factory=list)
    properties:         List[PropertyField] = Field(default_factory=list)
    default_properties: Dict[str, Any]      = Field(default_factory=dict)

    def property_names(self) -> List[str]:
        return [p.name for p in self.properties]

    def get_property(self, name: str) -> Optional[PropertyField]:
        return next((p for p in self.properties if p.name == name), None)
