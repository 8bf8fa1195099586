"""
Fournisseur de contenu IA — copie marketing structurée (ContentBundle).

Adaptateurs : OpenAI, Anthropic (SDK officiels, importés à l'appel).
Sélection : AI_PROVIDER explicite, sinon premier provider dont la clé est présente.
fetch_content() ne lève jamais : échec → warning + None → copie par défaut.
"""
import json
import logging
import re
from typing import Dict, List, Optional, Protocol, Type

from pydantic import BaseModel, Field

from .. import config
from ..context.content import ContentBundle
from ..core.schemas import Product, ProjectSnapshot

log = logging.getLogger(__name__)

MAX_TOKENS = 2500

SYSTEM_PROMPT = ("You are an expert affiliate marketing copywriter. "
                 "Return only valid JSON without markdown formatting.")

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


class ContentError(RuntimeError):
    """Réponse IA absente ou non parsable."""


class ContentRequest(BaseModel):
    brand_name:        str
    brand_description: Optional[str] = None
    products:          List[Product] = Field(default_factory=list)
    template:          str           = "modern"
    language:          str           = "en"

    @classmethod
    def from_project(cls, project: ProjectSnapshot) -> "ContentRequest":
        return cls(
            brand_name=project.brand_name,
            brand_description=project.brand_description,
            products=sorted(project.products, key=lambda p: p.sort_order),
            template=project.template,
        )


def build_prompt(request: ContentRequest) -> str:
    product_list = "\n".join(
        f"{i}. {p.custom_title or p.title or f'Product {p.asin}'} (ASIN {p.asin})"
        for i, p in enumerate(request.products, 1)
    ) or "No products added yet"
    n_products = len(request.products) or 3

    return f"""You are a professional copywriter for affiliate marketing websites. Generate compelling, conversion-focused content for a "{request.template}" template website, written in language "{request.language}".

BRAND INFORMATION:
- Brand Name: {request.brand_name}
- Brand Description: {request.brand_description or 'Not provided'}
- Products ({len(request.products)}):
{product_list}

Return a JSON object with this structure:
{{
  "hero": {{"badge": "max 3 words", "title": "max 10 words", "description": "2-3 sentences"}},
  "features": [{{"icon": "single emoji or symbol", "title": "3-4 words", "description": "1 sentence"}}],
  "products": [{{"asin": "keep the original ASIN", "title": "max 8 words", "description": "2 sentences", "rating": "like 4.8"}}],
  "testimonials": [{{"text": "2-3 sentences", "name": "first name and last initial", "title": "like Verified Buyer", "initial": "first letter of name"}}],
  "comparison": {{"features": [{{"name": "...", "description": "..."}}]}},
  "cta": {{"sectionTitle": "...", "sectionDescription": "1-2 sentences", "buttonLabel": "2-4 words"}},
  "meta": {{"title": "50-60 chars", "description": "150-160 chars", "tagline": "3-6 words"}},
  "featuresSection": {{"title": "...", "subtitle": "..."}},
  "productsSection": {{"title": "...", "subtitle": "..."}},
  "testimonialsSection": {{"title": "...", "subtitle": "..."}},
  "comparisonSection": {{"title": "...", "subtitle": "..."}}
}}

Generate exactly 4 features, {n_products} products (match the input), 3 testimonials, and 4 comparison features.
Return ONLY valid JSON, no markdown code blocks."""


def parse_content(raw: str) -> ContentBundle:
    """Texte brut du modèle → ContentBundle. Tolère un bloc ```json."""
    text = _FENCE.sub("", (raw or "").strip())
    if not text:
        raise ContentError("Réponse IA vide")
    try:
        return ContentBundle.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValueError) as e:
        raise ContentError(f"Réponse IA non parsable : {e}") from e


# ── Adaptateurs ─────────────────────────────────────────────────────────────

class ContentProvider(Protocol):
    name: str

    def generate(self, request: ContentRequest) -> ContentBundle: ...


class OpenAIContentProvider:
    name = "openai"

    def __init__(self, api_key: str, model: Optional[str] = None, temperature: Optional[float] = None):
        self.api_key     = api_key
        self.model       = model or config.ai_model(self.name)
        self.temperature = config.ai_temperature() if temperature is None else temperature

    def generate(self, request: ContentRequest) -> ContentBundle:
        import openai
        r = openai.OpenAI(api_key=self.api_key).chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_prompt(request)},
            ],
            temperature=self.temperature,
            max_tokens=MAX_TOKENS,
        )
        return parse_content(r.choices[0].message.content or "")


class AnthropicContentProvider:
    name = "anthropic"

    def __init__(self, api_key: str, model: Optional[str] = None, temperature: Optional[float] = None):
        self.api_key     = api_key
        self.model       = model or config.ai_model(self.name)
        self.temperature = config.ai_temperature() if temperature is None else temperature

    def generate(self, request: ContentRequest) -> ContentBundle:
        import anthropic
        r = anthropic.Anthropic(api_key=self.api_key).messages.create(
            model=self.model,
            max_tokens=MAX_TOKENS,
            temperature=self.temperature,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": build_prompt(request)}],
        )
        return parse_content(r.content[0].text if r.content else "")


PROVIDERS: Dict[str, Type] = {
    "openai":    OpenAIContentProvider,
    "anthropic": AnthropicContentProvider,
}


def configured_providers() -> List[str]:
    return [name for name in PROVIDERS if config.ai_api_key(name)]


def get_content_provider(name: Optional[str] = None) -> Optional[ContentProvider]:
    """
    Provider demandé (ou AI_PROVIDER) s'il a une clé, sinon le premier configuré.
    "none" ou aucune clé → None (copie par défaut).
    """
    name = (name or config.ai_provider_name() or "").lower() or None
    if name == "none":
        return None

    candidates = configured_providers()
    if name in candidates:
        chosen = name
    elif candidates:
        if name:
            log.warning("Provider IA %s non configuré, repli sur %s", name, candidates[0])
        chosen = candidates[0]
    else:
        return None

    return PROVIDERS[chosen](api_key=config.ai_api_key(chosen))


def fetch_content(
    request: ContentRequest,
    provider: Optional[ContentProvider] = None,
) -> Optional[ContentBundle]:
    """Génère le contenu IA ; None si désactivé ou en échec (jamais d'exception)."""
    provider = provider or get_content_provider()
    if provider is None:
        log.info("Aucun provider IA configuré, copie par défaut")
        return None
    try:
        content = provider.generate(request)
        log.info("Contenu IA généré via %s pour %s", provider.name, request.brand_name)
        return content
    except Exception as e:
        log.warning("Génération IA échouée (%s) : %s, copie par défaut", provider.name, e)
        return None
