"""
Tests build_render_context(project, content, assets, year)
Priorités : custom_title > titre IA > titre Amazon > "Product {asin}"
            CTA : custom_url > produit lié > premier produit > boutique
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from pathlib import Path

from affiliate_builder.assets import BrandAssets
from affiliate_builder.context import ContentBundle, build_render_context
from affiliate_builder.context.builder import affiliate_url, amazon_image_url, store_url
from affiliate_builder.context.content import coalesce, default_copy, is_missing
from affiliate_builder.core.colors import darken, normalize_hex
from affiliate_builder.core.schemas import CTA, BrandColors, Product, ProjectSnapshot


# ── Helpers ───────────────────────────────────────────────────────────────

def make_project(**kwargs):
    base = dict(
        id="p1", slug="acme", brand_name="Acme", brand_description="Gear for makers",
        amazon_tracking_id="acme-20", amazon_marketplace="amazon.com",
    )
    base.update(kwargs)
    return ProjectSnapshot(**base)


PRODUCTS = [
    Product(id="a", asin="B000000002", title="Amazon title", sort_order=1),
    Product(id="b", asin="B000000001", sort_order=0),
]


# ── coalesce ──────────────────────────────────────────────────────────────

class TestCoalesce:
    def test_premiere_valeur_presente(self):
        assert coalesce(None, "", "  ", "x", "y") == "x"

    def test_litteral_final(self):
        assert coalesce(None, "", "fallback") == "fallback"

    def test_zero_et_false_presents(self):
        assert coalesce(0, 5) == 0
        assert coalesce(False, True) is False

    def test_is_missing(self):
        assert is_missing(None) and is_missing("  ")
        assert not is_missing([])


# ── URLs ──────────────────────────────────────────────────────────────────

class TestUrls:
    def test_affiliate_url(self):
        assert affiliate_url("B0TEST", "amazon.fr", "tag-21") == "https://www.amazon.fr/dp/B0TEST?tag=tag-21"

    def test_affiliate_url_sans_tag(self):
        assert affiliate_url("B0TEST", "amazon.com", "") == "https://www.amazon.com/dp/B0TEST"

    def test_store_url(self):
        assert store_url("amazon.de", "x-21") == "https://www.amazon.de/?tag=x-21"

    def test_image_par_asin(self):
        assert "B0TEST" in amazon_image_url("B0TEST")


# ── Couleurs ──────────────────────────────────────────────────────────────

class TestColors:
    def test_normalize(self):
        assert normalize_hex("#ABC") == "#aabbcc"
        assert normalize_hex("nope", "#000000") == "#000000"

    def test_darken(self):
        assert darken("#ffffff", 15) == "#d8d8d8"

    def test_primary_dark_derive(self):
        ctx = build_render_context(make_project(brand_colors=BrandColors(primary="#ffffff")), year=2026)
        assert ctx.primary_color == "#ffffff"
        assert ctx.primary_dark == "#d8d8d8"

    def test_couleur_invalide_defaut(self):
        ctx = build_render_context(make_project(brand_colors=BrandColors(primary="red")), year=2026)
        assert ctx.primary_color == "#2563eb"


# ── Produits ──────────────────────────────────────────────────────────────

class TestProducts:
    def test_tri_par_sort_order(self):
        ctx = build_render_context(make_project(products=PRODUCTS), year=2026)
        assert [p.title for p in ctx.products] == ["Product B000000001", "Amazon title"]

    def test_custom_title_prioritaire(self):
        product = Product(asin="B1", title="Amazon", custom_title="Custom")
        content = ContentBundle.model_validate({"products": [{"asin": "B1", "title": "AI"}]})
        ctx = build_render_context(make_project(products=[product]), content=content, year=2026)
        assert ctx.products[0].title == "Custom"

    def test_titre_ia_avant_amazon(self):
        product = Product(asin="B1", title="Amazon")
        content = ContentBundle.model_validate({"products": [{"asin": "B1", "title": "AI", "rating": "4.2"}]})
        ctx = build_render_context(make_project(products=[product]), content=content, year=2026)
        assert ctx.products[0].title == "AI"
        assert ctx.products[0].rating == "4.2"

    def test_custom_title_blanc_ignore(self):
        product = Product(asin="B1", title="Amazon", custom_title="   ")
        ctx = build_render_context(make_project(products=[product]), year=2026)
        assert ctx.products[0].title == "Amazon"

    def test_url_et_image(self):
        ctx = build_render_context(make_project(products=[Product(asin="B1")]), year=2026)
        card = ctx.products[0]
        assert card.affiliate_url == "https://www.amazon.com/dp/B1?tag=acme-20"
        assert card.image_url == amazon_image_url("B1")
        assert card.price == "Check Price"
        assert card.cta_label == "View on Amazon"

    def test_label_cta_product_card(self):
        ctas = [CTA(name="card", label="Buy it", placement="product-card")]
        ctx = build_render_context(make_project(products=[Product(asin="B1")], ctas=ctas), year=2026)
        assert ctx.products[0].cta_label == "Buy it"

    def test_aucun_produit(self):
        ctx = build_render_context(make_project(), year=2026)
        assert ctx.products == []
        assert ctx.comparison_products == []
        assert all(row.values == [] for row in ctx.comparison_features)


# ── Comparatif ────────────────────────────────────────────────────────────

class TestComparison:
    def test_trois_premiers_produits(self):
        products = [Product(asin=f"B{i}", sort_order=i) for i in range(5)]
        ctx = build_render_context(make_project(products=products), year=2026)
        assert [p.name for p in ctx.comparison_products] == ["Product B0", "Product B1", "Product B2"]

    def test_lignes_fixes(self):
        products = [Product(asin=f"B{i}", sort_order=i) for i in range(3)]
        ctx = build_render_context(make_project(products=products), year=2026)
        rows = {r.name: r.values for r in ctx.comparison_features}
        assert rows["Quality Rating"] == ["★★★★★"] * 3
        assert rows["Our Pick"] == ["✓", "—", "—"]


# ── CTA principal ─────────────────────────────────────────────────────────

class TestMainCta:
    def test_custom_url(self):
        ctas = [CTA(name="hero", label="Go", placement="hero", custom_url="https://example.com/go")]
        ctx = build_render_context(make_project(products=PRODUCTS, ctas=ctas), year=2026)
        assert ctx.main_cta_url == "https://example.com/go"
        assert ctx.main_cta_label == "Go"

    def test_produit_lie(self):
        ctas = [CTA(name="hero", label="Go", placement="hero", product_id="a")]
        ctx = build_render_context(make_project(products=PRODUCTS, ctas=ctas), year=2026)
        assert ctx.main_cta_url == affiliate_url("B000000002", "amazon.com", "acme-20")

    def test_premier_produit(self):
        ctx = build_render_context(make_project(products=PRODUCTS), year=2026)
        assert ctx.main_cta_url == affiliate_url("B000000001", "amazon.com", "acme-20")
        assert ctx.main_cta_label == "Shop Now"

    def test_boutique(self):
        ctx = build_render_context(make_project(), year=2026)
        assert ctx.main_cta_url == "https://www.amazon.com/?tag=acme-20"

    def test_cta_inactif_ignore(self):
        ctas = [CTA(name="hero", label="Off", placement="hero", custom_url="https://x", is_active=False)]
        ctx = build_render_context(make_project(ctas=ctas), year=2026)
        assert ctx.main_cta_label == "Shop Now"

    def test_repli_premier_cta_actif(self):
        ctas = [CTA(name="banner", label="Deals", placement="banner", custom_url="https://deals")]
        ctx = build_render_context(make_project(ctas=ctas), year=2026)
        assert ctx.main_cta_url == "https://deals"


# ── Copie ─────────────────────────────────────────────────────────────────

class TestCopy:
    def test_copie_par_defaut(self):
        ctx = build_render_context(make_project(), year=2026)
        assert ctx.hero_title == "Discover the Best of Acme"
        assert ctx.hero_description == "Gear for makers"
        assert len(ctx.features) == 4
        assert [t.name for t in ctx.testimonials] == ["Sarah M.", "James T.", "Emily R."]
        assert "Acme is a participant" in ctx.affiliate_disclosure

    def test_copie_ia(self):
        content = ContentBundle.model_validate({
            "hero": {"title": "AI Hero", "badge": ""},
            "featuresSection": {"title": "AI Features"},
            "features": [{"icon": "!", "title": "One", "description": "d"}],
        })
        ctx = build_render_context(make_project(), content=content, year=2026)
        assert ctx.hero_title == "AI Hero"
        assert ctx.hero_badge == "TOP RATED"
        assert ctx.features_title == "AI Features"
        assert [f.title for f in ctx.features] == ["One", "Verified Quality", "Fast Delivery", "Buy With Confidence"]

    def test_listes_taille_fixe(self):
        content = ContentBundle.model_validate({
            "features": [{"icon": "*", "title": f"F{i}", "description": "d"} for i in range(6)],
            "testimonials": [{"name": "Ann", "title": "Buyer", "text": "Great"}],
        })
        ctx = build_render_context(make_project(), content=content, year=2026)
        assert [f.title for f in ctx.features] == ["F0", "F1", "F2", "F3"]
        assert [t.name for t in ctx.testimonials] == ["Ann", "James T.", "Emily R."]

    def test_description_absente(self):
        copy = default_copy("Acme")
        assert copy["meta_description"] == "Discover the best products hand-picked by Acme."

    def test_annee(self):
        assert build_render_context(make_project(), year=2031).year == 2031


# ── Assets / données template ─────────────────────────────────────────────

class TestTemplateData:
    def test_assets(self):
        assets = BrandAssets(logo=Path("/tmp/x/logo.png"))
        ctx = build_render_context(make_project(), assets=assets, year=2026)
        assert ctx.has_logo is True
        assert ctx.logo_url == "assets/logo.png"
        assert ctx.has_favicon is False

    def test_echappement_html(self):
        ctx = build_render_context(make_project(brand_name="<b>A&B</b>"), year=2026)
        data = ctx.template_data()
        assert data["brand_name"] == "&lt;b&gt;A&amp;B&lt;/b&gt;"
        assert data["primaryColor"] == ctx.primary_color

    def test_sans_echappement(self):
        ctx = build_render_context(make_project(brand_name="A&B"), year=2026)
        assert ctx.template_data(escape_html=False)["brand_name"] == "A&B"
