"""
Tests persistance — db_create_project / db_get_page_layouts / db_save_page_layouts / to_snapshot
page_layouts : NULL = jamais initialisé → défauts (non persistés) ; "{}" = vidé, respecté.
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json
import pytest

from affiliate_builder import database as dbm
from affiliate_builder.core.schemas import BlockInstance, PageLayout
from affiliate_builder.models import CtaInput, DomainInput, GenerationDB, ProductInput, ProjectCreate


@pytest.fixture
def db(tmp_path):
    dbm.init_db(f"sqlite:///{tmp_path / 'test.db'}")
    session = dbm.SessionLocal()
    yield session
    session.close()


def make_project(db, **kwargs):
    data = dict(name="Acme Gear", brand_name="Acme", template="landing", selected_pages=["home", "products"])
    data.update(kwargs)
    return dbm.db_create_project(db, ProjectCreate(**data))


# ── Projets ───────────────────────────────────────────────────────────────

class TestProjects:
    def test_creation_et_slug(self, db):
        p = make_project(db)
        assert p.slug == "acme-gear"
        assert p.page_layouts is None
        assert dbm.db_get_project(db, p.id) is p

    def test_relations(self, db):
        p = make_project(db,
                         products=[ProductInput(asin="B1")],
                         ctas=[CtaInput(name="hero", label="Go", placement="product-card")],
                         domains=[DomainInput(domain="acme.com", is_primary=True)])
        snap = dbm.db_load_project(db, p.id)
        assert [x.asin for x in snap.products] == ["B1"]
        assert snap.ctas[0].placement == "product-card"
        assert snap.domains[0].is_primary is True

    def test_introuvable(self, db):
        assert dbm.db_get_project(db, "nope") is None
        assert dbm.db_load_project(db, "nope") is None

    def test_slug_deja_pris_suffixe(self, db):
        a = make_project(db)
        b = make_project(db)
        c = make_project(db, name="Other", slug="acme-gear")
        assert (a.slug, b.slug, c.slug) == ("acme-gear", "acme-gear-2", "acme-gear-3")

    def test_slugify(self):
        assert dbm.slugify("Best Coffee Makers 2026!") == "best-coffee-makers-2026"
        assert dbm.slugify("!!!") == "site"


# ── Layouts ───────────────────────────────────────────────────────────────

class TestLayouts:
    def test_null_defauts_non_persistes(self, db):
        p = make_project(db)
        layouts = dbm.db_get_page_layouts(p)
        assert set(layouts) == {"home", "products"}
        assert layouts["home"].blocks[0].block_type == "nav-simple"
        db.refresh(p)
        assert p.page_layouts is None

    def test_snapshot_null(self, db):
        p = make_project(db)
        assert dbm.db_load_project(db, p.id).page_layouts is None

    def test_vide_respecte(self, db):
        p = make_project(db)
        dbm.db_save_page_layouts(db, p, {})
        assert p.page_layouts == "{}"
        assert dbm.db_get_page_layouts(p) == {}

    def test_page_sans_bloc_respectee(self, db):
        p = make_project(db)
        dbm.db_save_page_layouts(db, p, {"home": PageLayout()})
        assert dbm.db_get_page_layouts(p)["home"].blocks == []

    def test_aller_retour_camel_case(self, db):
        p = make_project(db)
        block = BlockInstance(instance_id="b1", block_type="hero-standard", order=0, properties={"title": "Hi"})
        dbm.db_save_page_layouts(db, p, {"home": PageLayout(blocks=[block])})
        stored = json.loads(p.page_layouts)
        assert stored["home"]["blocks"][0]["instanceId"] == "b1"
        assert stored["home"]["blocks"][0]["blockType"] == "hero-standard"
        assert dbm.db_get_page_layouts(p)["home"].blocks[0].properties == {"title": "Hi"}

    def test_json_invalide_defauts(self, db):
        p = make_project(db)
        p.page_layouts = "{broken"
        db.commit()
        assert set(dbm.db_get_page_layouts(p)) == {"home", "products"}

    def test_json_helpers(self):
        assert dbm.jl(None, []) == []
        assert dbm.jl("nope", {}) == {}
        assert dbm.jl('["a"]') == ["a"]
        assert dbm.jd({"é": 1}) == '{"é": 1}'


# ── Générations ───────────────────────────────────────────────────────────

class TestGenerations:
    def test_versions_croissantes(self, db):
        p = make_project(db)
        assert dbm.db_next_version(db, p.id) == 1
        dbm.db_create_generation(db, GenerationDB(project_id=p.id, version=1))
        dbm.db_create_generation(db, GenerationDB(project_id=p.id, version=2))
        assert dbm.db_next_version(db, p.id) == 3
        assert [g.version for g in dbm.db_list_generations(db, p.id)] == [2, 1]

    def test_mise_a_jour(self, db):
        p = make_project(db)
        gen = dbm.db_create_generation(db, GenerationDB(project_id=p.id, version=1))
        dbm.db_update_generation(db, gen, status="completed", zip_size=123)
        assert gen.status == "completed" and gen.zip_size == 123

    def test_recherche_par_version(self, db):
        p = make_project(db)
        dbm.db_create_generation(db, GenerationDB(project_id=p.id, version=1, status="completed"))
        dbm.db_create_generation(db, GenerationDB(project_id=p.id, version=2, status="failed"))
        assert dbm.db_get_generation(db, p.id, 2).status == "failed"
        assert dbm.db_get_generation(db, p.id, 9) is None
        assert dbm.db_latest_generation(db, p.id).version == 2
        assert dbm.db_latest_generation(db, p.id, "completed").version == 1
        assert dbm.db_latest_generation(db, "nope") is None
