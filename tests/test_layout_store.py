"""
Tests LayoutEditor — add / remove / reorder / update / switch_page / save
Vérifié après chaque mutation : order == 0..n-1 dans l'ordre de la liste.
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import gc
import threading
from unittest.mock import MagicMock
import pytest

from affiliate_builder.core.schemas import BlockInstance, PageLayout
from affiliate_builder.layout import LayoutEditor, LayoutError, generate_default_layouts, project_lock
from affiliate_builder.layout import store


# ── Helpers ───────────────────────────────────────────────────────────────

def make_editor(ids=("A", "B", "C", "D"), persist=None):
    blocks = [BlockInstance(instance_id=i, block_type="content-text", order=n) for n, i in enumerate(ids)]
    return LayoutEditor("proj-1", {"home": PageLayout(blocks=blocks)}, ["home", "about"], persist=persist)


def ids(editor):
    return [b.instance_id for b in editor.current_blocks]


def assert_dense(editor):
    assert [b.order for b in editor.current_blocks] == list(range(len(editor.current_blocks)))


# ── Init ──────────────────────────────────────────────────────────────────

class TestInit:
    def test_page_courante_premiere_dispo(self):
        assert make_editor().current_page == "home"

    def test_page_par_defaut_home(self):
        assert LayoutEditor("p", {}, []).current_page == "home"

    def test_pas_dirty(self):
        assert make_editor().is_dirty is False

    def test_layouts_appelant_intacts_jusqu_a_save(self):
        layouts = generate_default_layouts("landing", ["home"])
        persist = MagicMock()
        ed = LayoutEditor("proj-1", layouts, ["home"], persist=persist)
        ed.add_block("cta-banner", {})
        ed.update_block_properties(layouts["home"].blocks[1].instance_id, {"title": "Edited"})
        assert len(layouts["home"].blocks) == 8
        assert layouts["home"].blocks[1].properties.get("title") != "Edited"
        ed.save()
        _, saved = persist.call_args.args
        assert len(saved["home"].blocks) == 9
        assert saved["home"].blocks[1].properties["title"] == "Edited"


# ── add ───────────────────────────────────────────────────────────────────

class TestAdd:
    def test_ajout_en_fin(self):
        ed = make_editor()
        block = ed.add_block("hero-standard", {"title": "Hi"})
        assert ids(ed)[-1] == block.instance_id
        assert block.order == 4
        assert_dense(ed)

    def test_selectionne_et_dirty(self):
        ed = make_editor()
        block = ed.add_block("nav-simple", {})
        assert ed.selected_block is block
        assert ed.is_dirty

    def test_id_unique(self):
        ed = make_editor()
        a = ed.add_block("nav-simple", {})
        b = ed.add_block("nav-simple", {})
        assert a.instance_id != b.instance_id

    def test_proprietes_copiees(self):
        ed = make_editor()
        props = {"title": "Hi"}
        block = ed.add_block("hero-standard", props)
        props["title"] = "Changed"
        assert block.properties["title"] == "Hi"

    def test_page_vide_creee(self):
        ed = make_editor()
        ed.switch_page("about")
        block = ed.add_block("content-text", {})
        assert block.order == 0
        assert "about" in ed.page_layouts


# ── remove ────────────────────────────────────────────────────────────────

class TestRemove:
    def test_renumerotation(self):
        ed = make_editor()
        assert ed.remove_block("B") is True
        assert ids(ed) == ["A", "C", "D"]
        assert_dense(ed)

    def test_selection_effacee(self):
        ed = make_editor()
        ed.select_block("C")
        ed.remove_block("C")
        assert ed.selected_id is None

    def test_selection_autre_conservee(self):
        ed = make_editor()
        ed.select_block("A")
        ed.remove_block("C")
        assert ed.selected_id == "A"

    def test_id_inconnu_noop(self):
        ed = make_editor()
        assert ed.remove_block("Z") is False
        assert ids(ed) == ["A", "B", "C", "D"]
        assert ed.is_dirty is False


# ── reorder ───────────────────────────────────────────────────────────────

class TestReorder:
    def test_dernier_en_premier(self):
        """[A,B,C,D] reorder(3,0) → [D,A,B,C], orders [0,1,2,3]."""
        ed = make_editor()
        ed.reorder_blocks(3, 0)
        assert ids(ed) == ["D", "A", "B", "C"]
        assert [b.order for b in ed.current_blocks] == [0, 1, 2, 3]
        assert ed.is_dirty

    def test_deplacement_pas_echange(self):
        ed = make_editor()
        ed.reorder_blocks(0, 2)
        assert ids(ed) == ["B", "C", "A", "D"]
        assert_dense(ed)

    @pytest.mark.parametrize("src,dst", [(4, 0), (0, 4), (-1, 0), (0, -1)])
    def test_hors_bornes_leve(self, src, dst):
        ed = make_editor()
        with pytest.raises(LayoutError):
            ed.reorder_blocks(src, dst)
        assert ids(ed) == ["A", "B", "C", "D"]
        assert_dense(ed)
        assert ed.is_dirty is False

    def test_layout_error_est_value_error(self):
        assert issubclass(LayoutError, ValueError)


# ── Séquence mixte ────────────────────────────────────────────────────────

class TestSequence:
    def test_ordre_dense_apres_chaque_operation(self):
        ed = make_editor()
        ops = [
            lambda: ed.add_block("hero-standard", {}),
            lambda: ed.reorder_blocks(4, 1),
            lambda: ed.remove_block("A"),
            lambda: ed.add_block("footer-standard", {}),
            lambda: ed.reorder_blocks(0, 4),
            lambda: ed.remove_block("D"),
        ]
        for op in ops:
            op()
            assert_dense(ed)

    def test_mutations_concurrentes(self):
        ed = make_editor(ids=())
        threads = [threading.Thread(target=lambda: [ed.add_block("content-text", {}) for _ in range(20)])
                   for _ in range(5)]
        for t in threads: t.start()
        for t in threads: t.join()
        assert len(ed.current_blocks) == 100
        assert_dense(ed)


# ── update / switch ───────────────────────────────────────────────────────

class TestUpdateAndSwitch:
    def test_fusion_superficielle(self):
        ed = make_editor()
        ed.update_block_properties("A", {"heading": "Hello"})
        ed.update_block_properties("A", {"body": "World"})
        assert ed.current_blocks[0].properties == {"heading": "Hello", "body": "World"}
        assert ed.is_dirty

    def test_update_inconnu_noop(self):
        ed = make_editor()
        assert ed.update_block_properties("Z", {"x": 1}) is False
        assert ed.is_dirty is False

    def test_switch_page_efface_selection(self):
        ed = make_editor()
        ed.select_block("A")
        ed.switch_page("about")
        assert ed.selected_id is None
        assert ed.current_blocks == []

    def test_switch_page_autres_pages_intactes(self):
        ed = make_editor()
        ed.switch_page("about")
        ed.add_block("content-text", {})
        ed.switch_page("home")
        assert ids(ed) == ["A", "B", "C", "D"]


# ── save ──────────────────────────────────────────────────────────────────

class TestSave:
    def test_save_appelle_callback_et_nettoie(self):
        persist = MagicMock()
        ed = make_editor(persist=persist)
        ed.remove_block("A")
        ed.save()
        persist.assert_called_once()
        project_id, layouts = persist.call_args.args
        assert project_id == "proj-1"
        assert [b.instance_id for b in layouts["home"].blocks] == ["B", "C", "D"]
        assert ed.is_dirty is False

    def test_save_copie_profonde(self):
        persist = MagicMock()
        ed = make_editor(persist=persist)
        ed.save()
        _, layouts = persist.call_args.args
        ed.update_block_properties("A", {"heading": "changed"})
        assert layouts["home"].blocks[0].properties == {}

    def test_echec_persist_garde_dirty(self):
        persist = MagicMock(side_effect=IOError("disk full"))
        ed = make_editor(persist=persist)
        ed.remove_block("A")
        with pytest.raises(IOError):
            ed.save()
        assert ed.is_dirty is True

    def test_sans_callback(self):
        with pytest.raises(LayoutError):
            make_editor().save()


# ── Verrous par projet ────────────────────────────────────────────────────

class TestProjectLock:
    def test_reentrant(self):
        with project_lock("p-lock"):
            with project_lock("p-lock"):
                pass

    def test_meme_verrou_tant_que_tenu(self):
        with project_lock("p-held"):
            held = store._LOCKS["p-held"]
            with project_lock("p-held"):
                assert store._LOCKS["p-held"] is held

    def test_entree_liberee_apres_usage(self):
        for n in range(50):
            with project_lock(f"p-tmp-{n}"):
                pass
        gc.collect()
        assert not any(k.startswith("p-tmp-") for k in store._LOCKS.keys())

    def test_projets_independants(self):
        entered = threading.Event()

        def other():
            with project_lock("p-other"):
                entered.set()

        with project_lock("p-main"):
            t = threading.Thread(target=other)
            t.start()
            assert entered.wait(timeout=2)
            t.join()
