"""
LayoutEditor — état d'édition des layouts d'un projet (une instance par session).

Après chaque mutation, `order` vaut 0..n-1 dans l'ordre de la liste.
Les mutations d'un même projet sont sérialisées par un verrou par projet.
"""
import copy
import logging
import threading
import uuid
import weakref
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

from ..core.schemas import BlockInstance, PageLayout, PageLayouts

log = logging.getLogger(__name__)

PersistCallback = Callable[[str, PageLayouts], None]


class LayoutError(ValueError):
    """Opération d'édition invalide (index hors bornes…). Le layout n'est pas modifié."""


# ── Verrous par projet ──────────────────────────────────────────────────────

# entrée libérée dès que plus aucun appelant ne tient le verrou
_LOCKS: "weakref.WeakValueDictionary[str, threading.RLock]" = weakref.WeakValueDictionary()
_LOCKS_GUARD = threading.Lock()


@contextmanager
def project_lock(project_id: str) -> Iterator[None]:
    """Sérialise les mutations d'un même projet ; projets distincts indépendants."""
    with _LOCKS_GUARD:
        lock = _LOCKS.setdefault(project_id, threading.RLock())
    with lock:
        yield


def _renumber(blocks: List[BlockInstance]) -> None:
    for i, block in enumerate(blocks):
        block.order = i


class LayoutEditor:

    def __init__(
        self,
        project_id: str,
        page_layouts: Optional[PageLayouts] = None,
        available_pages: Optional[List[str]] = None,
        persist: Optional[PersistCallback] = None,
    ):
        self.project_id      = project_id
        self.page_layouts    = copy.deepcopy(dict(page_layouts or {}))
        self.available_pages = list(available_pages or ["home"])
        self.current_page    = self.available_pages[0] if self.available_pages else "home"
        self.selected_id: Optional[str] = None
        self._dirty   = False
        self._persist = persist

    # ── Lecture ──────────────────────────────────────────────────────────

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def current_blocks(self) -> List[BlockInstance]:
        layout = self.page_layouts.get(self.current_page)
        return layout.blocks if layout else []

    @property
    def selected_block(self) -> Optional[BlockInstance]:
        if not self.selected_id:
            return None
        return next((b for b in self.current_blocks if b.instance_id == self.selected_id), None)

    def _find(self, instance_id: str) -> Optional[BlockInstance]:
        return next((b for b in self.current_blocks if b.instance_id == instance_id), None)

    def _page_blocks(self) -> List[BlockInstance]:
        """Liste mutable de la page courante (créée si absente)."""
        layout = self.page_layouts.setdefault(self.current_page, PageLayout())
        return layout.blocks

    # ── Mutations ────────────────────────────────────────────────────────

    def add_block(self, block_type: str, properties: Optional[Dict[str, Any]] = None) -> BlockInstance:
        """Ajoute en fin de page et sélectionne le nouveau bloc."""
        with project_lock(self.project_id):
            blocks = self._page_blocks()
            block = BlockInstance(
                instance_id=str(uuid.uuid4()),
                block_type=block_type,
                order=len(blocks),
                properties=dict(properties or {}),
            )
            blocks.append(block)
            self._dirty = True
            self.selected_id = block.instance_id
        log.debug("Bloc %s ajouté sur %s/%s", block_type, self.project_id, self.current_page)
        return block

    def remove_block(self, instance_id: str) -> bool:
        with project_lock(self.project_id):
            blocks = self._page_blocks()
            block = self._find(instance_id)
            if block is None:
                return False
            blocks.remove(block)
            _renumber(blocks)
            self._dirty = True
            if self.selected_id == instance_id:
                self.selected_id = None
        return True

    def reorder_blocks(self, from_index: int, to_index: int) -> None:
        """Déplacement (pas un échange) : pop(from_index) puis insert(to_index)."""
        with project_lock(self.project_id):
            blocks = self._page_blocks()
            n = len(blocks)
            if not (0 <= from_index < n and 0 <= to_index < n):
                raise LayoutError(f"Index hors bornes : {from_index} → {to_index} (page de {n} blocs)")
            moved = blocks.pop(from_index)
            blocks.insert(to_index, moved)
            _renumber(blocks)
            self._dirty = True

    def update_block_properties(self, instance_id: str, properties: Dict[str, Any]) -> bool:
        """Fusion superficielle dans les propriétés existantes."""
        with project_lock(self.project_id):
            block = self._find(instance_id)
            if block is None:
                return False
            block.properties = {**block.properties, **properties}
            self._dirty = True
        return True

    def switch_page(self, page: str) -> None:
        self.current_page = page
        self.selected_id  = None

    def select_block(self, instance_id: Optional[str]) -> None:
        self.selected_id = instance_id

    # ── Persistance ──────────────────────────────────────────────────────

    def save(self) -> None:
        """
        Transmet une copie profonde des layouts au callback de persistance.
        Le flag dirty n'est remis à zéro que si le callback ne lève pas.
        """
        if self._persist is None:
            raise LayoutError("Aucun callback de persistance configuré")
        with project_lock(self.project_id):
            snapshot = copy.deepcopy(self.page_layouts)
            self._persist(self.project_id, snapshot)
            self._dirty = False
        log.info("Layouts sauvegardés pour le projet %s", self.project_id)
