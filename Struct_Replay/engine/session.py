"""Sessions wiring a backend, a mirror, a render engine and a scheduler.

One session exists per structure family and drawing surface. User input is
validated and busy requests are rejected before the backend is touched; the
backend's event log is then handed to the scheduler, and once playback ends
the mirror is rebuilt from a fresh snapshot.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Tuple

from ..backend import AVLBackend, GraphBackend, HashTableBackend, HeapBackend
from ..backend.base import GraphBackendProtocol, HashBackend, HeapBackendProtocol, TreeBackend
from ..config import Config
from ..events import ActionRecord, EventLog, Family
from ..layout import GraphLayout
from ..mirror import GraphMirror, HashMirror, HeapMirror, TreeMirror
from ..render import (
    RecordingSurface,
    RenderEngine,
    RenderSurface,
    Scene,
    edge_handle,
    node_handle,
    render_graph,
    render_hash,
    render_heap,
    render_tree,
)
from .effects import EFFECTS, Settle, describe
from .scheduler import AnimationScheduler
from .timers import Timer

logger = logging.getLogger(__name__)

COMPLETE_STATUS = "Operation Complete."

_INT_RE = re.compile(r"^\s*([+-]?\d+)")

GRAPH_ALGORITHMS = ("bfs", "dfs", "dijkstra", "prim")


def parse_int(raw: Any) -> int | None:
    """Parse the leading integer of ``raw``; ``None`` when there is none.

    ``"42abc"`` gives ``42`` while ``""`` and ``"abc"`` give ``None``.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if raw is None:
        return None
    match = _INT_RE.match(str(raw))
    return int(match.group(1)) if match else None


class Session:
    """Base class holding the playback machinery shared by all families.

    Parameters
    ----------
    backend:
        Structure backend answering operations with event logs.
    surface:
        Drawing surface; a :class:`RecordingSurface` when omitted.
    timer:
        Timer handed to the scheduler (asyncio by default).
    step_delay:
        Seconds per step; defaults to :meth:`Config.delay_for`.
    """

    family: Family
    #: drop highlights and badges when the mirror is rebuilt
    reset_on_resync = True

    def __init__(
        self,
        backend: Any,
        surface: RenderSurface | None = None,
        *,
        timer: Timer | None = None,
        step_delay: float | None = None,
    ) -> None:
        self.backend = backend
        self.engine = RenderEngine(surface if surface is not None else RecordingSurface())
        self.effects = EFFECTS[self.family]
        delay = Config.delay_for(self.family.value) if step_delay is None else step_delay
        self.scheduler = AnimationScheduler(
            self.apply_step,
            step_delay=delay,
            on_finish=self._finish,
            timer=timer,
        )
        self.resync()

    @property
    def surface(self) -> RenderSurface:
        return self.engine.surface

    @property
    def is_busy(self) -> bool:
        return self.scheduler.is_playing

    async def wait_idle(self) -> None:
        await self.scheduler.wait_idle()

    # ------------------------------------------------------------------
    def render(self) -> Scene:
        raise NotImplementedError

    def load_snapshot(self) -> None:
        raise NotImplementedError

    def redraw(self) -> None:
        self.engine.draw(self.render())

    def resync(self) -> None:
        """Rebuild the mirror from the backend and redraw it."""
        self.load_snapshot()
        if self.reset_on_resync:
            self.engine.reset_overlay()
        self.redraw()

    def apply_step(self, rec: ActionRecord) -> Settle:
        self.engine.set_status(describe(self.family, rec))
        effect = self.effects.get(rec.kind)
        if effect is None:
            logger.debug("no %s effect for %s", self.family.value, rec.kind)
            return None
        return effect(self, rec)

    def play(self, log: EventLog) -> bool:
        return self.scheduler.play(log)

    def _finish(self) -> None:
        self.resync()
        self.engine.set_status(COMPLETE_STATUS)

    # ------------------------------------------------------------------
    def _accept(self, operation: str, *raw: Any) -> List[int] | None:
        """Parse ``raw`` and check the session is idle before ``operation``."""
        values = [parse_int(r) for r in raw]
        if any(v is None for v in values):
            logger.debug("%s skipped: invalid input %r", operation, raw)
            return None
        if self.is_busy:
            logger.debug("%s skipped: playback in progress", operation)
            return None
        return values  # type: ignore[return-value]


class TreeSession(Session):
    """AVL tree insertion and deletion."""

    family = Family.TREE

    def __init__(self, backend: TreeBackend | None = None, surface: RenderSurface | None = None, **kwargs) -> None:
        self.mirror = TreeMirror()
        super().__init__(backend if backend is not None else AVLBackend(), surface, **kwargs)

    def load_snapshot(self) -> None:
        self.mirror.load(self.backend.snapshot())

    def render(self) -> Scene:
        return render_tree(self.mirror, Config.viewport_width)

    def insert(self, raw: Any) -> bool:
        values = self._accept("insert", raw)
        if values is None:
            return False
        return self.play(self.backend.insert(values[0]))

    def remove(self, raw: Any) -> bool:
        values = self._accept("remove", raw)
        if values is None:
            return False
        return self.play(self.backend.remove(values[0]))


class HashSession(Session):
    """Chained hash table insertion and lookup."""

    family = Family.HASH

    def __init__(self, backend: HashBackend | None = None, surface: RenderSurface | None = None, **kwargs) -> None:
        self.mirror = HashMirror()
        super().__init__(backend if backend is not None else HashTableBackend(), surface, **kwargs)

    def load_snapshot(self) -> None:
        self.mirror.load(self.backend.snapshot())

    def render(self) -> Scene:
        return render_hash(self.mirror)

    def insert(self, raw: Any) -> bool:
        values = self._accept("insert", raw)
        if values is None:
            return False
        self.engine.reset_overlay()
        return self.play(self.backend.insert(values[0]))

    def search(self, raw: Any) -> bool:
        values = self._accept("search", raw)
        if values is None:
            return False
        self.engine.reset_overlay()
        return self.play(self.backend.search(values[0]))


class HeapSession(Session):
    """Binary heap insertion and root extraction."""

    family = Family.HEAP

    def __init__(self, backend: HeapBackendProtocol | None = None, surface: RenderSurface | None = None, **kwargs) -> None:
        self.mirror = HeapMirror()
        super().__init__(backend if backend is not None else HeapBackend(), surface, **kwargs)

    def load_snapshot(self) -> None:
        self.mirror.load(self.backend.array())

    def render(self) -> Scene:
        return render_heap(self.mirror, Config.viewport_width)

    def insert(self, raw: Any) -> bool:
        values = self._accept("insert", raw)
        if values is None:
            return False
        return self.play(self.backend.insert(values[0]))

    def extract(self) -> bool:
        if self._accept("extract") is None:
            return False
        return self.play(self.backend.extract())

    def set_mode(self, is_min: bool) -> bool:
        """Switch between min- and max-heap; the heap is emptied."""
        if self._accept("set_mode") is None:
            return False
        self.backend.set_mode(bool(is_min))
        self.resync()
        return True


class GraphSession(Session):
    """Weighted graph editing and traversal playback.

    Editing is applied immediately without an event log. Vertex positions live
    in :attr:`layout` and only change through :meth:`add_vertex` and
    :meth:`move_vertex`. Highlights from a run stay visible after it finishes
    and are cleared when the next run starts.
    """

    family = Family.GRAPH
    reset_on_resync = False

    def __init__(
        self,
        backend: GraphBackendProtocol | None = None,
        surface: RenderSurface | None = None,
        *,
        seed: int | None = None,
        **kwargs,
    ) -> None:
        self.mirror = GraphMirror()
        self.layout = GraphLayout(seed)
        self.frontier: List[Tuple[int, str]] = []
        super().__init__(backend if backend is not None else GraphBackend(), surface, **kwargs)

    @classmethod
    def with_default_graph(cls, surface: RenderSurface | None = None, **kwargs) -> "GraphSession":
        """Session seeded with a three-vertex triangle."""
        session = cls(surface=surface, **kwargs)
        session.add_vertex(1, 400, 100)
        session.add_vertex(2, 250, 300)
        session.add_vertex(3, 550, 300)
        session.add_edge(1, 2, 4)
        session.add_edge(1, 3, 2)
        session.add_edge(2, 3, 5)
        return session

    def load_snapshot(self) -> None:
        self.mirror.load(self.backend.snapshot())
        for vid in list(self.layout.positions):
            if vid not in self.mirror:
                self.layout.forget(vid)

    def render(self) -> Scene:
        return render_graph(self.mirror, self.layout)

    # ------------------------------------------------------------------
    def add_vertex(self, raw: Any, x: float | None = None, y: float | None = None) -> bool:
        values = self._accept("add_vertex", raw)
        if values is None:
            return False
        vid = values[0]
        if vid in self.mirror:
            logger.debug("vertex %s already exists", vid)
            return False
        self.backend.add_vertex(vid)
        self.mirror.add_vertex(vid)
        self.layout.place(vid, x, y)
        self.redraw()
        return True

    def remove_vertex(self, raw: Any) -> bool:
        values = self._accept("remove_vertex", raw)
        if values is None:
            return False
        vid = values[0]
        self.backend.remove_vertex(vid)
        removed = self.mirror.remove_vertex(vid)
        self.layout.forget(vid)
        self.redraw()
        return removed

    def add_edge(self, raw_u: Any, raw_v: Any, raw_w: Any) -> bool:
        values = self._accept("add_edge", raw_u, raw_v, raw_w)
        if values is None:
            return False
        u, v, w = values
        if u not in self.mirror or v not in self.mirror:
            logger.debug("add_edge skipped: %s or %s is not a vertex", u, v)
            return False
        self.backend.add_edge(u, v, w)
        self.mirror.add_edge(u, v, w)
        self.redraw()
        return True

    def move_vertex(self, vid: int, x: float, y: float) -> bool:
        """Drag ``vid`` to ``(x, y)`` and recompute the edges touching it.

        Only the vertex and its dependent edges are re-placed on the surface;
        nothing is cleared or redrawn.
        """
        if not self.layout.move(vid, x, y):
            return False
        pairs = [(u, v) for u, v, _ in self.mirror.edges]
        handles = [node_handle(vid)]
        handles += [edge_handle(g.u, g.v) for g in self.layout.dependent_edges(vid, pairs)]
        self.engine.update(self.render(), handles)
        return True

    def on_drag(self, handle: str, x: float, y: float) -> None:
        """``QtSurface`` drag callback taking a ``node-<id>`` handle."""
        vid = parse_int(handle.partition("-")[2])
        if vid is not None:
            self.move_vertex(vid, x, y)

    def run(self, algorithm: str, raw_start: Any) -> bool:
        """Play ``algorithm`` (``bfs``, ``dfs``, ``dijkstra`` or ``prim``)."""
        if algorithm not in GRAPH_ALGORITHMS:
            raise ValueError(f"unknown graph algorithm: {algorithm}")
        values = self._accept(algorithm, raw_start)
        if values is None:
            return False
        start = values[0]
        if start not in self.mirror:
            logger.debug("%s skipped: invalid start vertex %s", algorithm, start)
            return False
        self.engine.reset_overlay()
        self.frontier = []
        self.engine.set_panel([])
        return self.play(self.backend.run(algorithm, start))
