"""Draw scenes on a surface and apply handle-level effects."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from .scene import Scene, edge_handle
from .surface import RenderSurface

logger = logging.getLogger(__name__)


class RenderEngine:
    """Owns the current :class:`Scene` and the overlay drawn on top of it.

    The overlay consists of highlights, badges and the focus ring. It is kept
    across :meth:`draw` calls for handles that are still part of the new scene
    and only removed by :meth:`clear_highlights` or :meth:`reset_overlay`.
    Effects aimed at a handle that is not on screen are skipped and return
    ``False``.
    """

    def __init__(self, surface: RenderSurface) -> None:
        self.surface = surface
        self.scene = Scene()
        self.status = ""
        self.panel: List[str] = []
        self._highlights: Dict[str, str] = {}
        self._badges: Dict[str, str] = {}
        self._focus: str | None = None

    # ------------------------------------------------------------------
    def draw(self, scene: Scene) -> None:
        """Replace the picture with ``scene`` and reapply the overlay."""
        surface = self.surface
        surface.clear()
        for edge in scene.edges:
            surface.draw_edge(edge)
        for conn in scene.connectors:
            surface.draw_connector(conn)
        for box in scene.boxes:
            surface.draw_box(box)
        for node in scene.nodes:
            surface.draw_node(node)
        self.scene = scene

        self._highlights = {h: s for h, s in self._highlights.items() if h in scene}
        self._badges = {h: t for h, t in self._badges.items() if h in scene}
        for handle, style in self._highlights.items():
            surface.set_highlight(handle, style)
        for handle, text in self._badges.items():
            surface.show_badge(handle, text)
        if self._focus is not None and self._focus not in scene:
            self._focus = None
        surface.set_focus(None if self._focus is None else scene.position(self._focus))

    def update(self, scene: Scene, handles: Iterable[str]) -> None:
        """Adopt ``scene`` but only re-place the nodes and edges in ``handles``.

        The surface keeps its items, so this is safe to call from inside a
        surface callback such as a drag release. Badges and the focus ring of
        the updated handles follow them.
        """
        self.scene = scene
        for handle in handles:
            shape = scene.shape(handle)
            if shape is None:
                logger.debug("update skipped: %s is not on screen", handle)
                continue
            self.surface.update_shape(shape)
            if handle in self._badges:
                self.surface.show_badge(handle, self._badges[handle])
            if handle == self._focus:
                self.surface.set_focus(scene.position(handle))

    def _present(self, handle: str, effect: str) -> bool:
        if handle in self.scene:
            return True
        logger.debug("%s skipped: %s is not on screen", effect, handle)
        return False

    # ------------------------------------------------------------------
    def highlight(self, handle: str, style: str) -> bool:
        if not self._present(handle, "highlight"):
            return False
        self._highlights[handle] = style
        self.surface.set_highlight(handle, style)
        return True

    def clear_highlights(self, styles: Iterable[str] | None = None) -> None:
        """Remove highlights, optionally only those drawn with ``styles``."""
        wanted = None if styles is None else set(styles)
        for handle, style in list(self._highlights.items()):
            if wanted is None or style in wanted:
                del self._highlights[handle]
                self.surface.set_highlight(handle, None)

    def highlighted(self, style: str | None = None) -> List[str]:
        return [h for h, s in self._highlights.items() if style is None or s == style]

    def badge(self, handle: str, text: str | None) -> bool:
        if not self._present(handle, "badge"):
            return False
        if text is None:
            self._badges.pop(handle, None)
        else:
            self._badges[handle] = text
        self.surface.show_badge(handle, text)
        return True

    def badges(self) -> Dict[str, str]:
        return dict(self._badges)

    def focus(self, handle: str | None) -> bool:
        """Move the focus ring to ``handle``; ``None`` hides it."""
        if handle is None:
            self._focus = None
            self.surface.set_focus(None)
            return True
        if not self._present(handle, "focus"):
            return False
        self._focus = handle
        self.surface.set_focus(self.scene.position(handle))
        return True

    def move(self, handle: str, position: Tuple[float, float]) -> bool:
        """Slide a shape to ``position`` without changing the scene."""
        if not self._present(handle, "move"):
            return False
        self.surface.move_to(handle, *position)
        return True

    def set_status(self, text: str) -> None:
        self.status = text
        self.surface.set_status(text)

    def set_panel(self, items: Sequence[str]) -> None:
        self.panel = list(items)
        self.surface.set_panel(self.panel)

    def reset_overlay(self) -> None:
        """Drop every highlight, badge and the focus ring."""
        self.clear_highlights()
        for handle in list(self._badges):
            self.surface.show_badge(handle, None)
        self._badges.clear()
        self.focus(None)

    def find_edge(self, u: int, v: int) -> str | None:
        """Handle of the edge between ``u`` and ``v`` in either direction."""
        for handle in (edge_handle(u, v), edge_handle(v, u)):
            if handle in self.scene:
                return handle
        return None
