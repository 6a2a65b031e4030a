"""Drawing capability interface and an in-memory recording surface."""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, Sequence, Tuple

from .scene import BoxShape, ConnectorShape, EdgeShape, NodeShape

Position = Tuple[float, float]


class RenderSurface(Protocol):
    """Operations a drawing backend must provide.

    Handles passed to the effect methods always belong to shapes drawn since
    the last :meth:`clear`; :class:`~Struct_Replay.render.engine.RenderEngine`
    filters out everything else. A ``None`` style, badge or focus removes it.
    """

    def clear(self) -> None: ...

    def draw_node(self, shape: NodeShape) -> None: ...

    def draw_edge(self, shape: EdgeShape) -> None: ...

    def draw_box(self, shape: BoxShape) -> None: ...

    def draw_connector(self, shape: ConnectorShape) -> None: ...

    def set_highlight(self, handle: str, style: str | None) -> None: ...

    def show_badge(self, handle: str, text: str | None) -> None: ...

    def move_to(self, handle: str, x: float, y: float) -> None: ...

    def update_shape(self, shape: NodeShape | EdgeShape) -> None: ...

    def set_focus(self, position: Position | None) -> None: ...

    def set_status(self, text: str) -> None: ...

    def set_panel(self, items: Sequence[str]) -> None: ...


class RecordingSurface:
    """Surface that keeps the current picture in dictionaries.

    Every call is appended to :attr:`calls` as ``(method, *args)``, which
    makes it a convenient double for tests and for headless runs.
    """

    def __init__(self) -> None:
        self.calls: List[Tuple[Any, ...]] = []
        self.shapes: Dict[str, Any] = {}
        self.highlights: Dict[str, str] = {}
        self.badges: Dict[str, str] = {}
        self.moved: Dict[str, Position] = {}
        self.focus: Position | None = None
        self.status = ""
        self.status_history: List[str] = []
        self.panel: List[str] = []

    def clear(self) -> None:
        self.calls.append(("clear",))
        self.shapes.clear()
        self.highlights.clear()
        self.badges.clear()
        self.moved.clear()

    def draw_node(self, shape: NodeShape) -> None:
        self.calls.append(("draw_node", shape.handle))
        self.shapes[shape.handle] = shape

    def draw_edge(self, shape: EdgeShape) -> None:
        self.calls.append(("draw_edge", shape.handle))
        self.shapes[shape.handle] = shape

    def draw_box(self, shape: BoxShape) -> None:
        self.calls.append(("draw_box", shape.handle))
        self.shapes[shape.handle] = shape

    def draw_connector(self, shape: ConnectorShape) -> None:
        self.calls.append(("draw_connector",))

    def set_highlight(self, handle: str, style: str | None) -> None:
        self.calls.append(("set_highlight", handle, style))
        if style is None:
            self.highlights.pop(handle, None)
        else:
            self.highlights[handle] = style

    def show_badge(self, handle: str, text: str | None) -> None:
        self.calls.append(("show_badge", handle, text))
        if text is None:
            self.badges.pop(handle, None)
        else:
            self.badges[handle] = text

    def move_to(self, handle: str, x: float, y: float) -> None:
        self.calls.append(("move_to", handle, x, y))
        self.moved[handle] = (x, y)

    def update_shape(self, shape: NodeShape | EdgeShape) -> None:
        self.calls.append(("update_shape", shape.handle))
        self.shapes[shape.handle] = shape
        self.moved.pop(shape.handle, None)

    def set_focus(self, position: Position | None) -> None:
        self.calls.append(("set_focus", position))
        self.focus = position

    def set_status(self, text: str) -> None:
        self.calls.append(("set_status", text))
        self.status = text
        self.status_history.append(text)

    def set_panel(self, items: Sequence[str]) -> None:
        self.calls.append(("set_panel", tuple(items)))
        self.panel = list(items)

    def labels(self) -> Dict[str, str]:
        """Return ``handle -> label`` for every labelled shape on screen."""
        return {
            h: s.label for h, s in self.shapes.items() if getattr(s, "label", None) is not None
        }
