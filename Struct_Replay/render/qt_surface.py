"""PySide6 drawing surface backed by a :class:`QGraphicsScene`."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Sequence, Set, Tuple

from PySide6.QtCore import QEasingCurve, QPointF, Qt, QVariantAnimation
from PySide6.QtGui import QBrush, QColor, QFont, QPen
from PySide6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsLineItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSimpleTextItem,
    QGraphicsView,
)

from ..config import Config
from .scene import BoxShape, ConnectorShape, EdgeShape, NodeShape
from .styles import FOCUS_RING, style

_SLIDE_MS = 300


def _centre_text(text: QGraphicsSimpleTextItem, x: float, y: float) -> None:
    rect = text.boundingRect()
    text.setPos(x - rect.width() / 2, y - rect.height() / 2)


class NodeItem(QGraphicsEllipseItem):
    """Circle with a centred label; reports drags when movable."""

    def __init__(self, shape: NodeShape, surface: "QtSurface") -> None:
        r = shape.radius
        super().__init__(-r, -r, r * 2, r * 2)
        self.handle = shape.handle
        self.surface = surface
        self.setPos(QPointF(shape.x, shape.y))
        self.label = QGraphicsSimpleTextItem(shape.label, self)
        _centre_text(self.label, 0.0, 0.0)
        if shape.tooltip:
            self.setToolTip(shape.tooltip)
        self.setZValue(2)
        self.setFlag(QGraphicsItem.ItemSendsGeometryChanges)
        if surface.on_drag is not None:
            self.setFlag(QGraphicsItem.ItemIsMovable)
        self._drag_start: QPointF | None = None

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() == Qt.LeftButton:
            self._drag_start = self.pos()
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        moved = (
            event.button() == Qt.LeftButton
            and self._drag_start is not None
            and self.surface.on_drag is not None
            and self.pos() != self._drag_start
        )
        self._drag_start = None
        super().mouseReleaseEvent(event)
        # the callback may redraw the scene and delete this item
        if moved:
            self.surface.on_drag(self.handle, self.pos().x(), self.pos().y())


class QtSurface:
    """Surface drawing into a ``QGraphicsScene``.

    Parameters
    ----------
    scene:
        Scene to draw into; a new one is created when omitted.
    on_drag:
        Optional ``(handle, x, y)`` callback. When given, nodes are movable
        and the callback fires after a drag ends.
    animate:
        Slide moved shapes and new chain entries instead of jumping.
    """

    def __init__(
        self,
        scene: QGraphicsScene | None = None,
        on_drag: Callable[[str, float, float], None] | None = None,
        animate: bool = True,
    ) -> None:
        self.scene = scene or QGraphicsScene(
            0.0, 0.0, Config.viewport_width, Config.viewport_height
        )
        self.on_drag = on_drag
        self.animate = animate
        self.items: Dict[str, QGraphicsItem] = {}
        self._labels: Dict[str, QGraphicsSimpleTextItem] = {}
        self._badges: Dict[str, QGraphicsSimpleTextItem] = {}
        self._animations: List[QVariantAnimation] = []
        self._previous: Set[str] = set()
        self._status_text = ""
        self._panel_text = ""
        self._add_chrome()

    def _add_chrome(self) -> None:
        r = FOCUS_RING["radius"]
        self._focus = QGraphicsEllipseItem(-r, -r, r * 2, r * 2)
        pen = QPen(QColor(FOCUS_RING["stroke"]))
        pen.setWidth(FOCUS_RING["width"])
        self._focus.setPen(pen)
        self._focus.setZValue(3)
        self._focus.setVisible(False)
        self.scene.addItem(self._focus)

        font = QFont()
        font.setBold(True)
        self._status = QGraphicsSimpleTextItem(self._status_text)
        self._status.setFont(font)
        self._status.setPos(10.0, Config.viewport_height - 30.0)
        self.scene.addItem(self._status)
        self._panel = QGraphicsSimpleTextItem(self._panel_text)
        self._panel.setPos(10.0, Config.viewport_height - 55.0)
        self.scene.addItem(self._panel)

    def view(self) -> QGraphicsView:
        """Return a new view on the scene with antialiasing enabled."""
        from PySide6.QtGui import QPainter

        view = QGraphicsView(self.scene)
        view.setRenderHint(QPainter.Antialiasing)
        return view

    # ------------------------------------------------------------------
    def clear(self) -> None:
        self._previous = set(self.items)
        for anim in self._animations:
            anim.stop()
        self._animations.clear()
        self.scene.clear()
        self.items.clear()
        self._labels.clear()
        self._badges.clear()
        self._add_chrome()

    def draw_node(self, shape: NodeShape) -> None:
        item = NodeItem(shape, self)
        self.scene.addItem(item)
        self.items[shape.handle] = item
        self._labels[shape.handle] = item.label
        self._paint(shape.handle, None)

    def draw_edge(self, shape: EdgeShape) -> None:
        item = QGraphicsLineItem(shape.x1, shape.y1, shape.x2, shape.y2)
        item.setZValue(0)
        self.scene.addItem(item)
        self.items[shape.handle] = item
        if shape.label is not None:
            label = QGraphicsSimpleTextItem(shape.label)
            _centre_text(label, (shape.x1 + shape.x2) / 2, (shape.y1 + shape.y2) / 2 - 10)
            label.setZValue(1)
            self.scene.addItem(label)
            self._labels[shape.handle] = label
        self._paint(shape.handle, None)

    def draw_box(self, shape: BoxShape) -> None:
        item = QGraphicsRectItem(0.0, 0.0, shape.width, shape.height)
        item.setZValue(1)
        label = QGraphicsSimpleTextItem(shape.label, item)
        _centre_text(label, shape.width / 2, shape.height / 2)
        if shape.caption:
            caption = QGraphicsSimpleTextItem(shape.caption, item)
            _centre_text(caption, shape.width / 2, shape.height + 10)
        self.scene.addItem(item)
        self.items[shape.handle] = item
        self._labels[shape.handle] = label
        self._paint(shape.handle, None)
        if shape.enter_y is not None and self.animate and shape.handle not in self._previous:
            item.setPos(shape.x, shape.enter_y)
            item.setOpacity(0.0)
            self._slide(item, QPointF(shape.x, shape.y), fade=True)
        else:
            item.setPos(shape.x, shape.y)

    def draw_connector(self, shape: ConnectorShape) -> None:
        item = QGraphicsLineItem(shape.x1, shape.y1, shape.x2, shape.y2)
        item.setPen(QPen(QColor(style(None)["stroke"])))
        self.scene.addItem(item)

    # ------------------------------------------------------------------
    def _paint(self, handle: str, name: str | None) -> None:
        item = self.items[handle]
        colours = style(name)
        pen = QPen(QColor(colours["stroke"]))
        pen.setWidth(colours["width"] if name else 2)
        item.setPen(pen)
        if not isinstance(item, QGraphicsLineItem):
            item.setBrush(QBrush(QColor(colours["fill"])))
            label = self._labels.get(handle)
            if label is not None:
                label.setBrush(QBrush(QColor(colours["text"])))

    def set_highlight(self, handle: str, style: str | None) -> None:
        if handle in self.items:
            self._paint(handle, style)

    def show_badge(self, handle: str, text: str | None) -> None:
        old = self._badges.pop(handle, None)
        if old is not None:
            self.scene.removeItem(old)
        item = self.items.get(handle)
        if text is None or item is None:
            return
        badge = QGraphicsSimpleTextItem(text)
        badge.setBrush(QBrush(QColor(style("traversed")["stroke"])))
        anchor = item.sceneBoundingRect()
        badge.setPos(anchor.right() + 4, anchor.top() - 14)
        badge.setZValue(4)
        self.scene.addItem(badge)
        self._badges[handle] = badge

    def move_to(self, handle: str, x: float, y: float) -> None:
        item = self.items.get(handle)
        if item is None:
            return
        if self.animate:
            self._slide(item, QPointF(x, y))
        else:
            item.setPos(x, y)

    def update_shape(self, shape: NodeShape | EdgeShape) -> None:
        item = self.items.get(shape.handle)
        if item is None:
            return
        if isinstance(shape, NodeShape):
            item.setPos(shape.x, shape.y)
            return
        item.setLine(shape.x1, shape.y1, shape.x2, shape.y2)
        label = self._labels.get(shape.handle)
        if label is not None:
            _centre_text(label, (shape.x1 + shape.x2) / 2, (shape.y1 + shape.y2) / 2 - 10)

    def set_focus(self, position: Tuple[float, float] | None) -> None:
        if position is None:
            self._focus.setVisible(False)
            return
        self._focus.setPos(QPointF(*position))
        self._focus.setVisible(True)

    def set_status(self, text: str) -> None:
        self._status_text = text
        self._status.setText(text)

    def set_panel(self, items: Sequence[str]) -> None:
        self._panel_text = "Queue: " + " ".join(items) if items else ""
        self._panel.setText(self._panel_text)

    @property
    def status(self) -> str:
        return self._status_text

    @property
    def focus_visible(self) -> bool:
        return self._focus.isVisible()

    def _slide(self, item: QGraphicsItem, target: QPointF, fade: bool = False) -> None:
        anim = QVariantAnimation()
        anim.setDuration(_SLIDE_MS)
        anim.setEasingCurve(QEasingCurve.OutCubic)
        anim.setStartValue(item.pos())
        anim.setEndValue(target)
        anim.valueChanged.connect(item.setPos)
        if fade:
            anim.valueChanged.connect(
                lambda _v: item.setOpacity(anim.currentTime() / float(_SLIDE_MS))
            )
        anim.finished.connect(lambda: self._animation_done(anim, item))
        self._animations.append(anim)
        anim.start()

    def _animation_done(self, anim: QVariantAnimation, item: QGraphicsItem) -> None:
        item.setOpacity(1.0)
        if anim in self._animations:
            self._animations.remove(anim)

    def grab(self, path: str) -> None:
        """Render the scene into an image file at ``path``."""
        from PySide6.QtGui import QImage, QPainter

        rect = self.scene.sceneRect()
        image = QImage(int(rect.width()), int(rect.height()), QImage.Format_ARGB32)
        image.fill(QColor("white"))
        painter = QPainter(image)
        self.scene.render(painter)
        painter.end()
        image.save(path)

    def label_of(self, handle: str) -> str | None:
        label = self._labels.get(handle)
        return None if label is None else label.text()

    def pen_colour(self, handle: str) -> str:
        return self.items[handle].pen().color().name()

    def __contains__(self, handle: Any) -> bool:
        return handle in self.items
