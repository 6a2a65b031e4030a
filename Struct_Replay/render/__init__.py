"""Scene graph, render engine and drawing surfaces.

``QtSurface`` (:mod:`.qt_surface`) and ``FigureSurface`` (:mod:`.export`)
are imported from their modules so that the core never loads a GUI toolkit.
"""

from .engine import RenderEngine
from .scene import (
    BoxShape,
    ConnectorShape,
    EdgeShape,
    NodeShape,
    Scene,
    bucket_handle,
    cell_handle,
    chain_handle,
    edge_handle,
    node_handle,
    render_graph,
    render_hash,
    render_heap,
    render_tree,
)
from .surface import RecordingSurface, RenderSurface

__all__ = [
    "BoxShape",
    "ConnectorShape",
    "EdgeShape",
    "NodeShape",
    "RecordingSurface",
    "RenderEngine",
    "RenderSurface",
    "Scene",
    "bucket_handle",
    "cell_handle",
    "chain_handle",
    "edge_handle",
    "node_handle",
    "render_graph",
    "render_hash",
    "render_heap",
    "render_tree",
]
