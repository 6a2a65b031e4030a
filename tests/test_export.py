from Struct_Replay.events import TreeNodeData
from Struct_Replay.mirror import TreeMirror
from Struct_Replay.render import RenderEngine, render_tree
from Struct_Replay.render.export import FigureSurface, FrameRecorder

_TREE = [TreeNodeData(20, 2, 0, 10, 30), TreeNodeData(10, 1, 0), TreeNodeData(30, 1, 0)]


def test_figure_surface_renders_rgb_frame():
    surface = FigureSurface()
    try:
        engine = RenderEngine(surface)
        engine.draw(render_tree(TreeMirror.from_snapshot(_TREE), 800))
        engine.highlight("node-10", "visited")
        engine.badge("node-20", "BF:0")
        engine.set_status("Adding Node 10")
        frame = surface.frame()
        assert frame.ndim == 3
        assert frame.shape[2] == 3
        assert frame.shape[0] > 0 and frame.shape[1] > 0
    finally:
        surface.close()


def test_frame_recorder_writes_png_directory(tmp_path):
    surface = FigureSurface()
    out = tmp_path / "frames"
    recorder = FrameRecorder(surface, str(out))
    try:
        RenderEngine(surface).draw(render_tree(TreeMirror.from_snapshot(_TREE), 800))
        recorder(0, None)
        recorder.capture()
    finally:
        recorder.close()
        surface.close()
    assert recorder.count == 2
    assert sorted(p.name for p in out.iterdir()) == ["frame_00000.png", "frame_00001.png"]
