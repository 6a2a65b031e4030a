import pytest

from Struct_Replay.events.protocol import unpack_event_logs
from Struct_Replay.events import records as kinds
from Struct_Replay.script import event_logs, parse_script
from sr.cli import main

HASH_SCRIPT = """
structure: hash
size: 7
operations:
  - insert: 5
  - insert: 12
  - insert: 5
  - search: 12
"""


def test_play_prints_status_lines(tmp_path, capsys):
    script = tmp_path / "hash.yaml"
    script.write_text(HASH_SCRIPT)
    assert main(["play", str(script), "--speed", "200"]) == 0
    out = capsys.readouterr().out
    assert "Hash: 5 % 7 = 5" in out
    assert "Duplicate Key Ignored" in out
    assert "Found Key 12" in out
    assert out.count("Operation Complete.") == 4


def test_play_writes_frames(tmp_path):
    script = tmp_path / "heap.yaml"
    script.write_text("structure: heap\noperations:\n  - insert: 3\n  - insert: 1\n")
    frames = tmp_path / "frames"
    assert main(["play", str(script), "--speed", "200", "--frames", str(frames)]) == 0
    assert len(list(frames.iterdir())) > 2


def test_dump_writes_event_logs(tmp_path):
    script = tmp_path / "hash.yaml"
    script.write_text(HASH_SCRIPT)
    out = tmp_path / "logs.msgpack"
    assert main(["dump", str(script), str(out)]) == 0
    logs = unpack_event_logs(out.read_bytes())
    assert [family for family, _ in logs] == ["hash"] * 4
    assert logs[2][1].kinds() == [kinds.COMPUTE_HASH, kinds.DUPLICATE]


def test_graph_script_event_logs():
    script = parse_script(
        {
            "structure": "graph",
            "default_graph": True,
            "operations": [{"add_vertex": [4, 100, 100]}, {"add_edge": [3, 4, 1]}, {"run": ["bfs", 1]}],
        }
    )
    logs = list(event_logs(script))
    assert len(logs) == 1
    assert [r.a for r in logs[0].find(kinds.VISIT)] == [1, 2, 3, 4]


def test_script_validation():
    with pytest.raises(ValueError):
        parse_script({"structure": "trie"})
    with pytest.raises(ValueError):
        parse_script({"structure": "heap", "operations": [{"search": 1}]})
    with pytest.raises(ValueError):
        parse_script([1, 2])
    script = parse_script({"structure": "heap", "operations": ["extract"]})
    assert script.operations == [("extract", ())]
