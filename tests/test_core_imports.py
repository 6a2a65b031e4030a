import ast
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parents[1] / "Struct_Replay"
# leaf modules that are allowed to talk to Qt
QT_MODULES = {"qt_surface.py", "timers.py"}


def test_core_has_no_qt_imports():
    for path in PACKAGE_DIR.rglob("*.py"):
        if path.name in QT_MODULES:
            continue
        tree = ast.parse(path.read_text())
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.name.startswith("PySide6"):
                        raise AssertionError(f"{path} imports {alias.name}")
            elif isinstance(node, ast.ImportFrom):
                module = node.module or ""
                if module.startswith("PySide6") or module.endswith("qt_surface"):
                    raise AssertionError(f"{path} imports {module}")
