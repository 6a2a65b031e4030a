# config.py

import os


class Config:
    """Global defaults for playback pacing, layout geometry and backends.

    Attributes
    ----------
    step_delay:
        Seconds between two playback steps, keyed by structure family
        (``"tree"``, ``"graph"``, ``"hash"`` and ``"heap"``).
    viewport_width:
        Width of the drawing surface used by the tree and heap layouts.
    tree_layout:
        ``start_y`` and ``level_height`` used for the AVL layout.
    heap_layout:
        ``start_y`` and ``level_height`` for the heap tree view plus
        ``cell_x``, ``cell_y`` and ``cell_pitch`` for the flat array view.
    hash_layout:
        Geometry of buckets and chained entries. ``enter_offset`` is the
        distance below its rest position from which a new entry slides in.
    hash_table_size:
        Number of buckets of the reference hash-table backend.
    graph_layout:
        ``spawn_x``/``spawn_y`` centre and ``jitter`` radius used to place new
        vertices when no coordinates are supplied, and ``seed`` for the random
        generator.
    heap_min_mode:
        Initial ordering of the heap backend; ``True`` for a min-heap.
    """

    base_dir = os.path.abspath(os.path.dirname(__file__))
    config_file: str | None = None

    step_delay = {"tree": 0.5, "graph": 0.7, "hash": 0.6, "heap": 0.8}

    viewport_width = 800.0
    viewport_height = 600.0

    tree_layout = {"start_y": 60.0, "level_height": 70.0, "radius": 20.0}
    heap_layout = {
        "start_y": 50.0,
        "level_height": 70.0,
        "radius": 22.0,
        "cell_x": 40.0,
        "cell_y": 420.0,
        "cell_pitch": 50.0,
        "cell_size": 44.0,
    }
    hash_layout = {
        "start_x": 50.0,
        "start_y": 40.0,
        "bucket_width": 60.0,
        "bucket_height": 40.0,
        "chain_width": 50.0,
        "chain_height": 35.0,
        "gap_x": 20.0,
        "gap_y": 30.0,
        "enter_offset": 15.0,
    }
    hash_table_size = 10

    graph_layout = {
        "spawn_x": 400.0,
        "spawn_y": 300.0,
        "jitter": 50.0,
        "radius": 25.0,
        "seed": 0,
    }
    heap_min_mode = True

    @classmethod
    def delay_for(cls, family: str) -> float:
        """Return the step delay in seconds for ``family``."""
        return float(cls.step_delay[family])

    @classmethod
    def load_from_file(cls, path: str) -> None:
        """Load configuration values from a JSON or YAML file.

        Only keys that already exist as (non-callable) attributes on
        ``Config`` are assigned. Nested dictionaries are merged when the existing attribute is
        also a ``dict``. Files ending in ``.yaml`` or ``.yml`` are parsed with
        :func:`yaml.safe_load`; anything else is read as JSON.

        Parameters
        ----------
        path:
            Path to the configuration file.
        """
        if not os.path.exists(path):
            raise FileNotFoundError(path)
        data = _read_mapping(path)
        cls.config_file = os.path.abspath(path)

        for key, value in data.items():
            if not hasattr(cls, key) or key.startswith("_"):
                continue
            current = getattr(cls, key)
            if callable(current):
                continue
            if isinstance(current, dict) and isinstance(value, dict):
                current.update(value)
            else:
                setattr(cls, key, value)


def _read_mapping(path: str) -> dict:
    if path.endswith((".yaml", ".yml")):
        import yaml

        with open(path) as f:
            data = yaml.safe_load(f) or {}
    else:
        import json

        with open(path) as f:
            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("configuration file must contain a mapping")
    return data


def load_config(path: str) -> dict:
    """Load configuration from ``path`` and return the data."""
    Config.load_from_file(path)
    return _read_mapping(path)
