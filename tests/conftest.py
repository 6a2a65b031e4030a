import sys
from copy import deepcopy
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from Struct_Replay.config import Config

_CONFIG_KEYS = [
    k
    for k, v in vars(Config).items()
    if not k.startswith("_") and not isinstance(v, (classmethod, staticmethod))
    and not callable(v)
]


@pytest.fixture(autouse=True)
def _restore_config() -> None:
    """Undo ``Config`` changes made by a test."""

    saved = {k: deepcopy(getattr(Config, k)) for k in _CONFIG_KEYS}
    yield
    for key, value in saved.items():
        setattr(Config, key, value)
