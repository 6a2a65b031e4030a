"""Colour palette shared by the drawing surfaces."""

DEFAULT_STYLES = {
    "idle": {"fill": "#1c1c1e", "stroke": "#d1d1d6", "text": "#ffffff", "width": 3},
    "active": {"fill": "#ffcc00", "stroke": "#ff9500", "text": "#1c1c1e", "width": 4},
    "frontier": {"fill": "#555555", "stroke": "#d1d1d6", "text": "#ffffff", "width": 3},
    "visited": {"fill": "#34c759", "stroke": "#248a3d", "text": "#ffffff", "width": 3},
    "traversed": {"fill": "#ffffff", "stroke": "#007aff", "text": "#1c1c1e", "width": 6},
    "mst": {"fill": "#ffffff", "stroke": "#af52de", "text": "#1c1c1e", "width": 6},
    "compare": {"fill": "#ff9500", "stroke": "#ff9500", "text": "#ffffff", "width": 3},
    "inserted": {"fill": "#34c759", "stroke": "#34c759", "text": "#ffffff", "width": 4},
    "found": {"fill": "#34c759", "stroke": "#248a3d", "text": "#ffffff", "width": 4},
    "error": {"fill": "#ff3b30", "stroke": "#c4271e", "text": "#ffffff", "width": 4},
}

FOCUS_RING = {"stroke": "#007aff", "width": 3, "radius": 26}


def style(name: str | None) -> dict:
    """Return the palette entry for ``name``, falling back to ``idle``."""
    if name is None:
        return DEFAULT_STYLES["idle"]
    return DEFAULT_STYLES.get(name, DEFAULT_STYLES["idle"])
