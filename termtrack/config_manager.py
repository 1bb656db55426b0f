"""
Configuration manager.
Starts from built-in defaults and overlays a user TOML file.
"""

import copy
import logging
from pathlib import Path

import tomlkit

log = logging.getLogger("termtrack.config")

CONFIG_DIR = Path(__file__).parent.resolve()
CONFIG_FILE = CONFIG_DIR / "config.toml"

DEFAULTS = {
    "feed": {
        "host": "localhost",
        "port": 30003,
    },
    "map": {
        "shapefile": "mapdata/ne_10m_admin_1_states_provinces.shp",
        "airports": "airportdata/ne_10m_airports.shp",
    },
    "render": {
        "fps": 20,
        "char_aspect": 1.9,
        "vertex_step": 3,
    },
    "view": {
        "pan_fraction": 0.1,
        "zoom_factor": 1.2,
        "recenter_zoom": 25.0,
        "auto_recenter": True,
    },
}


# Options that must be > 0
POSITIVE_OPTIONS = {
    ("render", "char_aspect"),
    ("view", "pan_fraction"),
    ("view", "zoom_factor"),
    ("view", "recenter_zoom"),
}


def _coerce(default, value):
    """Convert a TOML value to the type of its default."""
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise TypeError(f"expected true or false, got {value!r}")
        return value
    if isinstance(default, int):
        return int(value)
    if isinstance(default, float):
        return float(value)
    return str(value)


def _validate(section, key, value):
    coerced = _coerce(DEFAULTS[section][key], value)
    if (section, key) in POSITIVE_OPTIONS and not coerced > 0:
        raise ValueError(f"[{section}] {key} must be positive, got {value!r}")
    return coerced


class ConfigManager:

    def __init__(self, path=None):
        self.path = Path(path) if path is not None else CONFIG_FILE
        self._values = copy.deepcopy(DEFAULTS)
        self._load()

    # --- Loading ---

    def _load(self):
        if not self.path.exists():
            return

        try:
            raw = self.path.read_text(encoding="utf-8")
            doc = tomlkit.parse(raw)
        except Exception as e:
            log.warning("Could not read %s, using defaults: %s", self.path, e)
            return

        self._apply_toml(doc)

    def _apply_toml(self, doc):
        doc = doc.unwrap()
        for section, defaults in self._values.items():
            table = doc.get(section)
            if not isinstance(table, dict):
                continue
            for key, val in table.items():
                if key not in defaults:
                    log.warning("Ignoring unknown option [%s] %s", section, key)
                    continue
                try:
                    defaults[key] = _validate(section, key, val)
                except (TypeError, ValueError):
                    log.warning("Bad value for [%s] %s: %r", section, key, val)

    def override(self, section: str, key: str, value):
        """Apply a command-line override. ``None`` leaves the value alone."""
        if value is None:
            return
        self._values[section][key] = _validate(section, key, value)

    # --- Read API ---

    @property
    def feed(self):
        return self._values["feed"]

    @property
    def map(self):
        return self._values["map"]

    @property
    def render(self):
        return self._values["render"]

    @property
    def view(self):
        return self._values["view"]

    @property
    def frame_interval(self) -> float:
        return 1.0 / max(1, self.render["fps"])
