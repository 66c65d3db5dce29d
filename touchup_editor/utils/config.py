import json
import logging
from pathlib import Path

from touchup_editor.utils.helpers import hex_to_rgb, rgb_to_hex
from touchup_editor.utils.validators import validate_diameter, validate_opacity, validate_tolerance

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".touchup_editor_config.json"
MAX_RECENT = 5


class AppConfig:
    def __init__(self, path: Path | None = None):
        self.path = path or DEFAULT_PATH
        self._set_defaults()
        self._load()

    def _load(self):
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            self.recent_files = [str(p) for p in data.get("recent_files", [])][:MAX_RECENT]
            self.theme = str(data.get("theme", "System"))
            self.color = hex_to_rgb(str(data.get("color", "#ffffff")))
            self.brush_diameter = validate_diameter(data.get("brush_diameter", 10))
            self.opacity = validate_opacity(data.get("opacity", 1.0))
            self.tolerance = validate_tolerance(data.get("tolerance", 30))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable config %s: %s", self.path, e)
            self._set_defaults()

    def _set_defaults(self):
        self.recent_files: list[str] = []
        self.theme: str = "System"
        self.color: tuple[int, int, int] = (255, 255, 255)
        self.brush_diameter: int = 10
        self.opacity: float = 1.0
        self.tolerance: int = 30

    def add_recent(self, path: str | Path):
        p = str(Path(path))
        if p in self.recent_files:
            self.recent_files.remove(p)
        self.recent_files.insert(0, p)
        self.recent_files = self.recent_files[:MAX_RECENT]

    def remember_tools(self, tool_config):
        self.color = tool_config.color
        self.brush_diameter = tool_config.brush_diameter
        self.opacity = tool_config.opacity
        self.tolerance = tool_config.tolerance

    def save(self):
        data = {
            "recent_files": self.recent_files[:MAX_RECENT],
            "theme": self.theme,
            "color": rgb_to_hex(self.color),
            "brush_diameter": self.brush_diameter,
            "opacity": self.opacity,
            "tolerance": self.tolerance,
        }
        try:
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write config %s: %s", self.path, e)
