"""Interactive raster touch-up editor: brush, eraser, bucket fill, picker, pan/zoom, undo."""

from touchup_editor.core.editor_tools import HistoryStack, ToolConfig, ToolType
from touchup_editor.core.session import EditorSession
from touchup_editor.core.viewport import ViewportTransform

__version__ = "0.1.0"

__all__ = ["EditorSession", "HistoryStack", "ToolConfig", "ToolType", "ViewportTransform"]
