"""Network editing, macro recording/replay and trailer coupling."""

from road_rails.editor.editor import EditAction, NetworkEditor, transform_segment

__all__ = ["EditAction", "NetworkEditor", "transform_segment"]
