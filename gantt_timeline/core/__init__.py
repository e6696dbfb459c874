"""Configuration exports for the Gantt timeline."""

from .config import CONFIG, VIEW_MODES, GanttConfig, ScaleSpec, ViewMode

__all__ = [
    "CONFIG",
    "GanttConfig",
    "ScaleSpec",
    "ViewMode",
    "VIEW_MODES",
]
