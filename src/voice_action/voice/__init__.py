"""Speech capture sources."""

from .capture import ScriptedCapture

__all__ = ["ScriptedCapture"]
