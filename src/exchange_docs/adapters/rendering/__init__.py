"""Rendering adapters."""

from .capability import StaticCapability
from .reportlab_renderer import ReportLabRenderer

__all__ = ["ReportLabRenderer", "StaticCapability"]
