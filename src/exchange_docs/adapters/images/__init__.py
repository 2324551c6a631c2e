"""Logo loading adapters."""

from .httpx_loader import HttpxLogoLoader

__all__ = ["HttpxLogoLoader"]
