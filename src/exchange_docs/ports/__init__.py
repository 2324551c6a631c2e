"""Ports - interfaces for external dependencies."""

from .images import LogoLoaderPort
from .metadata import MetadataPort
from .rendering import DocumentRenderer, RenderingCapability
from .storage import StoragePort

__all__ = [
    "DocumentRenderer",
    "LogoLoaderPort",
    "MetadataPort",
    "RenderingCapability",
    "StoragePort",
]
