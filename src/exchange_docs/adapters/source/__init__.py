"""Data file adapters."""

from .yaml_loader import DataFile, load_data_file

__all__ = ["DataFile", "load_data_file"]
