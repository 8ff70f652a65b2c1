"""Loaders and lookup catalogs for game master-data tables stored as JSON."""

__version__ = "0.1.0"