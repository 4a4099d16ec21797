"""
Storefront GUI

PyQt6 window for browsing the catalog and installing apps.
"""

from .store_window import main, StoreWindow

__all__ = ["main", "StoreWindow"]
