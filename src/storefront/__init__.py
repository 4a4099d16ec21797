"""
Storefront

Catalog browsing and package install dispatch for the app store client.
"""

__version__ = "1.0.0"

from .models import App, CatalogSnapshot  # noqa: E402
from .config import StoreConfig  # noqa: E402
from .client import CatalogClient  # noqa: E402
from .catalog_store import CatalogStore, LoadState, LoadOutcome  # noqa: E402
from .navigation import NavigationController, ViewState, ViewMode, Carousel  # noqa: E402
from .installer import (  # noqa: E402
    InstallDispatcher, InstallRequest, InstallHandler, IntentFlag,
    XdgOpenHandler, AdbInstallHandler,
)
from .session import StoreSession  # noqa: E402

__all__ = [
    "App",
    "CatalogSnapshot",
    "StoreConfig",
    "CatalogClient",
    "CatalogStore",
    "LoadState",
    "LoadOutcome",
    "NavigationController",
    "ViewState",
    "ViewMode",
    "Carousel",
    "InstallDispatcher",
    "InstallRequest",
    "InstallHandler",
    "IntentFlag",
    "XdgOpenHandler",
    "AdbInstallHandler",
    "StoreSession",
]
