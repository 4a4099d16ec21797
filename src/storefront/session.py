"""
Store Session - wires the storefront core together for one process run.
"""

from __future__ import annotations

import logging
from typing import Optional

from .catalog_store import CatalogStore
from .client import CatalogClient
from .config import StoreConfig
from .installer import InstallDispatcher, InstallHandler
from .navigation import NavigationController

logger = logging.getLogger(__name__)


class StoreSession:
    """
    One storefront session.

    Builds the client, store, navigation and dispatcher once. The entry
    point calls start() a single time to load the catalog.
    """

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        client: Optional[CatalogClient] = None,
        handler: Optional[InstallHandler] = None,
    ):
        self.config = config or StoreConfig()
        self.client = client or CatalogClient(self.config)
        self.store = CatalogStore(self.client, display_delay=self.config.display_delay)
        self.navigation = NavigationController()
        self.dispatcher = InstallDispatcher(handler)

    async def start(self) -> None:
        """Load the session's catalog."""
        logger.info(f"Starting store session against {self.config.catalog_url}")
        await self.store.load()

    def install_selected(self) -> None:
        """Dispatch an install for the app shown in the detail view."""
        app = self.navigation.selected_app
        if app is None:
            logger.warning("Install requested with no app selected")
            return
        self.dispatcher.dispatch_install(app)
