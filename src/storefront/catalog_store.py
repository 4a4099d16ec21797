"""
Catalog Store - owns the catalog fetch lifecycle and the session snapshot.

The store loads exactly once per session. Every outcome ends the loading
phase; fetch and decode failures are logged and leave the catalog as it
was (empty) without surfacing an error to consumers.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, List, Optional, Tuple

from common.exceptions import CatalogError

from .client import CatalogClient
from .models import App

logger = logging.getLogger(__name__)


class LoadState(Enum):
    """Catalog fetch lifecycle."""
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"


class LoadOutcome(Enum):
    """How the one catalog fetch ended."""
    LOADED = "loaded"                    # success == true, catalog replaced
    SERVER_DECLINED = "server_declined"  # success == false, payload ignored
    FETCH_FAILED = "fetch_failed"        # transport or decode failure


StoreListener = Callable[["CatalogStore"], None]


class CatalogStore:
    """
    In-memory catalog for one session.

    Consumers poll current_catalog()/is_loading() or register a listener
    that is called once when loading finishes.
    """

    def __init__(self, client: CatalogClient, display_delay: Optional[float] = None):
        """
        Initialize CatalogStore.

        Args:
            client: Client used for the single catalog fetch
            display_delay: Minimum time the loading state is shown, in
                seconds. Defaults to the client's configured delay.
        """
        self._client = client
        self._display_delay = (
            client.config.display_delay if display_delay is None else display_delay
        )
        self._catalog: Tuple[App, ...] = ()
        self._state = LoadState.IDLE
        self._outcome: Optional[LoadOutcome] = None
        self._error: Optional[CatalogError] = None
        self._listeners: List[StoreListener] = []

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def last_outcome(self) -> Optional[LoadOutcome]:
        """Outcome of the fetch, None until it finishes."""
        return self._outcome

    @property
    def last_error(self) -> Optional[CatalogError]:
        """The suppressed fetch error, if the fetch failed."""
        return self._error

    def current_catalog(self) -> Tuple[App, ...]:
        """Get the current catalog in server order."""
        return self._catalog

    def is_loading(self) -> bool:
        """True until the session's catalog load has finished."""
        return self._state is not LoadState.LOADED

    def add_listener(self, callback: StoreListener) -> None:
        """Register a callback invoked once loading has finished."""
        self._listeners.append(callback)

    async def load(self) -> None:
        """
        Run the session's single catalog load.

        Never raises for fetch problems. Calling it again after the first
        call is ignored.
        """
        if self._state is not LoadState.IDLE:
            logger.warning(f"Catalog load already {self._state.value}, ignoring")
            return

        self._state = LoadState.LOADING
        logger.debug(f"Catalog loading, display delay {self._display_delay}s")

        if self._display_delay > 0:
            await asyncio.sleep(self._display_delay)

        try:
            snapshot = await self._client.fetch()
        except CatalogError as e:
            self._error = e
            self._outcome = LoadOutcome.FETCH_FAILED
            logger.warning(f"Catalog fetch failed, keeping current catalog: {e}")
        else:
            if snapshot.success:
                self._catalog = snapshot.apps
                self._outcome = LoadOutcome.LOADED
                logger.info(f"Loaded {len(snapshot.apps)} apps from catalog")
            else:
                self._outcome = LoadOutcome.SERVER_DECLINED
                logger.warning(
                    f"Catalog server reported failure, ignoring {len(snapshot.apps)} apps"
                )

        self._state = LoadState.LOADED
        self._notify()

    def _notify(self) -> None:
        for callback in self._listeners:
            try:
                callback(self)
            except Exception as e:
                logger.warning(f"Catalog listener error: {e}")
