"""
Navigation Controller and Carousel State.

Manages list/detail view selection with proper validation, and the
screenshot carousel scoped to one detail view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from common.exceptions import NavigationError

from .models import App

logger = logging.getLogger(__name__)


class ViewMode(Enum):
    """Which screen is shown."""
    LIST = "list"
    DETAIL = "detail"


class NavTransition(Enum):
    """Possible navigation transitions."""
    SELECT = auto()
    BACK = auto()


# Format: {current_mode: {transition: target_mode}}
VALID_TRANSITIONS: Dict[ViewMode, Dict[NavTransition, ViewMode]] = {
    ViewMode.LIST: {
        NavTransition.SELECT: ViewMode.DETAIL,
    },
    ViewMode.DETAIL: {
        NavTransition.SELECT: ViewMode.DETAIL,
        NavTransition.BACK: ViewMode.LIST,
    },
}


@dataclass(frozen=True)
class ViewState:
    """Snapshot of the navigation state."""
    mode: ViewMode = ViewMode.LIST
    selected_app: Optional[App] = None

    @property
    def is_detail(self) -> bool:
        return self.mode is ViewMode.DETAIL


class Carousel:
    """
    Paged screenshot viewer for one detail view.

    Pages can only be reached by index within range; there is no
    wraparound and no automatic advance.
    """

    def __init__(self, screenshots: Sequence[str]):
        self._pages: Tuple[str, ...] = tuple(screenshots)
        self._index = 0

    @property
    def pages(self) -> Tuple[str, ...]:
        return self._pages

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_screenshot(self) -> Optional[str]:
        """Reference shown on the current page, None without pages."""
        if not self._pages:
            return None
        return self._pages[self._index]

    def go_to_page(self, page: int) -> bool:
        """
        Jump to a page.

        Returns:
            True if the page exists; otherwise the index is left unchanged.
        """
        if not 0 <= page < self.page_count:
            logger.debug(f"Rejected carousel page {page} of {self.page_count}")
            return False
        self._index = page
        return True

    def swipe_next(self) -> bool:
        return self.go_to_page(self._index + 1)

    def swipe_previous(self) -> bool:
        return self.go_to_page(self._index - 1)


NavigationListener = Callable[[ViewState], None]


class NavigationController:
    """
    Two-state list/detail navigation.

    Holds no copy of the catalog, only the selected app. There is no
    history: going back always returns to the list.
    """

    def __init__(self, strict: bool = False):
        """
        Initialize NavigationController.

        Args:
            strict: Raise NavigationError on invalid transitions instead
                of ignoring them.
        """
        self.strict = strict
        self._state = ViewState()
        self._carousel: Optional[Carousel] = None
        self._listeners: List[NavigationListener] = []

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def selected_app(self) -> Optional[App]:
        return self._state.selected_app

    @property
    def carousel(self) -> Optional[Carousel]:
        """Carousel of the active detail view, None in list view."""
        return self._carousel

    def can_transition(self, transition: NavTransition) -> bool:
        """Check if a transition is valid from the current mode."""
        return transition in VALID_TRANSITIONS.get(self._state.mode, {})

    def select_app(self, app: App) -> ViewState:
        """Show the detail view for an app, replacing any current one."""
        self._transition(NavTransition.SELECT, app)
        self._carousel = Carousel(app.screenshots)
        self._notify()
        return self._state

    def go_back(self) -> ViewState:
        """Return to the list view. Ignored when already there."""
        if not self._transition(NavTransition.BACK, None):
            return self._state
        self._carousel = None
        self._notify()
        return self._state

    def add_listener(self, callback: NavigationListener) -> None:
        """Register a callback called with the new state on every transition."""
        self._listeners.append(callback)

    def _transition(self, transition: NavTransition, app: Optional[App]) -> bool:
        if not self.can_transition(transition):
            if self.strict:
                raise NavigationError(self._state.mode.value, transition.name.lower())
            logger.debug(f"Ignoring {transition.name} in {self._state.mode.name}")
            return False

        old_mode = self._state.mode
        new_mode = VALID_TRANSITIONS[old_mode][transition]
        self._state = ViewState(mode=new_mode, selected_app=app)

        target = f" (app {app.id})" if app is not None else ""
        logger.info(f"Navigation: {old_mode.name} -> {new_mode.name}{target}")
        return True

    def _notify(self) -> None:
        for callback in self._listeners:
            try:
                callback(self._state)
            except Exception as e:
                logger.warning(f"Navigation listener error: {e}")
