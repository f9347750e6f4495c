"""Per-operator screen state.

Each signed-in user has an :class:`AppState`: which screen is showing,
the sales cart, and which screens have an action outstanding. A control
stays disabled while its action runs; a second trigger raises
:class:`ActionInProgress` instead of queueing.
"""
from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from uuid import UUID

from duka.app.core.errors import ActionInProgress, InvalidTransition
from duka.app.services.cart import Cart

logger = logging.getLogger(__name__)


class Screen(str, enum.Enum):
    LOGIN = "login"
    DASHBOARD = "dashboard"
    SALES = "sales"
    SALES_CART = "sales_cart"
    INVENTORY = "inventory"
    PURCHASE = "purchase"
    FINANCE = "finance"


# Forward moves. LOGIN -> DASHBOARD is only reachable through sign-in.
TRANSITIONS: dict[Screen, frozenset[Screen]] = {
    Screen.LOGIN: frozenset(),
    Screen.DASHBOARD: frozenset({Screen.SALES, Screen.INVENTORY, Screen.PURCHASE, Screen.FINANCE}),
    Screen.SALES: frozenset({Screen.SALES_CART}),
    Screen.SALES_CART: frozenset(),
    Screen.INVENTORY: frozenset(),
    Screen.PURCHASE: frozenset(),
    Screen.FINANCE: frozenset(),
}

BACK: dict[Screen, Screen] = {
    Screen.SALES: Screen.DASHBOARD,
    Screen.SALES_CART: Screen.SALES,
    Screen.INVENTORY: Screen.DASHBOARD,
    Screen.PURCHASE: Screen.DASHBOARD,
    Screen.FINANCE: Screen.DASHBOARD,
}

# What each screen loads when it opens
INITIAL_FETCH: dict[Screen, tuple[str, ...]] = {
    Screen.LOGIN: (),
    Screen.DASHBOARD: (),
    Screen.SALES: ("products",),
    Screen.SALES_CART: ("products", "customers"),
    Screen.INVENTORY: ("products",),
    Screen.PURCHASE: ("suppliers", "products"),
    Screen.FINANCE: ("financial_report",),
}


@dataclass
class AppState:
    user_id: UUID
    screen: Screen = Screen.DASHBOARD
    cart: Cart = field(default_factory=Cart)
    in_flight: set[Screen] = field(default_factory=set)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def navigate(self, target: Screen) -> tuple[str, ...]:
        """Move to *target* and return the fetches it triggers."""
        if target not in TRANSITIONS[self.screen]:
            raise InvalidTransition(
                f"Cannot go from {self.screen.value} to {target.value}",
                key="errors.invalid_transition",
                source=self.screen.value,
                target=target.value,
            )
        self.screen = target
        return INITIAL_FETCH[target]

    def back(self) -> tuple[str, ...]:
        target = BACK.get(self.screen)
        if target is None:
            raise InvalidTransition(
                f"No screen behind {self.screen.value}",
                key="errors.invalid_transition",
                source=self.screen.value,
                target="back",
            )
        self.screen = target
        return INITIAL_FETCH[target]

    def begin_action(self, screen: Screen) -> None:
        with self._lock:
            if screen in self.in_flight:
                raise ActionInProgress(
                    f"An action on {screen.value} is already running",
                    key="errors.action_in_progress",
                    screen=screen.value,
                )
            self.in_flight.add(screen)

    def end_action(self, screen: Screen) -> None:
        with self._lock:
            self.in_flight.discard(screen)

    def is_busy(self, screen: Screen) -> bool:
        return screen in self.in_flight

    @contextmanager
    def action(self, screen: Screen) -> Iterator[None]:
        self.begin_action(screen)
        try:
            yield
        finally:
            self.end_action(screen)


class SessionRegistry:
    """In-memory user id -> AppState map. Single process only."""

    def __init__(self) -> None:
        self._states: dict[UUID, AppState] = {}
        self._lock = threading.Lock()

    def sign_in(self, user_id: UUID) -> AppState:
        """Start a fresh state on the dashboard, replacing any previous one."""
        state = AppState(user_id=user_id)
        with self._lock:
            self._states[user_id] = state
        logger.info("Session started for %s", user_id)
        return state

    def get(self, user_id: UUID) -> AppState:
        """State for a signed-in user; a valid token without one resumes at the dashboard."""
        with self._lock:
            state = self._states.get(user_id)
            if state is None:
                state = self._states[user_id] = AppState(user_id=user_id)
            return state

    def sign_out(self, user_id: UUID) -> None:
        with self._lock:
            self._states.pop(user_id, None)
        logger.info("Session discarded for %s", user_id)

    def __contains__(self, user_id: object) -> bool:
        with self._lock:
            return user_id in self._states

    def clear(self) -> None:
        with self._lock:
            self._states.clear()


sessions = SessionRegistry()
