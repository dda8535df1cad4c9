"""Navigation between the home and login views."""
import logging
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger(__name__)


class Route(str, Enum):
    HOME = "/"
    LOGIN = "/login"


class Navigator:
    """Holds the current location and notifies listeners when it changes."""

    def __init__(self, location: Route = Route.HOME) -> None:
        self.location = location
        self._listeners: list[Callable[[Route], None]] = []

    def add_listener(self, listener: Callable[[Route], None]) -> None:
        self._listeners.append(listener)

    def push(self, route: Route) -> None:
        """Navigate to route; listeners run even if the location is unchanged."""
        logger.debug("Navigating to %s", route.value)
        self.location = route
        for listener in list(self._listeners):
            listener(route)
