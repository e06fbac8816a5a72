"""Display state of the map currently shown to the user."""

from typing import Callable, List, Optional

from .logger import get_logger

logger = get_logger(__name__)

MapListener = Callable[[str], None]


class MapDisplayState:
    """
    Holds the URL of the currently shown map and notifies listeners on change.

    The dispatcher only pushes new URLs in through ``update``; presentation code reads
    ``current_url`` or subscribes.
    """

    def __init__(self) -> None:
        self.current_url: Optional[str] = None
        self._listeners: List[MapListener] = []

    def subscribe(self, listener: MapListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it again."""
        if listener not in self._listeners:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, url: str) -> None:
        if url == self.current_url:
            return
        self.current_url = url
        for listener in list(self._listeners):
            try:
                listener(url)
            except Exception:
                logger.exception("Map display listener %r failed.", listener)
