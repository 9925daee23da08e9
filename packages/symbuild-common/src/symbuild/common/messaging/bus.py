from typing import Any, Optional

from .protocols import Renderer
from .store import MessageStore

LEVELS = {
    "debug": 10,
    "info": 20,
    "success": 25,
    "warning": 30,
    "error": 40,
}


class MessageBus:
    """
    Routes semantic message ids to a renderer.

    Callers never format user-facing text themselves: they emit an id plus
    parameters, the store resolves the template and the renderer draws it.
    Messages below the configured level are dropped.
    """

    def __init__(self, store: MessageStore, level: str = "info"):
        self._store = store
        self._renderer: Optional[Renderer] = None
        self._threshold = LEVELS[level]

    @property
    def store(self) -> MessageStore:
        return self._store

    def set_renderer(self, renderer: Optional[Renderer]) -> None:
        self._renderer = renderer

    def set_level(self, level: str) -> None:
        if level not in LEVELS:
            raise ValueError(f"Unknown message level: {level}")
        self._threshold = LEVELS[level]

    def is_enabled(self, level: str) -> bool:
        return LEVELS[level] >= self._threshold

    def render_to_string(self, msg_id: str, **kwargs: Any) -> str:
        return self._store.get(msg_id, **kwargs)

    def _render(self, level: str, msg_id: str, **kwargs: Any) -> None:
        if self._renderer is None or not self.is_enabled(level):
            return
        message = self._store.get(msg_id, **kwargs)
        self._renderer.render(message, level)

    def debug(self, msg_id: str, **kwargs: Any) -> None:
        self._render("debug", msg_id, **kwargs)

    def info(self, msg_id: str, **kwargs: Any) -> None:
        self._render("info", msg_id, **kwargs)

    def success(self, msg_id: str, **kwargs: Any) -> None:
        self._render("success", msg_id, **kwargs)

    def warning(self, msg_id: str, **kwargs: Any) -> None:
        self._render("warning", msg_id, **kwargs)

    def error(self, msg_id: str, **kwargs: Any) -> None:
        self._render("error", msg_id, **kwargs)
