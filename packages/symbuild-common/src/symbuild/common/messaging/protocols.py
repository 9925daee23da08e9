from typing import Protocol


class Renderer(Protocol):
    """
    Draws an already-resolved message somewhere (terminal, log, test spy).
    """

    def render(self, message: str, level: str) -> None: ...
