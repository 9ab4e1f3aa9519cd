import logging
from collections import deque

log = logging.getLogger("taskboard.ui.toast")


class Toast:
    """Notification surface for errors the user has to see."""

    def __init__(self, limit: int = 5):
        self.messages: deque[str] = deque(maxlen=limit)

    def show(self, message: str, level: int = logging.ERROR) -> None:
        log.log(level, "Toast: %s", message)
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()
