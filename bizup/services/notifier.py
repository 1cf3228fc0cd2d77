import logging
from typing import List

from bizup.schemas.response import Notice

log = logging.getLogger("bizup.notifier")


class Notifier:
    """Collects transient user-facing messages (toasts) raised by tab actions."""

    def __init__(self):
        self.notices: List[Notice] = []

    def success(self, message: str) -> None:
        log.info(message)
        self.notices.append(Notice(level="success", message=message))

    def error(self, message: str) -> None:
        log.warning(message)
        self.notices.append(Notice(level="error", message=message))

    def drain(self) -> List[Notice]:
        """Returns everything collected so far and starts over."""
        notices, self.notices = self.notices, []
        return notices
