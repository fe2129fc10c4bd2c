"""User notification sink for weather alerts."""
import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

ALERT_TITLE = "Weather Alert"


class NotifierBase(ABC):
    """Abstract notification facility with a browser-style permission state."""

    DEFAULT = "default"
    GRANTED = "granted"
    DENIED = "denied"

    def __init__(self, permission: str = DEFAULT):
        self.permission = permission

    @abstractmethod
    def request_permission(self) -> str:
        """Ask the user for permission; returns the new permission state."""
        pass

    @abstractmethod
    def show(self, title: str, body: str) -> None:
        pass


class LogNotifier(NotifierBase):
    """Notifier that writes alerts to the log. Only the latest alert is kept; permission is granted on request."""

    def __init__(self, permission: str = NotifierBase.DEFAULT):
        super().__init__(permission)
        self.last: Optional[Tuple[str, str]] = None

    def request_permission(self) -> str:
        self.permission = self.GRANTED
        return self.permission

    def show(self, title: str, body: str) -> None:
        self.last = (title, body)
        logging.warning(f"{title}: {body}")


def notify_hazards(notifier: NotifierBase, hazards: Sequence[str]) -> bool:
    """
    Show a weather alert for the given hazards.

    Nothing happens for an empty hazard list or a denied permission. With
    permission still undecided, this only requests it.

    Returns:
        True if a notification was shown
    """
    if not hazards:
        return False
    if notifier.permission == NotifierBase.GRANTED:
        notifier.show(ALERT_TITLE, " • ".join(hazards))
        return True
    if notifier.permission != NotifierBase.DENIED:
        logging.info("Requesting notification permission")
        notifier.request_permission()
    return False
