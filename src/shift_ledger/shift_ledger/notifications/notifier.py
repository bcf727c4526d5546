from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from ..employees.model import Identity

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Fire-and-forget delivery of workflow events to approvers."""

    @abstractmethod
    def notify(self, recipients: Sequence[Identity], payload: dict) -> None:
        ...


class LoggingNotifier(Notifier):
    """Records notifications in the application log instead of pushing them."""

    def notify(self, recipients: Sequence[Identity], payload: dict) -> None:
        targets = ", ".join(r.user_id for r in recipients) or "-"
        logger.info("Notify [%s]: %s", targets, payload)
