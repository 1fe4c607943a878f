"""User-visible notices."""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Protocol

from medianode.domain.models import Notice

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Interface for publishing user-visible notices."""

    def notify(self, notice: Notice) -> None:
        """Publish a notice to the user."""


@dataclass
class NoticeBoard(Notifier):
    """Bounded in-memory feed of notices awaiting display."""

    max_size: int = 50
    _pending: deque[Notice] = field(init=False)

    def __post_init__(self) -> None:
        self._pending = deque(maxlen=self.max_size)

    def notify(self, notice: Notice) -> None:
        """Queue a notice and log it."""
        level = logging.WARNING if notice.variant == "destructive" else logging.INFO
        logger.log(level, "%s: %s", notice.title, notice.description)
        self._pending.append(notice)

    def drain(self) -> list[Notice]:
        """Return and clear all pending notices."""
        notices = list(self._pending)
        self._pending.clear()
        return notices
