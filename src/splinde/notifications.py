# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Toast notifications acknowledging tree edits.

Notifications are short-lived: each carries a duration after which it drops
out of :meth:`NotificationCenter.active`. A duration of 0 keeps it until it
is dismissed. Expiry is checked lazily against a monotonic clock, so there
are no timers to cancel and nothing in the tree core waits on them.
"""

from __future__ import annotations

import itertools
import logging
import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 3000


class Severity(str, Enum):
    """Severity tag shown with a notification."""

    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A single user-visible acknowledgment."""

    id: str
    message: str
    severity: Severity
    duration_ms: int
    created_at: float

    @property
    def persistent(self) -> bool:
        return self.duration_ms == 0

    def expires_at(self) -> float | None:
        if self.persistent:
            return None
        return self.created_at + self.duration_ms / 1000

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "message": self.message,
            "severity": self.severity.value,
            "duration_ms": self.duration_ms,
        }


class NotificationCenter:
    """Holds the notifications currently on screen.

    Args:
        default_duration_ms: Duration used when ``emit`` is not given one
        clock: Monotonic clock in seconds (injectable for tests)
    """

    def __init__(
        self,
        default_duration_ms: int = DEFAULT_DURATION_MS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if default_duration_ms < 0:
            raise ValueError(f"default_duration_ms must be >= 0, got {default_duration_ms}")
        self.default_duration_ms = default_duration_ms
        self._clock = clock
        self._counter = itertools.count(1)
        self._notifications: list[Notification] = []

    def _next_id(self) -> str:
        # wall time + counter + random suffix keeps ids unique across restarts
        return f"{int(time.time() * 1000)}-{next(self._counter)}-{uuid.uuid4().hex[:9]}"

    def emit(
        self,
        message: str,
        severity: Severity | str = Severity.INFO,
        duration_ms: int | None = None,
    ) -> Notification:
        """Show a notification.

        Raises:
            ValueError: If ``duration_ms`` is negative or the severity unknown
        """
        if duration_ms is None:
            duration_ms = self.default_duration_ms
        if duration_ms < 0:
            raise ValueError(f"duration_ms must be >= 0, got {duration_ms}")

        notification = Notification(
            id=self._next_id(),
            message=message,
            severity=Severity(severity),
            duration_ms=int(duration_ms),
            created_at=self._clock(),
        )
        self._notifications.append(notification)
        logger.debug("Adding notification: %s", notification)
        return notification

    def dismiss(self, notification_id: str) -> bool:
        """Remove a notification; returns False if it was not showing."""
        before = len(self._notifications)
        self._notifications = [n for n in self._notifications if n.id != notification_id]
        removed = len(self._notifications) < before
        if removed:
            logger.debug("Removing notification: %s", notification_id)
        return removed

    def _expire(self) -> None:
        now = self._clock()
        kept = []
        for notification in self._notifications:
            expires_at = notification.expires_at()
            if expires_at is not None and now >= expires_at:
                logger.debug("Notification expired: %s", notification.id)
                continue
            kept.append(notification)
        self._notifications = kept

    def active(self) -> list[Notification]:
        """Notifications still showing, oldest first."""
        self._expire()
        return list(self._notifications)

    def clear(self) -> None:
        self._notifications = []
