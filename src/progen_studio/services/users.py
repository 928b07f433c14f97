"""Live mirror of a user's quota record."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol

from progen_studio.domain.models import UserQuotaRecord

logger = logging.getLogger(__name__)

Unsubscribe = Callable[[], Awaitable[None]]
RecordListener = Callable[[UserQuotaRecord], None]


class UserRecordStore(Protocol):
    """Key-value store for user quota records with change notification."""

    async def subscribe(self, user_id: str, on_change: RecordListener) -> Unsubscribe:
        """Deliver the full record now and on every change until unsubscribed."""

    async def update(self, user_id: str, fields: dict[str, object]) -> None:
        """Merge the given fields into the user's record."""


@dataclass
class UserRecordMirror:
    """Holds the most recently delivered record for one user."""

    user_id: str
    _current: UserQuotaRecord | None = None
    _unsubscribe: Unsubscribe | None = None
    _released: bool = False

    @classmethod
    async def subscribe(
        cls, store: UserRecordStore, user_id: str
    ) -> "UserRecordMirror":
        """Subscribe to a user's record and return the live mirror."""
        mirror = cls(user_id=user_id)
        mirror._unsubscribe = await store.subscribe(user_id, mirror._on_change)
        return mirror

    @property
    def current(self) -> UserQuotaRecord | None:
        """Return the latest record received, if any."""
        return self._current

    @property
    def released(self) -> bool:
        return self._released

    async def unsubscribe(self) -> None:
        """Release the store subscription. Safe to call more than once."""
        if self._released:
            return
        self._released = True
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            await unsubscribe()
            logger.info("Released record subscription for user %s", self.user_id)

    def _on_change(self, record: UserQuotaRecord) -> None:
        if self._released or record.id != self.user_id:
            return
        self._current = record
